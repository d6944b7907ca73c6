"""Lancement du scraper externe (tinyMediaManager)."""

from nfoorg.adapters.scraper.tmm_runner import ScraperRunner, locate_executable

__all__ = ["ScraperRunner", "locate_executable"]

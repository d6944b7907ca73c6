"""
Adaptateurs de parsing pour NfoOrg.

- NfoReader: Lit les fichiers NFO <movie> / <tvshow>
"""

from nfoorg.adapters.parsing.nfo_reader import NfoReader

__all__ = ["NfoReader"]

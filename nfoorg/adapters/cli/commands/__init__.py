"""Sous-package CLI commands - re-exporte les commandes publiques."""

from nfoorg.adapters.cli.commands.catalog_commands import (
    catalog,
    missing,
    resolve,
    status,
)
from nfoorg.adapters.cli.commands.workflow_commands import (
    ScrapeTarget,
    process_dir,
    process_nfo,
    scrape,
)

__all__ = [
    # workflow
    "ScrapeTarget",
    "process_dir",
    "process_nfo",
    "scrape",
    # catalogue
    "catalog",
    "missing",
    "resolve",
    "status",
]

"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- api/ : Client TMDB (pays de production, nombre de saisons)
- cli/ : Interface ligne de commande (Typer)
- parsing/ : Lecture des fichiers NFO
- scraper/ : Lancement de tinyMediaManager

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
"""

from nfoorg.adapters.file_system import FileSystemAdapter
from nfoorg.adapters.parsing.nfo_reader import NfoReader

__all__ = [
    "FileSystemAdapter",
    "NfoReader",
]

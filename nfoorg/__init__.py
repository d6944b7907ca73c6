"""
NfoOrg - Organisation d'une videotheque a partir des fichiers NFO.

Ce package lit les fichiers NFO produits par le scraper, normalise les genres,
classe chaque titre dans une categorie de destination (pays d'origine, genre),
deplace ou fusionne les repertoires media et tient a jour un catalogue SQLite
avec le suivi des saisons manquantes.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur, exceptions)
- services/ : Couche application (classification, placement, completude, workflow)
- adapters/ : Couche infrastructure (CLI, lecteur NFO, client TMDB, scraper)
- infrastructure/ : Persistance SQLModel
"""

__version__ = "0.1.0"

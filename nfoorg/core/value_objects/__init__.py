"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- Actor : Acteur declare dans un NFO
- NfoRecord : Contenu structure d'un fichier NFO
- Category : Categorie de destination d'un titre
"""

from nfoorg.core.value_objects.category import Category, is_series_category
from nfoorg.core.value_objects.nfo import Actor, NfoRecord

__all__ = [
    "Actor",
    "NfoRecord",
    "Category",
    "is_series_category",
]

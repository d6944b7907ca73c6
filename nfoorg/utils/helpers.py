"""
Fonctions utilitaires partagees dans le projet NfoOrg.

Ce module centralise les fonctions reutilisees a travers le codebase :
- contains_chinese : detection des ideogrammes Han
- translate_genre : traduction d'un genre anglais en chinois simplifie
- extract_resolution : tag de resolution depuis un nom de fichier
- join_list : serialisation des listes pour le catalogue
"""

import re
from typing import Iterable

from nfoorg.utils.constants import GENRE_TRANSLATIONS

# Ideogrammes CJK (bloc principal + extensions A et compatibilite)
_HAN_PATTERN = re.compile(r"[㐀-䶿一-鿿豈-﫿]")

_RESOLUTION_PATTERNS = (
    re.compile(r"(\d{3,4}p)", re.IGNORECASE),
    re.compile(r"(\d{3,4}i)", re.IGNORECASE),
    re.compile(r"(4k|8k)", re.IGNORECASE),
)

_LOWER_GENRE_TRANSLATIONS = {k.lower(): v for k, v in GENRE_TRANSLATIONS.items()}


def contains_chinese(text: str) -> bool:
    """Retourne True si le texte contient au moins un ideogramme Han."""
    if not text:
        return False
    return _HAN_PATTERN.search(text) is not None


def translate_genre(genre: str) -> str:
    """
    Traduit un genre anglais en chinois simplifie.

    Les genres deja en chinois et les genres inconnus sont retournes tels quels
    (sans les espaces en bordure pour les genres reconnus).

    Args:
        genre: Genre tel que lu dans le NFO

    Returns:
        Genre traduit ou inchange.
    """
    stripped = genre.strip()
    if contains_chinese(stripped):
        return stripped
    return _LOWER_GENRE_TRANSLATIONS.get(stripped.lower(), genre)


def extract_resolution(file_name: str) -> str:
    """
    Extrait le tag de resolution d'un nom de fichier.

    Essaie dans l'ordre 1080p/720p..., puis 1080i..., puis 4K/8K.

    Returns:
        Tag en majuscules (ex: "1080P", "4K"), ou "" si absent.
    """
    for pattern in _RESOLUTION_PATTERNS:
        match = pattern.search(file_name)
        if match:
            return match.group(1).upper()
    return ""


def join_list(values: Iterable[str]) -> str:
    """Joint une liste de valeurs avec ', ' (format du catalogue)."""
    return ", ".join(values)

"""
Normalisation des genres d'un fichier NFO.

Les genres anglais sont traduits en chinois simplifie et les balises
<genre> du fichier sont reecrites en place. Le reste du document est
conserve tel quel (pas de reserialisation XML).
"""

import codecs
import re
from pathlib import Path
from xml.sax.saxutils import escape

from loguru import logger

from nfoorg.core.exceptions import ParseError
from nfoorg.core.ports.parser import IMetadataReader
from nfoorg.utils.helpers import contains_chinese, translate_genre

_GENRE_TAG = re.compile(r"[ \t]*<genre>.*?</genre>[ \t]*\r?\n?", re.DOTALL)

_XML_DECLARATION = re.compile(rb"""\A\s*<\?xml[^>]*?\sencoding\s*=\s*["']([A-Za-z0-9._-]+)["']""")

# Balises apres lesquelles les genres sont reinseres, par ordre de preference
_ANCHORS = ("</country>", "</year>", "</title>")

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def declared_encoding(raw: bytes) -> str:
    """
    Encodage du document : BOM, sinon declaration XML, sinon UTF-8.

    Le BOM est conserve a la reecriture (utf-8-sig, utf-16).
    """
    if raw.startswith(codecs.BOM_UTF8):
        return "utf-8-sig"
    if raw.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return "utf-16"
    match = _XML_DECLARATION.match(raw)
    if match:
        return match.group(1).decode("ascii").lower()
    return "utf-8"


def remove_genre_tags(content: str) -> str:
    """Supprime toutes les balises <genre> (avec leur ligne)."""
    return _GENRE_TAG.sub("", content)


def insert_genre_tags(content: str, genres: list[str]) -> str:
    """
    Insere une balise <genre> par genre apres la premiere ancre trouvee.

    Les genres sont places en debut de ligne suivant la fin de l'ancre.
    Sans ancre, le contenu est retourne inchange.
    """
    for anchor in _ANCHORS:
        position = content.find(anchor)
        if position != -1:
            break
    else:
        return content

    line_end = content.find("\n", position)
    if line_end == -1:
        insert_at = position + len(anchor)
        prefix = "\n"
    else:
        insert_at = line_end + 1
        prefix = ""

    tags = "".join(
        f"  <genre>{escape(genre, _XML_ENTITIES)}</genre>\n" for genre in genres
    )
    return content[:insert_at] + prefix + tags + content[insert_at:]


class GenreNormalizer:
    """
    Traduit et reecrit les genres d'un NFO.

    Example:
        normalizer = GenreNormalizer(NfoReader())
        changed = normalizer.normalize(Path("film.nfo"))
    """

    def __init__(self, reader: IMetadataReader) -> None:
        self._reader = reader

    def normalize(self, nfo_path: Path) -> bool:
        """
        Traduit les genres non chinois du fichier.

        Args:
            nfo_path: Chemin du fichier NFO

        Returns:
            True si le fichier a ete reecrit.

        Raises:
            ParseError: Si le NFO est illisible.
            OSError: Si la reecriture echoue.
        """
        record = self._reader.parse(nfo_path)
        if not record.genres:
            logger.warning("Aucun genre dans le NFO", path=str(nfo_path))
            return False

        genres = list(record.genres)
        changed = False
        for index, genre in enumerate(genres):
            if contains_chinese(genre):
                continue
            translated = translate_genre(genre)
            if translated != genre:
                logger.info(f"Genre traduit: '{genre}' -> '{translated}'", path=str(nfo_path))
                genres[index] = translated
                changed = True

        if not changed:
            logger.debug("Genres deja en chinois", path=str(nfo_path))
            return False

        nfo_path = Path(nfo_path)
        raw = nfo_path.read_bytes()
        encoding = declared_encoding(raw)
        try:
            content = raw.decode(encoding)
        except (UnicodeError, LookupError) as e:
            raise ParseError(nfo_path, f"encodage {encoding}: {e}") from e

        content = insert_genre_tags(remove_genre_tags(content), genres)
        # Les genres hors du jeu de caracteres declare deviennent des references &#...;
        nfo_path.write_bytes(content.encode(encoding, errors="xmlcharrefreplace"))
        logger.info("Genres du NFO mis a jour", path=str(nfo_path), encoding=encoding)
        return True

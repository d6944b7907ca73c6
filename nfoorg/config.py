"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe NFOORG_,
et peut optionnellement être fournie via un fichier .env.

La clé API TMDB est optionnelle : sans elle, les pays du NFO sont utilisés tels quels
et la complétude des séries n'est pas vérifiée.
"""

import json
import sys
from pathlib import Path
from typing import Annotated, Optional, Union

from loguru import logger
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from nfoorg.core.exceptions import ConfigurationError

# Trouver le fichier .env à la racine du projet (parent de nfoorg/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


def _default_tmm_dir() -> Path:
    """Répertoire d'installation par défaut de tinyMediaManager selon l'OS."""
    if sys.platform == "darwin":
        return Path("/Applications/tinyMediaManager.app/Contents/MacOS")
    if sys.platform.startswith("win"):
        return Path("C:/Program Files/tinyMediaManager")
    return Path("~/tinyMediaManager").expanduser()


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe NFOORG_.
    Exemple : NFOORG_CLOUD_DIR=/mnt/cloud

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="NFOORG_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Chemins (avec expansion ~)
    cloud_dir: Path = Field(default=Path("~/Cloud"))
    tmm_dir: Path = Field(default_factory=_default_tmm_dir)
    # Chaîne brute acceptée (chemin unique, liste séparée par des virgules ou JSON)
    temp_dirs: Annotated[list[Path], NoDecode] = Field(default_factory=list)

    # Base de données
    database_url: str = Field(default="sqlite:///~/.nfoorg/Data/media_manager.db")

    # TMDB (OPTIONNEL - affinage des pays et complétude désactivés si non défini)
    tmdb_api_key: Optional[str] = Field(default=None)
    use_tmdb_org: bool = Field(default=False)
    cache_dir: Path = Field(default=Path("~/.nfoorg/cache"))

    # Traitement
    wait_time_after_scan: int = Field(default=30, ge=0)
    wait_time_after_nfo_edit: int = Field(default=10, ge=0)
    report_dir: Path = Field(default=Path("/tmp/media-manager/reports"))
    lock_file: Path = Field(default=Path("~/.nfoorg/nfoorg.lock"))

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("~/.nfoorg/logs/nfoorg.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator(
        "cloud_dir", "tmm_dir", "cache_dir", "report_dir", "lock_file", "log_file",
        mode="before",
    )
    @classmethod
    def expand_path(cls, v: Union[str, Path]) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("temp_dirs", mode="before")
    @classmethod
    def split_temp_dirs(cls, v: Union[str, Path, list, None]) -> list[Path]:
        """Accepte un chemin unique ou une liste (chaîne séparée par des virgules)."""
        if v is None or v == "":
            return []
        if isinstance(v, Path):
            v = [v]
        elif isinstance(v, str):
            text = v.strip()
            if text.startswith("["):
                v = json.loads(text)
            else:
                v = [part for part in text.split(",") if part.strip()]
        return [Path(str(item).strip()).expanduser() for item in v]

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return bool(self.tmdb_api_key)

    @property
    def valid_temp_dirs(self) -> list[Path]:
        """Répertoires temporaires existants ; les autres sont ignorés avec un avertissement."""
        valid = []
        for temp_dir in self.temp_dirs:
            if temp_dir.is_dir():
                valid.append(temp_dir)
            else:
                logger.warning("Répertoire temporaire introuvable, ignoré", path=str(temp_dir))
        return valid


def load_settings(**overrides) -> Settings:
    """
    Charge la configuration (environnement, .env, surcharges explicites).

    Raises:
        ConfigurationError: Si une valeur est invalide (ex: NFOORG_TEMP_DIRS
            en JSON malforme, attente negative).
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigurationError("Configuration invalide", details) from e

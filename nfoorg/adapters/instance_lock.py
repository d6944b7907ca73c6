"""
Verrou d'instance unique.

Le catalogue et les repertoires media supposent un seul ecrivain : le
processus prend un verrou exclusif non bloquant (fcntl.flock) sur un
fichier pour toute sa duree d'execution.
"""

import fcntl
import os
from pathlib import Path
from typing import IO, Optional

from loguru import logger

from nfoorg.core.exceptions import NfoOrgError


class InstanceLockError(NfoOrgError):
    """Levee quand une autre instance detient deja le verrou."""


class InstanceLock:
    """
    Verrou exclusif sur un fichier.

    Utilisation:
        with InstanceLock(Path("~/.nfoorg/nfoorg.lock").expanduser()):
            ...
    """

    def __init__(self, lock_file: Path) -> None:
        self._lock_file = Path(lock_file)
        self._handle: Optional[IO[str]] = None

    @property
    def locked(self) -> bool:
        return self._handle is not None

    def acquire(self) -> None:
        """
        Prend le verrou et ecrit le PID dans le fichier.

        Raises:
            InstanceLockError: Si une autre instance est en cours.
        """
        self._lock_file.parent.mkdir(parents=True, exist_ok=True)
        handle = open(self._lock_file, "a+")
        try:
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except OSError as e:
            handle.close()
            raise InstanceLockError(
                "Une autre instance est deja en cours d'execution",
                str(self._lock_file),
            ) from e

        handle.seek(0)
        handle.truncate()
        handle.write(str(os.getpid()))
        handle.flush()
        self._handle = handle
        logger.debug("Verrou d'instance acquis", lock_file=str(self._lock_file))

    def release(self) -> None:
        """Libere le verrou (sans effet s'il n'est pas detenu)."""
        if self._handle is None:
            return
        try:
            fcntl.flock(self._handle.fileno(), fcntl.LOCK_UN)
        finally:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> "InstanceLock":
        self.acquire()
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()

"""Cross-process "sync in progress" guard.

Every CLI invocation builds its own Reconciler, so an in-memory lock cannot
see a sync running in another process. SyncLock takes an advisory fcntl lock
on a file next to the local store instead; a second holder is refused
immediately rather than waiting.
"""

import logging
from pathlib import Path
from typing import Optional

# Import fcntl for POSIX file locking (not available on Windows)
try:
    import fcntl
    HAS_FCNTL = True
except ImportError:
    HAS_FCNTL = False

logger = logging.getLogger(__name__)


class SyncLock:
    """Non-blocking exclusive lock on ``path``.

    Example:
        >>> lock = SyncLock("/home/me/.problem-tracker/store.yaml.lock")
        >>> if lock.try_acquire():
        ...     try:
        ...         run_sync()
        ...     finally:
        ...         lock.release()
    """

    def __init__(self, path: str):
        self.path = Path(path)
        self._lock_file = None

    @property
    def held(self) -> bool:
        return self._lock_file is not None

    def try_acquire(self) -> bool:
        """Take the lock, returning False when another holder has it."""
        if self.held:
            return False

        self.path.parent.mkdir(parents=True, exist_ok=True)
        lock_file = open(self.path, 'a')

        if not HAS_FCNTL:
            logger.warning(
                "File locking not available on this platform. "
                "Concurrent syncs are not detected."
            )
            self._lock_file = lock_file
            return True

        try:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except OSError:
            lock_file.close()
            logger.debug(f"Sync lock {self.path} is held elsewhere")
            return False

        self._lock_file = lock_file
        logger.debug(f"Sync lock acquired: {self.path}")
        return True

    def release(self) -> None:
        if self._lock_file is None:
            return
        try:
            if HAS_FCNTL:
                fcntl.flock(self._lock_file.fileno(), fcntl.LOCK_UN)
                logger.debug("Sync lock released")
        except OSError as e:
            logger.warning(f"Failed to release sync lock: {e}")
        finally:
            self._lock_file.close()
            self._lock_file = None

    def is_locked_elsewhere(self) -> bool:
        """True when some other holder currently has the lock."""
        if self.held:
            return False
        if not self.try_acquire():
            return True
        self.release()
        return False


def lock_path_for(store_path: Optional[str]) -> Optional[str]:
    """Lock file that guards syncs of the store at ``store_path``."""
    if not store_path:
        return None
    return f"{store_path}.lock"

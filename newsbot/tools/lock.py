from __future__ import annotations

from pathlib import Path
import logging
import os
import time

from newsbot.config.settings import get_settings

logger = logging.getLogger(__name__)


class RunInProgressError(RuntimeError):
    pass


class RunLock:
    """
    File lease held for the duration of one pipeline run.

    The lock file is created with O_EXCL, so only one process can take it.
    A lock file younger than `timeout_seconds` means another run is active;
    an older one is left over from a crashed run and gets replaced.
    """

    def __init__(self, path: str | Path | None = None, timeout_seconds: int | None = None):
        s = get_settings()
        self.path = Path(path if path is not None else s.lock_path)
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else s.lock_timeout_seconds

    def _create(self) -> None:
        fd = os.open(str(self.path), os.O_CREAT | os.O_EXCL | os.O_WRONLY)
        try:
            os.write(fd, str(os.getpid()).encode("utf-8"))
        finally:
            os.close(fd)

    def __enter__(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)

        try:
            self._create()
            return self
        except FileExistsError:
            pass

        try:
            age = time.time() - self.path.stat().st_mtime
        except FileNotFoundError:
            age = float("inf")
        if age < self.timeout_seconds:
            raise RunInProgressError(
                f"Another run is already in progress (lock {self.path} is {age:.0f}s old)."
            )

        logger.warning("Removing stale run lock %s", self.path)
        self.path.unlink(missing_ok=True)
        try:
            self._create()
        except FileExistsError:
            # another process replaced the stale lock first
            raise RunInProgressError(f"Another run took over stale lock {self.path}.") from None
        return self

    def __exit__(self, exc_type, exc, tb):
        self.path.unlink(missing_ok=True)

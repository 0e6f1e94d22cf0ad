"""In-place replacement of the running executable.

POSIX systems let a running program's file be renamed over, so the new
binary is written next to the old one and renamed onto it. Windows keeps
the running image locked: the old file is moved aside first, the new one
moved in, and the old one removed if Windows allows it.
"""

import contextlib
import logging
import os
import sys
from pathlib import Path
from typing import Final

from codex_update.updater.errors import ReplaceError

logger = logging.getLogger(__name__)

TEMP_SUFFIX: Final = ".tmp"
BACKUP_SUFFIX: Final = ".old"
EXECUTABLE_MODE: Final = 0o755


def current_executable() -> Path:
    """Path of the running executable.

    Only a frozen build's ``sys.executable`` is the tool itself; under a
    plain interpreter it is Python, which must never be overwritten. The
    path is not resolved so a venv's interpreter link stays inside the venv.

    Raises:
        ReplaceError: not running as a frozen executable.
    """
    if not getattr(sys, "frozen", False):
        raise ReplaceError(
            f"{sys.executable} is a Python interpreter, not a standalone build; "
            "pass the executable path to replace explicitly"
        )
    return Path(sys.executable)


class BinaryReplacer:
    """Swaps new bytes in for an executable file."""

    def __init__(self, executable_path: Path | None = None, windows: bool | None = None):
        self.executable_path = executable_path or current_executable()
        self.windows = os.name == "nt" if windows is None else windows

    @property
    def temp_path(self) -> Path:
        return self.executable_path.with_suffix(TEMP_SUFFIX)

    @property
    def backup_path(self) -> Path:
        return self.executable_path.with_suffix(BACKUP_SUFFIX)

    def _write_temp(self, data: bytes) -> Path:
        temp_path = self.temp_path
        try:
            temp_path.write_bytes(data)
            if not self.windows:
                temp_path.chmod(EXECUTABLE_MODE)
        except OSError as err:
            raise ReplaceError(f"Failed to write new binary to {temp_path}: {err}") from err
        return temp_path

    def _swap_posix(self, temp_path: Path) -> None:
        try:
            os.replace(temp_path, self.executable_path)
        except OSError as err:
            raise ReplaceError(f"Failed to replace {self.executable_path}: {err}") from err

    def _swap_windows(self, temp_path: Path) -> None:
        backup_path = self.backup_path
        try:
            os.replace(self.executable_path, backup_path)
            os.replace(temp_path, self.executable_path)
        except OSError as err:
            raise ReplaceError(f"Failed to replace {self.executable_path}: {err}") from err

        # The old image may still be mapped; a leftover .old file is harmless
        with contextlib.suppress(OSError):
            backup_path.unlink()
        if backup_path.exists():
            logger.debug("Could not remove %s", backup_path)

    def replace(self, data: bytes) -> Path:
        """Write ``data`` as the new executable and return its path.

        Raises:
            ReplaceError: writing, chmod or a rename failed. Nothing is
                rolled back.
        """
        temp_path = self._write_temp(data)
        logger.debug("Wrote %d bytes to %s", len(data), temp_path)

        if self.windows:
            self._swap_windows(temp_path)
        else:
            self._swap_posix(temp_path)

        logger.info("Replaced %s", self.executable_path)
        return self.executable_path


def replace_running_executable(data: bytes, executable_path: Path | None = None) -> Path:
    """Replace the running executable (or ``executable_path``) with ``data``."""
    return BinaryReplacer(executable_path).replace(data)

"""Tests for replacing the running executable."""

import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from codex_update.updater import BinaryReplacer, ReplaceError, replace_running_executable

posix_only = pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")


def make_executable(tmp_path: Path, name: str = "codex", content: bytes = b"old version") -> Path:
    exe = tmp_path / name
    exe.write_bytes(content)
    exe.chmod(0o755)
    return exe


class TestPosixReplace:
    """Tests for the rename-over strategy."""

    @posix_only
    def test_replaces_executable(self, tmp_path: Path) -> None:
        """The new bytes should land at the executable's path."""
        exe = make_executable(tmp_path)

        result = BinaryReplacer(exe, windows=False).replace(b"new version")

        assert result == exe
        assert exe.read_bytes() == b"new version"
        assert not (tmp_path / "codex.tmp").exists()

    @posix_only
    def test_sets_executable_bits(self, tmp_path: Path) -> None:
        exe = make_executable(tmp_path)
        exe.chmod(0o644)

        BinaryReplacer(exe, windows=False).replace(b"new version")

        mode = stat.S_IMODE(exe.stat().st_mode)
        assert mode == 0o755

    @posix_only
    def test_renames_temp_file_onto_executable(self, tmp_path: Path) -> None:
        """The swap is a single rename from the temp sibling."""
        exe = make_executable(tmp_path)

        with patch("codex_update.updater.replacer.os.replace", wraps=os.replace) as mock_replace:
            BinaryReplacer(exe, windows=False).replace(b"new version")

        mock_replace.assert_called_once_with(tmp_path / "codex.tmp", exe)

    @posix_only
    def test_new_inode(self, tmp_path: Path) -> None:
        """Renaming leaves a process holding the old file unaffected."""
        exe = make_executable(tmp_path)

        with exe.open("rb") as running:
            BinaryReplacer(exe, windows=False).replace(b"new version")
            assert running.read() == b"old version"

        assert exe.read_bytes() == b"new version"

    def test_rename_failure(self, tmp_path: Path) -> None:
        """A failed rename raises ReplaceError and keeps the old executable."""
        exe = make_executable(tmp_path)

        with patch("codex_update.updater.replacer.os.replace", side_effect=OSError("busy")):
            with pytest.raises(ReplaceError) as exc_info:
                BinaryReplacer(exe, windows=False).replace(b"new version")

        assert isinstance(exc_info.value.__cause__, OSError)
        assert exe.read_bytes() == b"old version"

    def test_write_failure(self, tmp_path: Path) -> None:
        """An unwritable directory raises ReplaceError."""
        exe = tmp_path / "missing" / "codex"

        with pytest.raises(ReplaceError):
            BinaryReplacer(exe, windows=False).replace(b"new version")


class TestWindowsReplace:
    """Tests for the move-aside strategy."""

    def test_replaces_and_removes_backup(self, tmp_path: Path) -> None:
        exe = make_executable(tmp_path, "codex.exe")

        BinaryReplacer(exe, windows=True).replace(b"new version")

        assert exe.read_bytes() == b"new version"
        assert not (tmp_path / "codex.old").exists()
        assert not (tmp_path / "codex.tmp").exists()

    def test_moves_old_binary_aside_first(self, tmp_path: Path) -> None:
        exe = make_executable(tmp_path, "codex.exe")

        with patch("codex_update.updater.replacer.os.replace", wraps=os.replace) as mock_replace:
            BinaryReplacer(exe, windows=True).replace(b"new version")

        assert [call.args for call in mock_replace.call_args_list] == [
            (exe, tmp_path / "codex.old"),
            (tmp_path / "codex.tmp", exe),
        ]

    def test_backup_cleanup_failure_is_tolerated(self, tmp_path: Path) -> None:
        """A locked backup is left behind without failing the update."""
        exe = make_executable(tmp_path, "codex.exe")

        with patch.object(Path, "unlink", side_effect=PermissionError("in use")):
            BinaryReplacer(exe, windows=True).replace(b"new version")

        assert exe.read_bytes() == b"new version"
        assert (tmp_path / "codex.old").read_bytes() == b"old version"

    def test_rename_failure(self, tmp_path: Path) -> None:
        exe = make_executable(tmp_path, "codex.exe")

        with patch("codex_update.updater.replacer.os.replace", side_effect=PermissionError("denied")):
            with pytest.raises(ReplaceError):
                BinaryReplacer(exe, windows=True).replace(b"new version")

        assert exe.read_bytes() == b"old version"


class TestPaths:
    """Tests for temp and backup path naming."""

    @pytest.mark.parametrize(
        ("name", "temp", "backup"),
        [
            ("codex", "codex.tmp", "codex.old"),
            ("codex.exe", "codex.tmp", "codex.old"),
        ],
    )
    def test_sibling_paths(self, tmp_path: Path, name: str, temp: str, backup: str) -> None:
        replacer = BinaryReplacer(tmp_path / name, windows=False)
        assert replacer.temp_path == tmp_path / temp
        assert replacer.backup_path == tmp_path / backup

    def test_defaults_to_running_executable(self, tmp_path: Path) -> None:
        """A frozen build without a path replaces its own executable."""
        exe = make_executable(tmp_path)

        with patch("sys.executable", str(exe)), patch("sys.frozen", True, create=True):
            replace_running_executable(b"new version")

        assert exe.read_bytes() == b"new version"

    def test_refuses_plain_interpreter(self, tmp_path: Path) -> None:
        """Under a non-frozen interpreter the Python binary is never touched."""
        exe = make_executable(tmp_path, "python3")

        with patch("sys.executable", str(exe)), patch("sys.frozen", False, create=True):
            with pytest.raises(ReplaceError):
                replace_running_executable(b"new version")

        assert exe.read_bytes() == b"old version"
        assert not (tmp_path / "python3.tmp").exists()

    @posix_only
    def test_does_not_follow_interpreter_symlink(self, tmp_path: Path) -> None:
        """A venv-style link is swapped in place; its target is left alone."""
        base = make_executable(tmp_path, "base-python")
        venv_bin = tmp_path / "venv" / "bin"
        venv_bin.mkdir(parents=True)
        link = venv_bin / "codex"
        link.symlink_to(base)

        with patch("sys.executable", str(link)), patch("sys.frozen", True, create=True):
            result = replace_running_executable(b"new version")

        assert result == link
        assert not link.is_symlink()
        assert link.read_bytes() == b"new version"
        assert base.read_bytes() == b"old version"

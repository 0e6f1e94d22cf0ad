"""Recover the executable from a downloaded release asset.

Three layouts are published:
- ``.zst``: the executable itself, zstd-compressed
- ``.tar.gz``: a gzipped tarball containing the executable
- ``.zip``: a zip archive containing ``<name>.exe`` (Windows builds)
"""

import io
import logging
import posixpath
import tarfile
import zipfile
from typing import Final

import zstandard

from codex_update.updater.errors import (
    BinaryNotFoundInArchive,
    ExtractError,
    UnsupportedAssetFormat,
)

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE_NAME: Final = "codex"


def _matches(member_name: str, exact: str, executable_name: str) -> bool:
    base = posixpath.basename(member_name.replace("\\", "/"))
    return base == exact or base.startswith(f"{executable_name}-")


def decompress_zst(data: bytes) -> bytes:
    """Decompress a single zstd stream.

    Release frames do not always record their content size, so the data is
    fed through a decompression object. The frame must run to its end: a
    truncated download is an error, never a short binary.
    """
    if not data:
        raise ExtractError("Empty zstd payload")

    decompressor = zstandard.ZstdDecompressor().decompressobj()
    try:
        output = decompressor.decompress(data)
    except zstandard.ZstdError as err:
        raise ExtractError(f"Invalid zstd data: {err}") from err

    if not decompressor.eof:
        raise ExtractError("Truncated zstd data: frame did not end")
    return output


def extract_from_tar_gz(data: bytes, asset_name: str, executable_name: str = DEFAULT_EXECUTABLE_NAME) -> bytes:
    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as archive:
            for member in archive:
                if not member.isfile() or not _matches(member.name, executable_name, executable_name):
                    continue
                logger.debug("Found %s in %s", member.name, asset_name)
                extracted = archive.extractfile(member)
                if extracted is None:
                    continue
                with extracted:
                    return extracted.read()
    except (tarfile.TarError, OSError, EOFError) as err:
        raise ExtractError(f"Invalid tar.gz archive {asset_name}: {err}") from err

    raise BinaryNotFoundInArchive(asset_name, executable_name)


def extract_from_zip(data: bytes, asset_name: str, executable_name: str = DEFAULT_EXECUTABLE_NAME) -> bytes:
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            for info in archive.infolist():
                if info.is_dir() or not _matches(info.filename, f"{executable_name}.exe", executable_name):
                    continue
                logger.debug("Found %s in %s", info.filename, asset_name)
                return archive.read(info)
    except (zipfile.BadZipFile, OSError) as err:
        raise ExtractError(f"Invalid zip archive {asset_name}: {err}") from err

    raise BinaryNotFoundInArchive(asset_name, executable_name)


def extract_binary(data: bytes, asset_name: str, executable_name: str = DEFAULT_EXECUTABLE_NAME) -> bytes:
    """Return the raw executable bytes contained in ``data``.

    The format is chosen by the suffix of ``asset_name`` alone.

    Raises:
        UnsupportedAssetFormat: the suffix is not one of the three above.
        BinaryNotFoundInArchive: no tar/zip member looks like the executable.
        ExtractError: the payload is corrupt.
    """
    if asset_name.endswith(".zst"):
        return decompress_zst(data)
    if asset_name.endswith(".tar.gz"):
        return extract_from_tar_gz(data, asset_name, executable_name)
    if asset_name.endswith(".zip"):
        return extract_from_zip(data, asset_name, executable_name)
    raise UnsupportedAssetFormat(asset_name)

"""Self-update pipeline for the codex binary.

Discovers releases on the upstream project and a fallback fork, picks the
asset for the running platform, and swaps it in for the running executable:
- Release discovery and version ordering
- Platform-aware asset selection
- .zst, .tar.gz and .zip extraction
- In-place executable replacement
"""

from codex_update.updater.aggregator import ReleaseAggregator, list_releases
from codex_update.updater.archive import extract_binary
from codex_update.updater.assets import select_asset
from codex_update.updater.config import UpdaterConfig
from codex_update.updater.errors import (
    BinaryNotFoundInArchive,
    ExtractError,
    FetchError,
    InvalidSourceFormat,
    NoReleasesFound,
    NoSuitableAsset,
    ReleaseNotFound,
    ReplaceError,
    UnsupportedAssetFormat,
    UpdateError,
)
from codex_update.updater.launcher import (
    UpdateOutcome,
    asset_for_target,
    choose_release,
    download_and_replace_binary,
    get_current_version,
    update,
)
from codex_update.updater.models import Asset, Release, ReleaseSource
from codex_update.updater.platforms import HostPlatform, resolve_target
from codex_update.updater.replacer import BinaryReplacer, replace_running_executable
from codex_update.updater.report import ReleaseStatus, classify_release, print_releases
from codex_update.updater.sources import ReleaseSourceClient
from codex_update.updater.versions import is_newer_version, normalize_tag, sort_releases

__all__ = [
    "Asset",
    "Release",
    "ReleaseSource",
    "UpdaterConfig",
    "ReleaseSourceClient",
    "ReleaseAggregator",
    "list_releases",
    "normalize_tag",
    "sort_releases",
    "is_newer_version",
    "HostPlatform",
    "resolve_target",
    "select_asset",
    "extract_binary",
    "BinaryReplacer",
    "replace_running_executable",
    "UpdateOutcome",
    "choose_release",
    "asset_for_target",
    "download_and_replace_binary",
    "get_current_version",
    "update",
    "ReleaseStatus",
    "classify_release",
    "print_releases",
    "UpdateError",
    "FetchError",
    "InvalidSourceFormat",
    "NoReleasesFound",
    "ReleaseNotFound",
    "NoSuitableAsset",
    "ExtractError",
    "UnsupportedAssetFormat",
    "BinaryNotFoundInArchive",
    "ReplaceError",
]

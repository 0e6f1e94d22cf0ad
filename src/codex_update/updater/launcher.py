"""Self-update flow.

1. List releases from the primary and secondary sources
2. Choose a release and the asset built for this platform
3. Download the asset and extract the executable
4. Replace the running executable with it

A failure before step 4 leaves the installed executable untouched.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from codex_update import __version__
from codex_update.updater.aggregator import ReleaseAggregator
from codex_update.updater.archive import extract_binary
from codex_update.updater.assets import select_asset
from codex_update.updater.config import UpdaterConfig
from codex_update.updater.errors import NoSuitableAsset, ReleaseNotFound
from codex_update.updater.models import Asset, Release
from codex_update.updater.platforms import resolve_target
from codex_update.updater.replacer import BinaryReplacer
from codex_update.updater.sources import ReleaseSourceClient
from codex_update.updater.versions import normalize_tag

logger = logging.getLogger(__name__)


@dataclass
class UpdateOutcome:
    """What a successful update installed, and where."""

    release: Release
    asset: Asset
    executable_path: Path


def get_current_version() -> str:
    return __version__


def choose_release(
    releases: Sequence[Release],
    version: str | None = None,
    include_prereleases: bool = False,
) -> Release:
    """Pick a release from a newest-first list.

    With ``version`` (a bare version or a tag), the first release with that
    version. Otherwise the newest release, skipping prereleases unless
    ``include_prereleases`` is set.
    """
    if version is not None:
        wanted = normalize_tag(version)
        for release in releases:
            if release.version == wanted:
                return release
        raise ReleaseNotFound(f"Version {wanted} not found in any repository")

    for release in releases:
        if include_prereleases or not release.is_prerelease:
            return release
    raise ReleaseNotFound("No stable release found; pass a version or allow prereleases")


def asset_for_target(release: Release, target: str) -> Asset:
    asset = select_asset(release.assets, target)
    if asset is None:
        raise NoSuitableAsset(f"Release {release.version} from {release.source} has no asset for {target}")
    return asset


def download_and_replace_binary(
    asset: Asset,
    client: ReleaseSourceClient,
    replacer: BinaryReplacer | None = None,
    executable_name: str | None = None,
) -> Path:
    """Download ``asset``, extract the executable and swap it in.

    Returns the path of the replaced executable.
    """
    replacer = replacer or BinaryReplacer()
    executable_name = executable_name or client.config.executable_name

    data = client.download(asset.download_url)
    logger.debug("Downloaded %d bytes from %s", len(data), asset.download_url)

    binary = extract_binary(data, asset.name, executable_name)
    path = replacer.replace(binary)

    logger.info("Successfully updated to version from %s", asset.download_url)
    return path


def update(
    version: str | None = None,
    override_source: str | None = None,
    target: str | None = None,
    include_prereleases: bool = False,
    config: UpdaterConfig | None = None,
    client: ReleaseSourceClient | None = None,
    replacer: BinaryReplacer | None = None,
    confirm: Callable[[Release, Asset], bool] | None = None,
) -> UpdateOutcome | None:
    """Run the whole self-update flow and return what was installed.

    ``confirm`` is called with the chosen release and asset before anything
    is downloaded. If it returns False the flow stops and None is returned.
    """
    config = config or (client.config if client else UpdaterConfig.from_env())
    target = resolve_target(target)

    owned_client = client is None
    client = client or ReleaseSourceClient(config)
    try:
        releases = ReleaseAggregator(client, config).list_releases(override_source)
        release = choose_release(releases, version, include_prereleases)
        asset = asset_for_target(release, target)

        if confirm is not None and not confirm(release, asset):
            logger.info("Update to %s declined", release.version)
            return None

        logger.info("Installing %s from %s (%s)", release.version, release.source, asset.name)
        path = download_and_replace_binary(asset, client, replacer, config.executable_name)
    finally:
        if owned_client:
            client.close()

    return UpdateOutcome(release=release, asset=asset, executable_path=path)

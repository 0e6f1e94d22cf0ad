"""Human-readable release listing."""

from collections.abc import Sequence
from enum import Enum

from rich.console import Console
from rich.text import Text

from codex_update.updater.models import Release
from codex_update.updater.versions import is_newer_version


class ReleaseStatus(str, Enum):
    """How a release relates to the installed version."""

    PRERELEASE = "prerelease"
    NEWER = "newer"
    CURRENT = "current"
    OLDER = "older"


STATUS_STYLES = {
    ReleaseStatus.PRERELEASE: "yellow",
    ReleaseStatus.NEWER: "green",
    ReleaseStatus.CURRENT: "cyan",
    ReleaseStatus.OLDER: "white",
}


def classify_release(release: Release, current_version: str) -> ReleaseStatus:
    if release.is_prerelease:
        return ReleaseStatus.PRERELEASE
    if is_newer_version(release.version, current_version):
        return ReleaseStatus.NEWER
    if release.version == current_version:
        return ReleaseStatus.CURRENT
    return ReleaseStatus.OLDER


def format_release(release: Release) -> str:
    tag = " (prerelease)" if release.is_prerelease else ""
    published = release.published_at.strftime("%Y-%m-%d") if release.published_at else "unpublished"
    return f"v{release.version}{tag} - {release.source} - {published}"


def print_releases(releases: Sequence[Release], current_version: str, console: Console) -> None:
    console.print(f"Available releases (current: {current_version}):\n", highlight=False)
    for release in releases:
        style = STATUS_STYLES[classify_release(release, current_version)]
        console.print(Text(format_release(release), style=style))

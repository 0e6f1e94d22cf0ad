"""Pick the release asset built for a target platform."""

from collections.abc import Sequence
from typing import Final

from codex_update.updater.models import Asset
from codex_update.updater.platforms import is_windows_target

# Highest priority first
WINDOWS_SUFFIXES: Final = (".exe.zst", ".exe.zip", ".exe.tar.gz")
UNIX_SUFFIXES: Final = (".zst", ".tar.gz")


def preferred_suffixes(target: str) -> tuple[str, ...]:
    return WINDOWS_SUFFIXES if is_windows_target(target) else UNIX_SUFFIXES


def select_asset(assets: Sequence[Asset], target: str) -> Asset | None:
    """Return the best asset for ``target``, or None.

    An asset matches when its name contains the target triple anywhere and
    ends with an accepted suffix. The containment test is loose: a target
    that is a substring of some longer, unrelated triple matches that
    triple's assets too.
    """
    for suffix in preferred_suffixes(target):
        for asset in assets:
            if target in asset.name and asset.name.endswith(suffix):
                return asset
    return None

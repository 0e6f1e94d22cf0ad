"""Version strings: tag normalization and release ordering."""

import functools
from collections.abc import Iterable
from typing import Final, Protocol, TypeVar

import semver

# Checked in order, at most one is stripped
TAG_PREFIXES: Final = ("rust-v", "v")


class _Versioned(Protocol):
    version: str


V = TypeVar("V", bound=_Versioned)


def normalize_tag(tag: str) -> str:
    """Turn a release tag into a bare version.

    rust-v0.27.0 -> 0.27.0, v0.27.0 -> 0.27.0, 0.27.0 -> 0.27.0
    """
    for prefix in TAG_PREFIXES:
        if tag.startswith(prefix):
            return tag[len(prefix) :]
    return tag


def parse_version(version: str) -> semver.Version | None:
    """Parse a strict semantic version, or None if it is not one."""
    try:
        return semver.Version.parse(version)
    except (ValueError, TypeError):
        return None


def compare_versions(a: str, b: str) -> int:
    """Comparator for newest-first ordering.

    Valid semantic versions sort before invalid ones; two invalid versions
    fall back to reverse string comparison. Build metadata is ignored, as
    semver 2.0 precedence requires: 1.0.0+a and 1.0.0+b compare equal and
    keep their input order in a stable sort.
    """
    parsed_a = parse_version(a)
    parsed_b = parse_version(b)
    if parsed_a is not None and parsed_b is not None:
        return parsed_b.compare(parsed_a)
    if parsed_a is not None:
        return -1
    if parsed_b is not None:
        return 1
    return (a < b) - (a > b)


def sort_versions(versions: Iterable[str]) -> list[str]:
    return sorted(versions, key=functools.cmp_to_key(compare_versions))


def sort_releases(releases: Iterable[V]) -> list[V]:
    """Return releases ordered newest first (stable for equal versions)."""
    return sorted(
        releases,
        key=functools.cmp_to_key(lambda a, b: compare_versions(a.version, b.version)),
    )


def is_newer_version(version: str, current: str) -> bool:
    """True only when both parse and ``version`` is strictly greater."""
    parsed = parse_version(version)
    parsed_current = parse_version(current)
    if parsed is None or parsed_current is None:
        return False
    return parsed > parsed_current

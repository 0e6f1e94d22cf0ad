"""Target triple resolution for the running host.

Release assets are named after Rust target triples, so the host is
described the same way: an explicit override wins, then the environment,
then a lookup table keyed by (arch, os, libc), then a generic
``{arch}-unknown-{os}`` guess.
"""

import logging
import os
import platform
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Final

logger = logging.getLogger(__name__)

TARGET_ENV_VARS: Final = ("CODEX_TARGET_TRIPLE", "TARGET")

# libc of None matches any libc for that (arch, os)
TARGET_TABLE: Final[dict[tuple[str, str, str | None], str]] = {
    ("x86_64", "linux", "musl"): "x86_64-unknown-linux-musl",
    ("x86_64", "linux", "gnu"): "x86_64-unknown-linux-gnu",
    ("aarch64", "linux", "musl"): "aarch64-unknown-linux-musl",
    ("aarch64", "linux", "gnu"): "aarch64-unknown-linux-gnu",
    ("x86_64", "macos", None): "x86_64-apple-darwin",
    ("aarch64", "macos", None): "aarch64-apple-darwin",
    ("x86_64", "windows", None): "x86_64-pc-windows-msvc",
}

_ARCH_ALIASES: Final = {
    "amd64": "x86_64",
    "x64": "x86_64",
    "arm64": "aarch64",
}

_OS_ALIASES: Final = {
    "darwin": "macos",
}


@dataclass(frozen=True)
class HostPlatform:
    """CPU architecture, operating system and C runtime of a host."""

    arch: str
    os: str
    libc: str | None = None


def _detect_libc() -> str:
    name, _ = platform.libc_ver()
    # Linux without glibc is assumed to be musl
    return "gnu" if name == "glibc" else "musl"


def detect_host_platform() -> HostPlatform:
    """Describe the running interpreter's host with target-triple names."""
    machine = platform.machine().lower()
    system = platform.system().lower()
    arch = _ARCH_ALIASES.get(machine, machine)
    os_name = _OS_ALIASES.get(system, system)
    libc = _detect_libc() if os_name == "linux" else None
    return HostPlatform(arch=arch, os=os_name, libc=libc)


def lookup_target(host: HostPlatform) -> str:
    """Map a host to a target triple using the static table."""
    target = TARGET_TABLE.get((host.arch, host.os, host.libc)) or TARGET_TABLE.get(
        (host.arch, host.os, None)
    )
    if target:
        return target
    return f"{host.arch}-unknown-{host.os}"


def resolve_target(
    override: str | None = None,
    env: Mapping[str, str] | None = None,
    host_provider: Callable[[], HostPlatform] = detect_host_platform,
) -> str:
    """Resolve the target triple used to pick release assets."""
    if override:
        return override

    env = os.environ if env is None else env
    for var in TARGET_ENV_VARS:
        if value := env.get(var):
            logger.debug("Using target %s from $%s", value, var)
            return value

    return lookup_target(host_provider())


def is_windows_target(target: str) -> bool:
    return "windows" in target

"""Updater configuration.

Defaults name the upstream project and the fork that publishes the
fallback builds. Each value can be overridden from the environment.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Final

from codex_update import __version__
from codex_update.updater.models import ReleaseSource

PRIMARY_SOURCE: Final = ReleaseSource("openai", "codex")
DEFAULT_SOURCE: Final = ReleaseSource("iainlowe", "codex")
GITHUB_API_URL: Final = "https://api.github.com"

# GitHub rejects API requests without a User-Agent
USER_AGENT: Final = f"codex-update/{__version__}"

EXECUTABLE_NAME: Final = "codex"

ENV_PRIMARY_REPO: Final = "CODEX_UPDATE_PRIMARY_REPO"
ENV_DEFAULT_REPO: Final = "CODEX_UPDATE_DEFAULT_REPO"
ENV_API_URL: Final = "CODEX_UPDATE_API_URL"
ENV_USER_AGENT: Final = "CODEX_UPDATE_USER_AGENT"


@dataclass
class UpdaterConfig:
    """Where to look for releases and how to talk to the hosting API."""

    primary_source: ReleaseSource = field(default_factory=lambda: PRIMARY_SOURCE)
    default_source: ReleaseSource = field(default_factory=lambda: DEFAULT_SOURCE)
    api_base_url: str = GITHUB_API_URL
    user_agent: str = USER_AGENT
    executable_name: str = EXECUTABLE_NAME

    # None keeps the HTTP client's own default
    timeout: float | None = None

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "UpdaterConfig":
        """Build a config, applying any ``CODEX_UPDATE_*`` overrides."""
        env = os.environ if env is None else env
        config = cls()

        if primary := env.get(ENV_PRIMARY_REPO):
            config.primary_source = ReleaseSource.parse(primary)
        if default := env.get(ENV_DEFAULT_REPO):
            config.default_source = ReleaseSource.parse(default)
        if api_url := env.get(ENV_API_URL):
            config.api_base_url = api_url.rstrip("/")
        if user_agent := env.get(ENV_USER_AGENT):
            config.user_agent = user_agent

        return config

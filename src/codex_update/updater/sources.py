"""Release listings and asset downloads from the GitHub API."""

import logging
from typing import Any

import httpx

from codex_update.updater.config import UpdaterConfig
from codex_update.updater.errors import FetchError
from codex_update.updater.models import ReleaseSource

logger = logging.getLogger(__name__)


class ReleaseSourceClient:
    """Thin wrapper over an ``httpx.Client`` for one hosting API.

    Each call issues exactly one request. There is no retry and no
    pagination: the first page of releases is all that is read.
    """

    def __init__(self, config: UpdaterConfig | None = None, http: httpx.Client | None = None):
        self.config = config or UpdaterConfig()
        self._owns_http = http is None
        if http is None:
            kwargs: dict[str, Any] = {"follow_redirects": True}
            if self.config.timeout is not None:
                kwargs["timeout"] = self.config.timeout
            http = httpx.Client(**kwargs)
        self._http = http

    def __enter__(self) -> "ReleaseSourceClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def releases_url(self, source: ReleaseSource) -> str:
        return f"{self.config.api_base_url}/repos/{source.owner}/{source.project}/releases"

    def _get(self, url: str, accept: str) -> httpx.Response:
        headers = {"User-Agent": self.config.user_agent, "Accept": accept}
        try:
            response = self._http.get(url, headers=headers, follow_redirects=True)
        except httpx.HTTPError as err:
            raise FetchError(f"Request to {url} failed: {err}", url=url) from err

        if response.is_error:
            raise FetchError(
                f"GET {url} returned HTTP {response.status_code}",
                url=url,
                status_code=response.status_code,
            )
        return response

    def fetch_releases(self, source: ReleaseSource) -> list[dict[str, Any]]:
        """Return the raw release entries published by ``source``."""
        url = self.releases_url(source)
        logger.debug("Fetching releases from %s", url)

        response = self._get(url, "application/vnd.github+json")
        try:
            data = response.json()
        except ValueError as err:
            raise FetchError(f"Invalid JSON from {url}: {err}", url=url) from err

        if not isinstance(data, list) or not all(isinstance(entry, dict) for entry in data):
            raise FetchError(f"Expected a list of releases from {url}", url=url)

        logger.debug("Got %d releases from %s", len(data), source)
        return data

    def download(self, url: str) -> bytes:
        """Fetch an asset's bytes in full."""
        logger.debug("Downloading %s", url)
        response = self._get(url, "application/octet-stream")
        return response.content

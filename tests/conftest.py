"""Pytest configuration and fixtures."""

from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest

from codex_update.updater import ReleaseSource, ReleaseSourceClient, UpdaterConfig

API_URL = "https://api.github.test"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def config() -> UpdaterConfig:
    """Config pointing at a fake API host."""
    return UpdaterConfig(
        primary_source=ReleaseSource("openai", "codex"),
        default_source=ReleaseSource("iainlowe", "codex"),
        api_base_url=API_URL,
        user_agent="codex-update-tests/1.0",
    )


@pytest.fixture
def make_client(config: UpdaterConfig) -> Iterator[Callable[[Handler], ReleaseSourceClient]]:
    """Build ReleaseSourceClients backed by an httpx.MockTransport."""
    opened: list[httpx.Client] = []

    def factory(handler: Handler) -> ReleaseSourceClient:
        http = httpx.Client(transport=httpx.MockTransport(handler))
        opened.append(http)
        return ReleaseSourceClient(config, http=http)

    yield factory

    for http in opened:
        http.close()


@pytest.fixture
def release_entry() -> Callable[..., dict[str, Any]]:
    """Build one entry shaped like the GitHub releases API."""

    def build(
        tag: str,
        prerelease: bool = False,
        published_at: str = "2025-08-20T12:00:00Z",
        assets: list[tuple[str, str]] | None = None,
        body: str = "",
    ) -> dict[str, Any]:
        return {
            "tag_name": tag,
            "name": tag,
            "body": body,
            "draft": False,
            "prerelease": prerelease,
            "published_at": published_at,
            "assets": [
                {"name": name, "browser_download_url": url, "size": 1024}
                for name, url in (assets or [])
            ],
        }

    return build


def routes(mapping: dict[str, Any]) -> Handler:
    """Handler answering by URL path.

    Values are JSON payloads, raw bytes, or ready-made httpx.Response
    objects; unknown paths get a 404.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        value = mapping.get(request.url.path)
        if value is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if isinstance(value, httpx.Response):
            return value
        if isinstance(value, bytes):
            return httpx.Response(200, content=value)
        return httpx.Response(200, json=value)

    return handler


@pytest.fixture
def route_handler() -> Callable[[dict[str, Any]], Handler]:
    return routes

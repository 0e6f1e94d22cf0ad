"""Release records produced by discovery.

Records are built fresh from each hosting API response and never persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from codex_update.updater.errors import FetchError, InvalidSourceFormat
from codex_update.updater.versions import normalize_tag


@dataclass(frozen=True)
class ReleaseSource:
    """An (owner, project) pair on the hosting service."""

    owner: str
    project: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.project}"

    @classmethod
    def parse(cls, value: str) -> "ReleaseSource":
        """Parse ``owner/project``.

        Anything that does not split on ``/`` into exactly two non-empty
        parts raises InvalidSourceFormat.
        """
        parts = value.split("/")
        if len(parts) != 2 or not all(parts):
            raise InvalidSourceFormat(value)
        return cls(owner=parts[0], project=parts[1])


@dataclass
class Asset:
    """A downloadable file attached to a release."""

    name: str
    download_url: str
    size: int = 0

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Asset":
        try:
            return cls(
                name=data["name"],
                download_url=data["browser_download_url"],
                size=int(data.get("size") or 0),
            )
        except (KeyError, TypeError, ValueError) as err:
            raise FetchError(f"Malformed asset entry: {err!r}") from err


@dataclass
class Release:
    """One published version of the tool."""

    version: str
    source: str
    is_prerelease: bool
    published_at: datetime | None
    assets: list[Asset] = field(default_factory=list)
    notes: str = ""
    tag: str = ""
    name: str = ""
    is_draft: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any], source: ReleaseSource) -> "Release":
        """Build a Release from one entry of the releases listing."""
        try:
            tag = data["tag_name"]
            published = data.get("published_at")
            return cls(
                version=normalize_tag(tag),
                source=str(source),
                is_prerelease=bool(data.get("prerelease", False)),
                published_at=(
                    datetime.fromisoformat(published.replace("Z", "+00:00")) if published else None
                ),
                assets=[Asset.from_api(asset) for asset in data.get("assets") or []],
                notes=data.get("body") or "",
                tag=tag,
                name=data.get("name") or "",
                is_draft=bool(data.get("draft", False)),
            )
        except (KeyError, TypeError, AttributeError, ValueError) as err:
            raise FetchError(f"Malformed release entry from {source}: {err!r}") from err


@dataclass
class SourceFetch:
    """Outcome of querying one release source.

    ``error`` is set when the source was unavailable; an available source
    with no releases has an empty ``releases`` list and no error.
    """

    source: ReleaseSource
    releases: list[Release] = field(default_factory=list)
    error: FetchError | None = None

    @property
    def available(self) -> bool:
        return self.error is None

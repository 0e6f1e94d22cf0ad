"""Release discovery across the primary project and a fallback fork.

The primary source is best effort: anonymous GitHub API requests are easily
rate limited, and the fork's releases should still be listed when that
happens. The secondary source must answer.
"""

import logging

from codex_update.updater.config import UpdaterConfig
from codex_update.updater.errors import FetchError, NoReleasesFound
from codex_update.updater.models import Release, ReleaseSource, SourceFetch
from codex_update.updater.sources import ReleaseSourceClient
from codex_update.updater.versions import sort_releases

logger = logging.getLogger(__name__)


class ReleaseAggregator:
    """Merges and ranks the releases of the configured sources."""

    def __init__(self, client: ReleaseSourceClient, config: UpdaterConfig | None = None):
        self.client = client
        self.config = config or client.config

    def fetch_source(self, source: ReleaseSource) -> SourceFetch:
        """Query and normalize one source without raising on fetch failure."""
        try:
            entries = self.client.fetch_releases(source)
            releases = [Release.from_api(entry, source) for entry in entries]
        except FetchError as err:
            return SourceFetch(source=source, error=err)
        return SourceFetch(source=source, releases=releases)

    def resolve_secondary(self, override_source: str | None = None) -> ReleaseSource:
        if override_source is not None:
            return ReleaseSource.parse(override_source)
        return self.config.default_source

    def list_releases(self, override_source: str | None = None) -> list[Release]:
        """List releases from every source, newest first.

        Raises:
            InvalidSourceFormat: ``override_source`` is not ``owner/project``.
            FetchError: the secondary source could not be read.
            NoReleasesFound: neither source contributed a release.
        """
        primary = self.config.primary_source
        fetches = [self.fetch_source(primary)]

        secondary = self.resolve_secondary(override_source)
        if secondary != primary:
            fetches.append(self.fetch_source(secondary))
        else:
            logger.debug("Secondary source %s is the primary source, skipping", secondary)

        releases: list[Release] = []
        for fetch in fetches:
            if not fetch.available:
                if fetch.source != primary:
                    raise fetch.error
                logger.warning(
                    "Could not fetch releases from %s (API rate limit or network issue): %s",
                    fetch.source,
                    fetch.error,
                )
                continue
            releases.extend(fetch.releases)

        if not releases:
            raise NoReleasesFound("No releases found from any repository")

        return sort_releases(releases)


def list_releases(
    override_source: str | None = None,
    config: UpdaterConfig | None = None,
    client: ReleaseSourceClient | None = None,
) -> list[Release]:
    """Convenience wrapper that manages its own HTTP client when none is given."""
    if client is not None:
        return ReleaseAggregator(client, config).list_releases(override_source)

    config = config or UpdaterConfig.from_env()
    with ReleaseSourceClient(config) as owned:
        return ReleaseAggregator(owned, config).list_releases(override_source)

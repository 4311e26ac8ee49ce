"""Label-scoped catalog search with offset pagination."""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from labelist.domain.errors import SearchError, UpstreamError

if TYPE_CHECKING:
    from labelist.domain.model import Release
    from labelist.domain.ports import CallLimiter, SpotifyGateway

log = getLogger(__name__)

SEARCH_PAGE_SIZE = 50


def label_query(label: str) -> str:
    return f'label:"{label}"'


@dataclass(slots=True)
class ReleaseSearch:
    """Collect every release whose label field matches ``label`` exactly.

    Pages of ``page_size`` are requested from offset 0 until the offset reaches
    the ``total`` reported by the latest page. The limiter wraps every page
    request; with the default wiring that is a fixed pause after each page.
    """

    gateway: SpotifyGateway
    limiter: CallLimiter = field(default_factory=nullcontext)
    page_size: int = SEARCH_PAGE_SIZE

    async def search(self, label: str, *, access_token: str) -> list[Release]:
        query = label_query(label)
        releases: list[Release] = []
        seen: set[str] = set()
        offset = 0

        while True:
            try:
                async with self.limiter:
                    page = await self.gateway.search_releases(
                        access_token,
                        query=query,
                        limit=self.page_size,
                        offset=offset,
                    )
            except UpstreamError as exc:
                raise SearchError.from_upstream(
                    f"Search for {query} failed at offset {offset}", exc
                ) from exc

            for release in page.releases:
                if release.id in seen:
                    log.debug(f"Skipping duplicate release {release.id} at offset {offset}")
                    continue
                seen.add(release.id)
                releases.append(release)

            offset += self.page_size
            total = page.total
            log.info(f"Fetched {len(releases)} of {total} albums so far...")

            if offset >= total:
                break
            if page.received == 0:
                # upstream promised more results but sent none; stop instead of looping
                log.warning(
                    f"Empty search page at offset {offset - self.page_size} "
                    f"while total is {total}; stopping pagination"
                )
                break

        log.info(f'Total albums found for label "{label}": {len(releases)}')
        return releases

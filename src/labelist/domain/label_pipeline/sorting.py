"""Chronological ordering of collected tracks."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from labelist.domain.model import Track


def sort_chronologically(
    tracks: Iterable[Track],
    *,
    keep_releases_together: bool = False,
) -> list[Track]:
    """Return ``tracks`` ordered by release date, then track number.

    The sort is stable, so tracks with equal keys keep their encounter order.
    With ``keep_releases_together`` releases that share a date are not
    interleaved: they stay contiguous in the order they were first collected.
    """

    items = list(tracks)
    if not keep_releases_together:
        return sorted(items, key=lambda track: (track.release_date, track.track_number))

    first_seen: dict[str, int] = {}
    for track in items:
        first_seen.setdefault(track.release_id, len(first_seen))
    return sorted(
        items,
        key=lambda track: (
            track.release_date,
            first_seen[track.release_id],
            track.track_number,
        ),
    )

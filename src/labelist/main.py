#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from spotipy.oauth2 import SpotifyOauthError

from labelist.adapters.spotify.authorization import acquire_authorization_code
from labelist.app import build_label_playlist
from labelist.config import (
    ConfigurationError,
    configure_logging,
    get_pacing_config,
    get_spotify_config,
    spotify_resilience_config,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from labelist.domain.label_pipeline import ProgressEvent

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build a chronological Spotify playlist from every album of a record label"
    )
    parser.add_argument(
        "label",
        type=str,
        help='Label name exactly as Spotify stores it, e.g. "Crosstown Rebels"',
    )
    parser.add_argument(
        "--code",
        type=str,
        help="Authorization code obtained elsewhere (skips the browser flow)",
    )
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Print the authorization URL instead of opening a browser",
    )
    parser.add_argument(
        "--keep-releases-together",
        action="store_true",
        help="Do not interleave tracks of albums released on the same day",
    )
    parser.add_argument(
        "--max-retries",
        type=int,
        default=0,
        help="Retries for failed read requests (default: %(default)s, playlist writes never retry)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(list(argv))
    if not args.label.strip():
        raise ValueError("Label name must not be empty")
    if args.max_retries < 0:
        raise ValueError("--max-retries must be non-negative")
    return args


def _report_progress(event: ProgressEvent) -> None:
    log.info(f"[{event.percent:3d}%] {event.message}")
    if event.failed:
        log.error(f"{event.error_kind}: {event.detail}")
    elif event.playlist_url:
        log.info(f"You can view your new playlist here: {event.playlist_url}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
    except ValueError:
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO, force=True)

    try:
        credentials = get_spotify_config()
        pacing = get_pacing_config()
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)

    try:
        code = parsed_args.code or acquire_authorization_code(
            credentials, open_browser=not parsed_args.no_browser
        )
        outcome = build_label_playlist(
            parsed_args.label,
            credentials=credentials,
            authorization_code=code,
            on_progress=_report_progress,
            pacing=pacing,
            resilience=spotify_resilience_config(max_retries=parsed_args.max_retries),
            keep_releases_together=parsed_args.keep_releases_together,
        )
    except SpotifyOauthError:
        log.exception("Spotify authorization failed")
        sys.exit(1)
    except Exception:
        log.exception("Fatal error while building the playlist")
        sys.exit(1)

    if not outcome.succeeded:
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()

"""Load ChordPro text from a file, stdin, or an http(s) URL."""

import logging
import sys
from pathlib import Path

import httpx

from .exceptions import FetchError, SourceError

logger = logging.getLogger(__name__)

_FETCH_HEADERS = {
    "Accept": "text/plain, text/x-chordpro, */*;q=0.8",
}


def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def fetch(url: str) -> str:
    """Fetch the song at *url* and return its text.

    Raises FetchError on HTTP-level failures (status 0 for transport errors).
    """
    logger.debug("Fetching %s", url)
    try:
        resp = httpx.get(url, headers=_FETCH_HEADERS, follow_redirects=True, timeout=15)
    except httpx.RequestError as exc:
        raise FetchError(url, 0) from exc
    if resp.status_code != 200:
        raise FetchError(url, resp.status_code)
    return resp.text


def load_source(location: str) -> str:
    """Return the text at *location*: ``-`` for stdin, a URL, or a file path."""
    if location == "-":
        return sys.stdin.read()
    if is_url(location):
        return fetch(location)

    try:
        return Path(location).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(location, str(exc)) from exc

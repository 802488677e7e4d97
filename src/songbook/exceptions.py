class SongbookError(Exception):
    """Base exception for songbook."""


class FetchError(SongbookError):
    """Raised when an HTTP request for a song fails."""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(f"HTTP {status_code} fetching {url}")


class SourceError(SongbookError):
    """Raised when a local song file cannot be read."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"Cannot read {location}: {reason}")


class KeyParseError(SongbookError):
    """Raised when a key needed for transposition is missing or not a note."""

    def __init__(self, key: str | None):
        self.key = key
        if key is None:
            super().__init__("Song has no {key: ...} directive")
        else:
            super().__init__(f"Not a valid key: {key!r}")

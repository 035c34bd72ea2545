"""Custom exceptions for the Trello API client."""


class TrelloError(Exception):
    """Base exception for Trello API client errors."""


class FetchError(TrelloError):
    """An HTTP GET against the Trello API did not produce a usable body."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class TransportError(FetchError):
    """The request never got a response (DNS, connect, timeout)."""


class BodyReadError(FetchError):
    """A response arrived but its body could not be read in full."""


class UnexpectedStatusError(FetchError):
    """Non-2xx response, raised only when strict status checking is enabled."""

    def __init__(self, message: str, url: str, status_code: int, body: bytes = b"") -> None:
        super().__init__(message, url)
        self.status_code = status_code
        self.body = body


class DecodeError(TrelloError):
    """Response body is not valid JSON or does not match the expected shape."""


class UnboundBoardError(TrelloError):
    """Board has no API client to fetch its cards or members with."""

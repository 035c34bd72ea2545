"""HttpFetcher - synchronous GET requests against the Trello API."""

from __future__ import annotations

import httpx

from trellocli.logging import get_logger, sanitize_for_log
from trellocli.trello.exceptions import BodyReadError, TransportError, UnexpectedStatusError

logger = get_logger("trello.fetcher")

DEFAULT_TIMEOUT = 30.0


class HttpFetcher:
    """Performs single GET requests and returns the raw response body.

    Non-2xx responses are not errors unless ``strict_status`` is set: the
    status line and headers are logged as a warning and the body is
    returned as-is, since Trello puts useful text in error bodies.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        strict_status: bool = False,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize HttpFetcher.

        Args:
            timeout: Request timeout in seconds.
            strict_status: Raise UnexpectedStatusError on non-2xx responses.
            client: Pre-built httpx client (for testing/custom transports).
        """
        self.timeout = timeout
        self.strict_status = strict_status
        self._client = client

    @property
    def client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                headers={"Accept": "application/json"},
                timeout=self.timeout,
                follow_redirects=True,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> HttpFetcher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get(self, url: str) -> bytes:
        """GET a URL and read the full response body.

        Args:
            url: Fully-formed request URL, query string included.

        Returns:
            Raw response body.

        Raises:
            TransportError: If no response could be obtained.
            BodyReadError: If the response body could not be read in full.
            UnexpectedStatusError: On non-2xx status, in strict mode only.
        """
        safe_url = sanitize_for_log(url)
        logger.debug("GET %s", safe_url)

        try:
            with self.client.stream("GET", url) as response:
                if not response.is_success:
                    _log_response_info(response, safe_url)

                try:
                    body = response.read()
                except httpx.RequestError as e:
                    raise BodyReadError(
                        f"Cannot read response body from {safe_url}: {e}", url
                    ) from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(f"Failed to GET {safe_url}: {e}", url) from e

        if self.strict_status and not response.is_success:
            raise UnexpectedStatusError(
                f"GET {safe_url} returned {response.status_code} {response.reason_phrase}",
                url,
                status_code=response.status_code,
                body=body,
            )

        logger.debug("Read %d byte(s) from %s", len(body), safe_url)
        return body


def _log_response_info(response: httpx.Response, safe_url: str) -> None:
    """Log status line, headers and content length of an unexpected response."""
    logger.warning(
        "GET %s returned %s %s", safe_url, response.status_code, response.reason_phrase
    )
    for name, value in response.headers.multi_items():
        logger.warning("  %s: %s", name, value)
    logger.warning("  Content-Length: %s", response.headers.get("content-length", -1))

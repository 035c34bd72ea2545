"""Trello API clients - typed access to boards, cards and members."""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

from trellocli.logging import get_logger, sanitize_for_log
from trellocli.trello.exceptions import DecodeError
from trellocli.trello.fetcher import DEFAULT_TIMEOUT, HttpFetcher
from trellocli.trello.models import Board, Card, Member
from trellocli.trello.params import RequestParams

if TYPE_CHECKING:
    from trellocli.config import TrelloConfig

logger = get_logger("trello.client")

T = TypeVar("T")

DEFAULT_BASE_URL = "https://api.trello.com"

_BOARD_ADAPTER: TypeAdapter[Board] = TypeAdapter(Board)
_CARDS_ADAPTER: TypeAdapter[list[Card]] = TypeAdapter(list[Card])
_MEMBERS_ADAPTER: TypeAdapter[list[Member]] = TypeAdapter(list[Member])


class TrelloApi(Protocol):
    """Interface for a Trello REST API revision."""

    @property
    def version(self) -> int:
        """API revision number used in request paths."""
        ...

    def url_for(self, api_key: str, token: str, *route: str) -> str:
        """Build an authenticated request URL for a route."""
        ...

    def get_board(self, board_id: str) -> Board:
        """Fetch a board."""
        ...

    def get_cards(self, board_id: str) -> list[Card]:
        """Fetch the cards on a board."""
        ...

    def get_members(self, board_id: str) -> list[Member]:
        """Fetch the members of a board."""
        ...


class TrelloApiV1:
    """Client for version 1 of the Trello REST API.

    Configuration is read-only after construction. Every call is a single
    GET/decode cycle with no session state kept between calls.
    """

    def __init__(
        self,
        key: str,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        fetcher: HttpFetcher | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        strict_status: bool = False,
    ) -> None:
        """Initialize the client.

        Args:
            key: Trello API key.
            token: Trello API token.
            base_url: API root (for testing/proxies).
            fetcher: HTTP fetcher to use. One is created, and owned, if omitted.
            timeout: Request timeout in seconds for the created fetcher.
            strict_status: Fail on non-2xx responses in the created fetcher.
        """
        self._key = key
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._owns_fetcher = fetcher is None
        self._fetcher = fetcher or HttpFetcher(timeout=timeout, strict_status=strict_status)

    @classmethod
    def from_config(cls, config: TrelloConfig) -> TrelloApiV1:
        """Create a client from loaded configuration."""
        return cls(
            config.api_key,
            config.token,
            config.base_url,
            timeout=config.timeout,
            strict_status=config.strict_status,
        )

    @property
    def version(self) -> int:
        return 1

    @property
    def key(self) -> str:
        return self._key

    @property
    def token(self) -> str:
        return self._token

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def fetcher(self) -> HttpFetcher:
        return self._fetcher

    def close(self) -> None:
        """Close the fetcher if this client created it."""
        if self._owns_fetcher:
            self._fetcher.close()

    def __enter__(self) -> TrelloApiV1:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def url_for(self, api_key: str, token: str, *route: str) -> str:
        """Build an authenticated request URL.

        Route segments are joined with "/" as given; they are not escaped.

        Args:
            api_key: Trello API key, sent as the ``key`` query parameter.
            token: Trello API token, sent as the ``token`` query parameter.
            *route: Path segments, e.g. ``"boards", board_id, "cards"``.

        Returns:
            ``<base_url>/<version>/<route>?key=...&token=...``
        """
        params = RequestParams()
        params.add_param("key", api_key)
        params.add_param("token", token)

        path = posixpath.normpath(posixpath.join("/", *route)).lstrip("/")
        return f"{self._base_url}/{self.version}/{path}?{params.encode()}"

    def get_board(self, board_id: str) -> Board:
        """Fetch a board.

        Args:
            board_id: Board id or short link.

        Returns:
            The board, bound to this client.

        Raises:
            FetchError: If the request fails.
            DecodeError: If the response is not a board object.
        """
        logger.info("Fetching board %s", board_id)
        url = self.url_for(self._key, self._token, "boards", board_id)
        board = self._get(url, _BOARD_ADAPTER)
        return board.bind(self)

    def get_cards(self, board_id: str) -> list[Card]:
        """Fetch the cards on a board.

        Raises:
            FetchError: If the request fails.
            DecodeError: If the response is not a list of cards.
        """
        logger.info("Fetching cards for board %s", board_id)
        url = self.url_for(self._key, self._token, "boards", board_id, "cards")
        cards = self._get(url, _CARDS_ADAPTER)
        logger.info("Found %d card(s) on board %s", len(cards), board_id)
        return cards

    def get_members(self, board_id: str) -> list[Member]:
        """Fetch the members of a board.

        Raises:
            FetchError: If the request fails.
            DecodeError: If the response is not a list of members.
        """
        logger.info("Fetching members for board %s", board_id)
        url = self.url_for(self._key, self._token, "boards", board_id, "members")
        members = self._get(url, _MEMBERS_ADAPTER)
        logger.info("Found %d member(s) on board %s", len(members), board_id)
        return members

    def _get(self, url: str, adapter: TypeAdapter[T]) -> T:
        """GET a URL and decode its JSON body.

        Raises:
            FetchError: If the request fails.
            DecodeError: If the body is not JSON of the expected shape.
        """
        body = self._fetcher.get(url)
        try:
            return adapter.validate_json(body)
        except ValidationError as e:
            raise DecodeError(
                f"Unexpected response from {sanitize_for_log(url)}: {e}"
            ) from e

"""Trello API client - Typed read access to boards, cards and members."""

from trellocli.trello.client import DEFAULT_BASE_URL, TrelloApi, TrelloApiV1
from trellocli.trello.exceptions import (
    BodyReadError,
    DecodeError,
    FetchError,
    TransportError,
    TrelloError,
    UnboundBoardError,
    UnexpectedStatusError,
)
from trellocli.trello.fetcher import HttpFetcher
from trellocli.trello.models import (
    Board,
    BoardPrefs,
    Card,
    CardBadges,
    Label,
    Member,
    MemberPrefs,
    TimezoneInfo,
    TwoFactor,
)
from trellocli.trello.params import RequestParams

__all__ = [
    "DEFAULT_BASE_URL",
    "Board",
    "BoardPrefs",
    "BodyReadError",
    "Card",
    "CardBadges",
    "DecodeError",
    "FetchError",
    "HttpFetcher",
    "Label",
    "Member",
    "MemberPrefs",
    "RequestParams",
    "TimezoneInfo",
    "TransportError",
    "TrelloApi",
    "TrelloApiV1",
    "TrelloError",
    "TwoFactor",
    "UnboundBoardError",
    "UnexpectedStatusError",
]

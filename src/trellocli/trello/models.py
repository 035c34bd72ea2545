"""Pydantic models for Trello API responses.

Models are frozen snapshots of a single response. Field names are the
snake_case form of Trello's camelCase keys. Unknown keys are ignored, and
missing or null keys fall back to the field default, so a partial payload
never fails to decode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator
from pydantic.alias_generators import to_camel

from trellocli.trello.exceptions import UnboundBoardError

if TYPE_CHECKING:
    from trellocli.trello.client import TrelloApi


class TrelloModel(BaseModel):
    """Base for all Trello records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        """Treat JSON null like an absent key."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


# Board models


class BoardPrefs(TrelloModel):
    """Board preferences (visibility, voting, background styling)."""

    permission_level: str = ""
    voting: str = ""
    comments: str = ""
    invitations: str = ""
    self_join: bool = False
    card_covers: bool = False
    card_aging: str = ""
    calendar_feed_enabled: bool = False
    background: str = ""
    background_color: str = ""
    background_image: str = ""
    background_image_scaled: list[dict[str, Any]] = Field(default_factory=list)
    background_tile: bool = False
    background_brightness: str = ""
    can_be_public: bool = False
    can_be_org: bool = False
    can_be_private: bool = False
    can_invite: bool = False


class Board(TrelloModel):
    """A Trello board.

    A board returned by ``TrelloApi.get_board`` is bound to that client, so
    ``get_cards`` and ``get_members`` reuse its base URL and credentials.
    """

    id: str = ""
    name: str = ""
    desc: str = ""
    desc_data: dict[str, Any] = Field(default_factory=dict)
    closed: bool = False
    id_organization: str = ""
    pinned: bool = False
    url: str = ""
    short_url: str = ""
    label_names: dict[str, str] = Field(default_factory=dict)
    prefs: BoardPrefs = Field(default_factory=BoardPrefs)

    _client: TrelloApi | None = PrivateAttr(default=None)

    def bind(self, client: TrelloApi) -> Board:
        """Attach the client this board was fetched with."""
        self._client = client
        return self

    @property
    def client(self) -> TrelloApi:
        """The client this board is bound to.

        Raises:
            UnboundBoardError: If the board was not fetched through a client.
        """
        if self._client is None:
            raise UnboundBoardError(f"Board {self.id or '<no id>'} is not bound to a client")
        return self._client

    def get_cards(self) -> list[Card]:
        """Fetch the cards on this board."""
        return self.client.get_cards(self.id)

    def get_members(self) -> list[Member]:
        """Fetch the members of this board."""
        return self.client.get_members(self.id)


# Card models


class Label(TrelloModel):
    """A label attached to a card."""

    id: str = ""
    id_board: str = ""
    name: str = ""
    color: str = ""


class CardBadges(TrelloModel):
    """Summary counters shown on the front of a card."""

    attachments: int = 0
    check_items: int = 0
    check_items_checked: int = 0
    comments: int = 0
    votes: int = 0
    description: bool = False
    due: str = ""
    due_complete: bool = False
    viewing_member_voted: bool = False
    subscribed: bool = False
    fogbugz: str = ""


class Card(TrelloModel):
    """A card on a board.

    Due dates and activity timestamps are kept as the raw strings Trello
    sends; they are never parsed.
    """

    id: str = ""
    id_board: str = ""
    id_list: str = ""
    name: str = ""
    desc: str = ""
    desc_data: dict[str, Any] = Field(default_factory=dict)
    closed: bool = False
    due: str = ""
    due_complete: bool = False
    date_last_activity: str = ""
    pos: float = 0.0
    id_short: int = 0
    short_link: str = ""
    short_url: str = ""
    url: str = ""
    subscribed: bool = False
    manual_cover_attachment: bool = False
    id_attachment_cover: str = ""
    id_labels: list[str] = Field(default_factory=list)
    id_members: list[str] = Field(default_factory=list)
    id_members_voted: list[str] = Field(default_factory=list)
    id_checklists: list[str] = Field(default_factory=list)
    labels: list[Label] = Field(default_factory=list)
    check_item_states: list[dict[str, Any]] = Field(default_factory=list)
    limits: dict[str, Any] = Field(default_factory=dict)
    badges: CardBadges = Field(default_factory=CardBadges)


# Member models


class TimezoneInfo(TrelloModel):
    """Current and next UTC offset of a member's timezone."""

    timezone_current: str = ""
    offset_current: int = 0
    timezone_next: str = ""
    offset_next: int = 0
    date_next: str = ""


class TwoFactor(TrelloModel):
    enabled: bool = False
    needs_new_backups: bool = False


class MemberPrefs(TrelloModel):
    """Member notification, locale and security settings."""

    send_summaries: bool = False
    minutes_between_summaries: int = 0
    minutes_before_deadline_to_notify: int = 0
    color_blind: bool = False
    locale: str = ""
    timezone_info: TimezoneInfo = Field(default_factory=TimezoneInfo)
    two_factor: TwoFactor = Field(default_factory=TwoFactor)


class Member(TrelloModel):
    """A Trello member.

    Board member listings only carry id, username and full name; the other
    fields are filled in when Trello returns the full member object.
    """

    id: str = ""
    username: str = ""
    full_name: str = ""
    initials: str = ""
    bio: str = ""
    bio_data: dict[str, Any] = Field(default_factory=dict)
    confirmed: bool = False
    member_type: str = ""
    status: str = ""
    url: str = ""
    email: str = ""
    avatar_hash: str = ""
    avatar_url: str = ""
    avatar_source: str = ""
    gravatar_hash: str = ""
    uploaded_avatar_hash: str = ""
    id_boards: list[str] = Field(default_factory=list)
    id_boards_pinned: list[str] = Field(default_factory=list)
    id_organizations: list[str] = Field(default_factory=list)
    id_enterprise: str = ""
    id_enterprises_admin: list[str] = Field(default_factory=list)
    id_prem_orgs_admin: list[str] = Field(default_factory=list)
    login_types: list[str] = Field(default_factory=list)
    one_time_messages_dismissed: list[str] = Field(default_factory=list)
    premium_features: list[str] = Field(default_factory=list)
    products: list[int] = Field(default_factory=list)
    trophies: list[Any] = Field(default_factory=list)
    prefs: MemberPrefs = Field(default_factory=MemberPrefs)

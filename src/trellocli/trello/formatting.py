"""Plain-text and JSON rendering of Trello records for terminal output."""

from __future__ import annotations

import json
from collections.abc import Sequence

from trellocli.trello.models import Board, Card, Member, TrelloModel


def format_board(board: Board) -> str:
    """Render a board as a short multi-line summary."""
    state = "closed" if board.closed else "open"
    lines = [
        f"{board.name} ({board.id})",
        f"  URL: {board.short_url or board.url}",
        f"  State: {state}, visibility: {board.prefs.permission_level or 'unknown'}",
    ]
    if board.id_organization:
        lines.append(f"  Organization: {board.id_organization}")
    labels = [f"{color}={name}" for color, name in board.label_names.items() if name]
    if labels:
        lines.append(f"  Labels: {', '.join(labels)}")
    if board.desc:
        lines.append(f"  Description: {board.desc}")
    return "\n".join(lines)


def format_card(card: Card) -> str:
    """Render a card as a single line."""
    line = f"{card.id}  {card.name}"
    if card.due:
        done = " (done)" if card.due_complete else ""
        line += f"  due {card.due}{done}"
    badges = card.badges
    if badges.check_items:
        line += f"  [{badges.check_items_checked}/{badges.check_items}]"
    if badges.comments:
        line += f"  {badges.comments} comment(s)"
    return line


def format_member(member: Member) -> str:
    """Render a member as a single line."""
    return f"{member.id}  {member.username}  {member.full_name}".rstrip()


def format_cards(cards: Sequence[Card]) -> str:
    if not cards:
        return "No cards found."
    ordered = sorted(cards, key=lambda c: (c.id_list, c.pos))
    return "\n".join(format_card(card) for card in ordered)


def format_members(members: Sequence[Member]) -> str:
    if not members:
        return "No members found."
    return "\n".join(format_member(member) for member in members)


def to_json(data: TrelloModel | Sequence[TrelloModel]) -> str:
    """Serialize one record or a list of records with Trello's key names."""
    if isinstance(data, TrelloModel):
        payload = data.model_dump(mode="json", by_alias=True)
    else:
        payload = [item.model_dump(mode="json", by_alias=True) for item in data]
    return json.dumps(payload, indent=2)

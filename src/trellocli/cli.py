"""CLI entry point for trellocli.

Read-only access to a Trello board, its cards and its members:

    trellocli board_get <board-id>
    trellocli cards_get <board-id>
    trellocli members_get <board-id>
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from trellocli.config import ConfigError, resolve_config
from trellocli.logging import get_logger, setup_console_logging
from trellocli.trello import TrelloApiV1, TrelloError
from trellocli.trello.formatting import (
    format_board,
    format_cards,
    format_members,
    to_json,
)

logger = get_logger("cli")


def connection_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options shared by every command."""
    options = [
        click.argument("board_id"),
        click.option(
            "--baseurl",
            "base_url",
            default=None,
            help="Trello API endpoint (default: $TRELLO_BASE_URL or https://api.trello.com)",
        ),
        click.option(
            "--apikey",
            "api_key",
            default=None,
            help="Your Trello API key (default: $TRELLO_API_KEY)",
        ),
        click.option(
            "--token",
            default=None,
            help="Your Trello API token (default: $TRELLO_API_TOKEN)",
        ),
        click.option(
            "--timeout",
            type=float,
            default=None,
            help="Request timeout in seconds (default: 30)",
        ),
        click.option(
            "--strict",
            is_flag=True,
            help="Fail on non-2xx responses instead of printing a warning",
        ),
        click.option(
            "--json",
            "as_json",
            is_flag=True,
            help="Print JSON instead of text",
        ),
        click.option(
            "-c",
            "--config",
            "config_path",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="Path to a YAML config file",
        ),
        click.option(
            "-v",
            "--verbose",
            is_flag=True,
            help="Enable verbose output",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(package_name="trellocli")
def main() -> None:
    """trellocli - read Trello boards, cards and members."""
    pass


@main.command("board_get")
@connection_options
def board_get(**options: Any) -> None:
    """Show a board."""
    _run("board_get", **options)


@main.command("cards_get")
@connection_options
def cards_get(**options: Any) -> None:
    """List the cards on a board."""
    _run("cards_get", **options)


@main.command("members_get")
@connection_options
def members_get(**options: Any) -> None:
    """List the members of a board."""
    _run("members_get", **options)


def _run(
    command: str,
    board_id: str,
    base_url: str | None,
    api_key: str | None,
    token: str | None,
    timeout: float | None,
    strict: bool,
    as_json: bool,
    config_path: Path | None,
    verbose: bool,
) -> None:
    """Fetch the board and print what the command asked for.

    Exits with status 1 on missing credentials, bad configuration or any
    Trello API error.
    """
    setup_console_logging(verbose)

    try:
        config = resolve_config(
            config_path,
            api_key=api_key,
            token=token,
            base_url=base_url,
            timeout=timeout,
            strict_status=True if strict else None,
        )
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    if not config.api_key:
        ctx = click.get_current_context()
        click.echo("Error: no API key given (use --apikey or TRELLO_API_KEY)\n", err=True)
        click.echo(ctx.get_help(), err=True)
        sys.exit(1)

    logger.debug("Running %s for board %s against %s", command, board_id, config.base_url)

    try:
        with TrelloApiV1.from_config(config) as api:
            board = api.get_board(board_id)
            if command == "cards_get":
                cards = board.get_cards()
                output = to_json(cards) if as_json else format_cards(cards)
            elif command == "members_get":
                members = board.get_members()
                output = to_json(members) if as_json else format_members(members)
            else:
                output = to_json(board) if as_json else format_board(board)
    except TrelloError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(output)

"""Unit tests for the trellocli command line."""

import json
from pathlib import Path

import httpx
import pytest
from click.testing import CliRunner

from trellocli import cli
from trellocli.config import TrelloConfig
from trellocli.trello import HttpFetcher, TrelloApiV1

ROUTES = {
    "/1/boards/B1": {"id": "B1", "name": "Demo", "url": "https://trello.com/b/B1/demo"},
    "/1/boards/B1/cards": [
        {"id": "c2", "idList": "l1", "name": "Second", "pos": 2},
        {"id": "c1", "idList": "l1", "name": "First", "pos": 1},
    ],
    "/1/boards/B1/members": [{"id": "m1", "username": "ada", "fullName": "Ada Lovelace"}],
}

NO_ENV = {
    "TRELLO_API_KEY": None,
    "TRELLO_API_TOKEN": None,
    "TRELLO_BASE_URL": None,
    "TRELLO_TIMEOUT": None,
    "TRELLO_STRICT_STATUS": None,
}


class Recorder:
    """Captures configs passed to TrelloApiV1.from_config and requests sent."""

    def __init__(self) -> None:
        self.configs: list[TrelloConfig] = []
        self.requests: list[httpx.Request] = []
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        payload = ROUTES.get(request.url.path)
        if payload is None:
            return httpx.Response(404, content=b"The requested resource was not found.")
        return httpx.Response(200, json=payload)

    def from_config(self, config: TrelloConfig) -> TrelloApiV1:
        self.configs.append(config)
        client = httpx.Client(transport=httpx.MockTransport(self.handler))
        fetcher = HttpFetcher(strict_status=config.strict_status, client=client)
        return TrelloApiV1(config.api_key, config.token, config.base_url, fetcher=fetcher)


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> Recorder:
    """Route CLI-created clients through a mock transport."""
    rec = Recorder()
    monkeypatch.setattr(cli.TrelloApiV1, "from_config", rec.from_config)
    return rec


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.mark.unit
class TestBoardGet:
    """Tests for the board_get command."""

    def test_prints_board(self, runner: CliRunner, recorder: Recorder) -> None:
        result = runner.invoke(
            cli.main, ["board_get", "B1", "--apikey", "KEY", "--token", "TOK"], env=NO_ENV
        )

        assert result.exit_code == 0, result.output
        assert "Demo (B1)" in result.output
        assert len(recorder.requests) == 1
        assert dict(recorder.requests[0].url.params) == {"key": "KEY", "token": "TOK"}

    def test_json_output(self, runner: CliRunner, recorder: Recorder) -> None:
        result = runner.invoke(
            cli.main, ["board_get", "B1", "--apikey", "KEY", "--json"], env=NO_ENV
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["name"] == "Demo"

    def test_credentials_from_env(self, runner: CliRunner, recorder: Recorder) -> None:
        env = {**NO_ENV, "TRELLO_API_KEY": "ENVKEY", "TRELLO_API_TOKEN": "ENVTOK"}

        result = runner.invoke(cli.main, ["board_get", "B1"], env=env)

        assert result.exit_code == 0, result.output
        assert recorder.configs[0].api_key == "ENVKEY"
        assert recorder.configs[0].token == "ENVTOK"

    def test_flags_override_env(self, runner: CliRunner, recorder: Recorder) -> None:
        env = {**NO_ENV, "TRELLO_API_KEY": "ENVKEY"}

        result = runner.invoke(
            cli.main,
            ["board_get", "B1", "--apikey", "FLAGKEY", "--baseurl", "http://localhost:9000"],
            env=env,
        )

        assert result.exit_code == 0, result.output
        assert recorder.configs[0].api_key == "FLAGKEY"
        assert recorder.requests[0].url.host == "localhost"

    def test_config_file(self, runner: CliRunner, recorder: Recorder, tmp_path: Path) -> None:
        config_path = tmp_path / "trellocli.yaml"
        config_path.write_text("api_key: FILEKEY\ntoken: FILETOK\ntimeout: 5\n")

        result = runner.invoke(
            cli.main, ["board_get", "B1", "--config", str(config_path)], env=NO_ENV
        )

        assert result.exit_code == 0, result.output
        assert recorder.configs[0].api_key == "FILEKEY"
        assert recorder.configs[0].timeout == 5.0


@pytest.mark.unit
class TestCardsAndMembersGet:
    """Tests for cards_get and members_get."""

    def test_cards_get_fetches_board_then_cards(
        self, runner: CliRunner, recorder: Recorder
    ) -> None:
        result = runner.invoke(cli.main, ["cards_get", "B1", "--apikey", "KEY"], env=NO_ENV)

        assert result.exit_code == 0, result.output
        assert [r.url.path for r in recorder.requests] == ["/1/boards/B1", "/1/boards/B1/cards"]
        lines = [line for line in result.output.splitlines() if line.startswith("c")]
        assert lines == ["c1  First", "c2  Second"]

    def test_members_get(self, runner: CliRunner, recorder: Recorder) -> None:
        result = runner.invoke(
            cli.main, ["members_get", "B1", "--apikey", "KEY", "--json"], env=NO_ENV
        )

        assert result.exit_code == 0, result.output
        assert [r.url.path for r in recorder.requests] == [
            "/1/boards/B1",
            "/1/boards/B1/members",
        ]
        assert json.loads(result.output)[0]["username"] == "ada"


@pytest.mark.unit
class TestUsageErrors:
    """Tests for missing arguments and failures."""

    def test_missing_api_key_prints_usage(self, runner: CliRunner, recorder: Recorder) -> None:
        result = runner.invoke(cli.main, ["board_get", "B1"], env=NO_ENV)

        assert result.exit_code == 1
        assert "no API key" in result.output
        assert "--apikey" in result.output
        assert recorder.requests == []

    def test_missing_board_id(self, runner: CliRunner, recorder: Recorder) -> None:
        result = runner.invoke(cli.main, ["cards_get", "--apikey", "KEY"], env=NO_ENV)

        assert result.exit_code != 0
        assert "BOARD_ID" in result.output
        assert recorder.requests == []

    def test_unknown_command(self, runner: CliRunner) -> None:
        result = runner.invoke(cli.main, ["lists_get", "B1"], env=NO_ENV)

        assert result.exit_code != 0

    def test_bad_timeout_is_config_error(self, runner: CliRunner, recorder: Recorder) -> None:
        result = runner.invoke(
            cli.main, ["board_get", "B1", "--apikey", "KEY", "--timeout", "0"], env=NO_ENV
        )

        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_transport_error_exits_1(self, runner: CliRunner, recorder: Recorder) -> None:
        recorder.error = httpx.ConnectError("connection refused")

        result = runner.invoke(cli.main, ["board_get", "B1", "--apikey", "KEY"], env=NO_ENV)

        assert result.exit_code == 1
        assert "Failed to GET" in result.output
        assert "KEY" not in result.output.replace("--apikey", "")

    def test_strict_flag_fails_on_404(self, runner: CliRunner, recorder: Recorder) -> None:
        result = runner.invoke(
            cli.main, ["board_get", "missing", "--apikey", "KEY", "--strict"], env=NO_ENV
        )

        assert result.exit_code == 1
        assert recorder.configs[0].strict_status is True
        assert "404" in result.output

    def test_decode_error_exits_1(self, runner: CliRunner, recorder: Recorder) -> None:
        """Without --strict a 404 text body fails at decoding instead."""
        result = runner.invoke(
            cli.main, ["board_get", "missing", "--apikey", "KEY"], env=NO_ENV
        )

        assert result.exit_code == 1
        assert "Unexpected response" in result.output

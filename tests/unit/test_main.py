"""Command line tests."""

from __future__ import annotations

import json

import pytest

from untappd_client import main
from untappd_client.config import Settings


@pytest.fixture
def cli(monkeypatch, client):
    """Point the CLI at the fake API with a configured key."""
    monkeypatch.setattr(main, "get_settings", lambda: Settings(untappd_api_key="test-key"))
    monkeypatch.setattr(main, "build_client", lambda settings: client)
    return main.main


def test_cli_prints_envelope(cli, fake_api, capsys):
    fake_api.reply({"http_code": 200, "response": {"user": {"user_name": "bob"}}})

    assert cli(["user-info", "--user", "bob"]) == 0

    output = json.loads(capsys.readouterr().out)
    assert output["response"]["user"]["user_name"] == "bob"
    assert fake_api.last.url.params["user"] == "bob"


def test_cli_trending_options(cli, fake_api):
    assert cli(["trending", "--type", "micro", "--age", "weekly", "--limit", "25"]) == 0

    params = fake_api.last.url.params
    assert params["type"] == "micro"
    assert params["age"] == "weekly"
    assert params["limit"] == "10"


def test_cli_rejects_unknown_sort_without_request(cli, fake_api):
    assert cli(["user-badges", "--user", "bob", "--sort", "newest"]) == 1
    assert fake_api.requests == []


def test_cli_service_error_exit_code(cli, fake_api, capsys):
    fake_api.reply({"http_code": 404, "error": "beer not found"})

    assert cli(["beer-info", "999"]) == 1
    assert capsys.readouterr().out == ""


def test_cli_requires_api_key(monkeypatch, fake_api):
    monkeypatch.setattr(main, "get_settings", lambda: Settings(untappd_api_key=None))
    assert main.main(["beer-search", "stout"]) == 2
    assert fake_api.requests == []


def test_every_command_has_a_handler():
    parser = main.build_parser()
    subparsers = next(action for action in parser._actions if action.dest == "command")
    assert set(subparsers.choices) == set(main.COMMANDS)

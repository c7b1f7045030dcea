"""Settings tests."""

import pytest
from pydantic import ValidationError

from untappd_client import main
from untappd_client.config import URI_BASE, Settings


def test_default_base_url_matches_client():
    assert Settings.model_fields["untappd_base_url"].default == URI_BASE


def test_log_level_is_normalized():
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(log_level="loud")


def test_cli_reports_invalid_configuration(monkeypatch, fake_api):
    def broken_settings():
        return Settings(log_level="loud")

    monkeypatch.setattr(main, "get_settings", broken_settings)
    assert main.main(["beer-search", "stout"]) == 2
    assert fake_api.requests == []

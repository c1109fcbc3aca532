import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from event_planner.config import DEFAULT_API_BASE, DEFAULT_PORT, DEFAULT_WIDGET_PATH, Settings

ENV_VARS = [
    "HOST", "PORT", "EVENTBRITE_API_BASE", "EVENTBRITE_TOKEN", "EVENTBRITE_ORG_ID",
    "EVENTBRITE_TIMEOUT", "EVENT_WIDGET_PATH", "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's own .env out of the picture.
    monkeypatch.chdir(tmp_path)
    yield monkeypatch
    # load_dotenv writes straight into os.environ.
    for name in ENV_VARS:
        os.environ.pop(name, None)


def test_defaults(clean_env, tmp_path):
    settings = Settings.from_env(tmp_path / "missing.env")
    assert settings.port == DEFAULT_PORT
    assert settings.api_base == DEFAULT_API_BASE
    assert settings.widget_path == DEFAULT_WIDGET_PATH
    assert settings.token is None
    assert settings.org_id is None
    assert not settings.has_token
    assert not settings.has_org_id


def test_reads_environment(clean_env, tmp_path):
    clean_env.setenv("PORT", "9000")
    clean_env.setenv("EVENTBRITE_TOKEN", " abc ")
    clean_env.setenv("EVENTBRITE_ORG_ID", "777")
    clean_env.setenv("EVENTBRITE_API_BASE", "https://example.test/v3/")
    clean_env.setenv("EVENTBRITE_TIMEOUT", "5")
    settings = Settings.from_env(tmp_path / "missing.env")
    assert settings.port == 9000
    assert settings.token == "abc"
    assert settings.org_id == "777"
    assert settings.api_base == "https://example.test/v3"
    assert settings.timeout == 5.0


def test_reads_dotenv_file(clean_env, tmp_path):
    env_file = tmp_path / "custom.env"
    env_file.write_text("EVENTBRITE_TOKEN=from-file\nEVENT_WIDGET_PATH=/tmp/widget.html\n")
    settings = Settings.from_env(env_file)
    assert settings.token == "from-file"
    assert settings.widget_path == Path("/tmp/widget.html")


@pytest.mark.parametrize("token, org_id", [
    ("YOUR_TOKEN_HERE", "YOUR_ORG_ID_HERE"),
    ("", "   "),
])
def test_placeholders_and_blanks_count_as_unset(token, org_id):
    settings = Settings(token=token, org_id=org_id)
    assert settings.token is None
    assert settings.org_id is None


def test_settings_are_immutable():
    settings = Settings(token="abc")
    with pytest.raises(ValidationError):
        settings.token = "other"

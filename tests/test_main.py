from unittest.mock import patch

from event_planner import __main__ as entry
from event_planner.config import Settings


def test_cli_flags_override_settings():
    with patch.object(entry.Settings, "from_env", return_value=Settings(port=8787, token="t")), \
            patch.object(entry, "create_app") as create_app, \
            patch.object(entry.uvicorn, "run") as run:
        entry.main(["--port", "9100", "--host", "127.0.0.1", "--log-level", "debug"])

    settings = create_app.call_args.args[0]
    assert settings.port == 9100
    assert settings.host == "127.0.0.1"
    assert settings.token == "t"
    run.assert_called_once_with(create_app.return_value, host="127.0.0.1", port=9100, log_level="debug")


def test_defaults_come_from_environment():
    args = entry.parse_args([])
    assert args.port is None
    assert args.host is None

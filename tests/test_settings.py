from datetime import date

import pytest

from core.settings import envBool, envInt, loadSettings
from servers.cbb_mcp_server.config import currentSeason, seasonLabel
from servers.cbb_mcp_server.models import ToolArgs


def test_load_settings_from_env(monkeypatch):
    monkeypatch.setenv("PORT", "9090")
    monkeypatch.setenv("MCP_API_KEY", "abc")
    monkeypatch.setenv("CFBD_BASKETBALL_KEY", "xyz")
    monkeypatch.setenv("KEEPALIVE_SEC", "0")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    s = loadSettings()
    assert s.port == 9090
    assert s.mcpApiKey == "abc"
    assert s.cbbdApiKey == "xyz"
    assert s.keepaliveSec == 0
    assert s.logLevel == "DEBUG"
    assert s.upstreamTimeoutSec == 10


def test_env_helpers(monkeypatch):
    monkeypatch.setenv("FLAG", "yes")
    monkeypatch.setenv("NUM", "oops")
    assert envBool("FLAG", False) is True
    assert envBool("UNSET_FLAG_FOR_TEST", True) is True
    assert envInt("NUM", 5) == 5


@pytest.mark.parametrize("today, season", [
    (date(2024, 11, 5), 2025),
    (date(2025, 3, 20), 2025),
    (date(2025, 10, 31), 2025),
    (date(2025, 12, 1), 2026),
])
def test_current_season(today, season):
    assert currentSeason(today) == season


def test_season_label():
    assert seasonLabel(2025) == "2024–2025"


def test_tool_args_defaults():
    a = ToolArgs.model_validate({})
    assert a.team == "oklahoma"
    assert a.year == currentSeason()
    assert a.query is None

    b = ToolArgs.model_validate({"team": " Kansas ", "year": 2023.0, "extra": 1})
    assert b.team == "kansas"
    assert b.year == 2023

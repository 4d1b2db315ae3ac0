from apps.cli.cbb_console import parseShortcut

NAMES = {"get_basketball_score", "get_basketball_player_stats"}


def test_shortcut_with_year_and_player():
    assert parseShortcut("player_stats oklahoma 2025 Jalon Moore", NAMES) == (
        "get_basketball_player_stats",
        {"team": "oklahoma", "year": 2025, "query": "Jalon Moore"},
    )


def test_shortcut_full_name_and_defaults():
    assert parseShortcut("get_basketball_score kansas", NAMES) == ("get_basketball_score", {"team": "kansas"})


def test_shortcut_rejects_unknown():
    assert parseShortcut("weather oklahoma", NAMES) is None
    assert parseShortcut("score", NAMES) is None

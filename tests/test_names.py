import pytest

from servers.cbb_mcp_server.names import extractPlayerName, nameMatches


@pytest.mark.parametrize("query, expected", [
    ("Jalon Moore", "Jalon Moore"),
    ("how many points does Jalon Moore average?", "Jalon Moore"),
    ("Jeremiah Fears and Jalon Moore", "Jeremiah Fears"),
    ("stats for Shai O'neal this year", "Shai O'neal"),
    ("Moore", None),
    ("jalon moore", None),
    ("", None),
    (None, None),
])
def test_extract_player_name(query, expected):
    assert extractPlayerName(query) == expected


def test_name_match_is_bidirectional_and_case_insensitive():
    assert nameMatches("Jalon Moore", "JALON MOORE")
    assert nameMatches("Jalon Moore", "Jalon Moore Jr.")
    assert nameMatches("Jalon Moore Jr", "Jalon Moore")
    assert not nameMatches("Jalon Moore", "Jeremiah Fears")


def test_name_match_needs_both_sides():
    assert not nameMatches("Jalon Moore", None)
    assert not nameMatches("Jalon Moore", "")
    assert not nameMatches("", "Jalon Moore")

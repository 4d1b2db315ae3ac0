from datetime import date

# ---------- MCP server identity ----------
PROTOCOL_VERSION = "2025-06-18"
SERVER_NAME      = "cfbd-basketball"
SERVER_VERSION   = "1.0.0"
SERVICE_TITLE    = "CFBD Basketball MCP Server"

# ---------- CFBD basketball endpoints (relative to Settings.baseUrl) ----------
PATH_GAMES          = "/games"
PATH_PLAYER_SEASON  = "/stats/player/season"
PATH_TEAM_SEASON    = "/stats/team/season"
PATH_RANKINGS       = "/rankings"
PATH_SHOOTING       = "/stats/player/shooting/season"
PATH_ROSTER         = "/teams/roster"

# ---------- Tool argument defaults ----------
DEFAULT_TEAM = "oklahoma"
TOP_N        = 5

# ---------- Fixed result texts ----------
MSG_KEY_MISSING = "Error: CFBD Basketball API key not configured"
ICON            = "🏀"

# ---------- JSON-RPC error codes ----------
ERR_UNAUTHORIZED   = -32001
ERR_INVALID_PARAMS = -32602
ERR_NOT_FOUND      = -32601
ERR_INTERNAL       = -32603


def currentSeason(today: date | None = None) -> int:
    """
    Season key for the given day. CFBD keys a season by the calendar year in
    which it ends, and the new season tips off in November:
    2024-11-05 -> 2025, 2025-03-20 -> 2025.
    """
    today = today or date.today()
    return today.year + 1 if today.month >= 11 else today.year


def seasonLabel(year: int) -> str:
    """2025 -> '2024–2025'."""
    return f"{year - 1}–{year}"

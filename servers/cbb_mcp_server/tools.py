import logging
from dataclasses import dataclass
from typing import Any, Callable

import requests

from .cbb_api import CbbApiClient, UpstreamStatusError, seasonParams
from .config import (
    MSG_KEY_MISSING,
    PATH_GAMES,
    PATH_PLAYER_SEASON,
    PATH_RANKINGS,
    PATH_ROSTER,
    PATH_SHOOTING,
    PATH_TEAM_SEASON,
)
from .formatters import (
    formatPlayerStats,
    formatRankings,
    formatRoster,
    formatSchedule,
    formatScore,
    formatShootingStats,
    formatTeamStats,
)
from .models import ToolArgs

logger = logging.getLogger(__name__)


class UnknownToolError(LookupError):
    """tools/call named a tool that is not in the catalog."""


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    path: str
    formatter: Callable[[Any, ToolArgs], str]
    takesQuery: bool = False

    def definition(self) -> dict[str, Any]:
        """MCP tool descriptor with its JSON Schema."""
        properties: dict[str, Any] = {
            "team": {"type": "string", "description": 'Team name (e.g., "oklahoma")'},
            "year": {"type": "number", "description": "Season year, keyed by the year the season ends (default: current season)"},
        }
        if self.takesQuery:
            properties["query"] = {"type": "string", "description": "Optional player name to filter"}
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": {
                "type": "object",
                "properties": properties,
                "required": ["team"],
            },
        }


TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec("get_basketball_score",
             "Get recent basketball game scores and results",
             PATH_GAMES, formatScore),
    ToolSpec("get_basketball_player_stats",
             "Get individual basketball player statistics for a team",
             PATH_PLAYER_SEASON, formatPlayerStats, takesQuery=True),
    ToolSpec("get_basketball_team_stats",
             "Get team basketball statistics for a season",
             PATH_TEAM_SEASON, formatTeamStats),
    ToolSpec("get_basketball_schedule",
             "Get basketball team schedule",
             PATH_GAMES, formatSchedule),
    ToolSpec("get_basketball_rankings",
             "Get basketball team rankings (AP Poll, Coaches Poll)",
             PATH_RANKINGS, formatRankings),
    ToolSpec("get_basketball_shooting_stats",
             "Get shooting statistics (FG%, 3PT%, FT%) for team or player",
             PATH_SHOOTING, formatShootingStats, takesQuery=True),
    ToolSpec("get_basketball_roster",
             "Get current team roster",
             PATH_ROSTER, formatRoster),
)

TOOL_INDEX: dict[str, ToolSpec] = {t.name: t for t in TOOLS}

# Built once; tools/list returns it as-is
TOOL_DEFINITIONS: list[dict[str, Any]] = [t.definition() for t in TOOLS]


def textResult(text: str) -> dict[str, Any]:
    """MCP tools/call result with a single text block."""
    return {"content": [{"type": "text", "text": text}]}


class ToolRegistry:
    """Name -> tool lookup plus the fetch/format pipeline behind tools/call."""

    def __init__(self, api: CbbApiClient):
        self.api = api

    def listTools(self) -> dict[str, Any]:
        return {"tools": TOOL_DEFINITIONS}

    def callTool(self, name: str | None, arguments: Any) -> dict[str, Any]:
        """
        Run one tool and wrap its text in an MCP result.

        Without an upstream key every call, known tool or not, answers with
        the key-missing text.

        Raises:
            UnknownToolError: `name` is not in the catalog.
            pydantic.ValidationError: arguments do not fit ToolArgs.
        """
        if not self.api.configured:
            return textResult(MSG_KEY_MISSING)
        spec = TOOL_INDEX.get(name or "")
        if spec is None:
            raise UnknownToolError(name)
        args = ToolArgs.model_validate(arguments if arguments is not None else {})
        logger.info("  Tool call: %s %s", name, args.model_dump())
        return textResult(self.runTool(spec, args))

    def runTool(self, spec: ToolSpec, args: ToolArgs) -> str:
        """Upstream and data problems come back as explanatory text, never raise."""
        try:
            data = self.api.fetch(spec.path, seasonParams(args.team, args.year))
            return spec.formatter(data, args)
        except UpstreamStatusError as e:
            return str(e)
        except (requests.RequestException, ValueError) as e:
            logger.error("  Error: %s", e)
            return f"Error: {e}"

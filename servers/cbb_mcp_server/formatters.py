"""
CFBD JSON -> short text summaries, one function per MCP tool.

Each formatter follows the same steps:
  1. empty payload guard (before any filtering)
  2. season / status / name filtering
  3. transform (per-game math, ranking, sorting)
  4. text

A field that CFBD did not send drops its output line; nothing is defaulted.
"""

import logging
from typing import Any, Optional

from .config import ICON, TOP_N, currentSeason, seasonLabel
from .models import (
    Game,
    PlayerSeasonStats,
    RankingWeek,
    Roster,
    ShootingStats,
    ShotBlock,
    TeamSeasonStats,
    TotalBlock,
    ToolArgs,
    parseRecords,
)
from .names import extractPlayerName, nameMatches

logger = logging.getLogger(__name__)


# ---------------------------
# Helpers
# ---------------------------
def pct(value: float) -> str:
    """Value already on the 0-100 scale."""
    return f"{value:.1f}%"


def fracPct(value: float) -> str:
    """Value stored as a 0-1 fraction."""
    return pct(value * 100)


def perGame(total: Optional[float], games: Optional[int]) -> Optional[float]:
    if total is None or not games:
        return None
    return total / games


def totalOf(block: Optional[TotalBlock]) -> Optional[float]:
    return block.total if block else None


def pctOf(block: Optional[ShotBlock]) -> Optional[float]:
    return block.pct if block else None


def seasonHint(what: str, team: str, year: int) -> str:
    """Message for a payload that had rows, none of them for the requested season."""
    current = currentSeason()
    msg = f"No {what} found for {team.upper()} in the {seasonLabel(year)} season."
    if year != current:
        return msg + f" Try year={current} for the latest season."
    return msg + " The season may not have started yet."


def gameView(game: Game, team: str) -> tuple[bool, str, Optional[int], Optional[int]]:
    """(isHome, opponent, teamPoints, opponentPoints) from the requested team's side."""
    isHome = (game.homeTeam or "").lower() == team
    if isHome:
        return True, game.awayTeam or "TBD", game.homePoints, game.awayPoints
    return False, game.homeTeam or "TBD", game.awayPoints, game.homePoints


def outcome(teamPoints: int, oppPoints: int) -> str:
    return "W" if teamPoints > oppPoints else "L"


def heightText(height: int | str) -> str:
    """CFBD sends inches as an int on newer rosters, a display string on older ones."""
    if isinstance(height, int):
        return f"{height // 12}'{height % 12}\""
    return str(height)


# ---------------------------
# get_basketball_score
# ---------------------------
def formatScore(data: Any, args: ToolArgs) -> str:
    team, year = args.team, args.year
    if not data:
        return f"No basketball games found for {team.upper()} in {year}"

    completed = [
        g for g in parseRecords(Game, data)
        if g.season in (None, year) and g.isFinal and g.hasScore
    ]
    if not completed:
        return f"No completed games found for {team.upper()} in the {seasonLabel(year)} season yet."

    # ISO timestamps sort chronologically as strings
    game = max(completed, key=lambda g: g.startDate or "")
    isHome, opponent, teamPoints, oppPoints = gameView(game, team)

    lines = [f"{ICON} {team.upper()} BASKETBALL - Most Recent Game", ""]
    lines.append(f"{outcome(teamPoints, oppPoints)} {'vs' if isHome else '@'} {opponent}")
    lines.append(f"Final: {teamPoints}-{oppPoints}")
    if game.startDate:
        lines.append(f"Date: {game.startDate[:10]}")
    lines.append("Status: Final")
    return "\n".join(lines)


# ---------------------------
# get_basketball_player_stats
# ---------------------------
def formatPlayerStats(data: Any, args: ToolArgs) -> str:
    team, year = args.team, args.year
    if not data:
        return f"No player stats found for {team.upper()} basketball in {year}"

    players = [p for p in parseRecords(PlayerSeasonStats, data) if p.season in (None, year)]
    if not players:
        return seasonHint("player stats", team, year)

    playerName = extractPlayerName(args.query)
    if playerName:
        logger.info("Extracted player name: %s", playerName)
        players = [p for p in players if nameMatches(playerName, p.name)]
        if not players:
            return (
                f"{playerName} is not listed in {team.upper()}'s {year} basketball roster.\n\n"
                "This player may:\n"
                "• Play for a different team\n"
                "• Not have recorded stats this season\n"
                "• Have a different spelling of their name"
            )

    if playerName and len(players) == 1:
        return playerDetail(players[0], year)

    ranked = sorted(players, key=lambda p: perGame(p.points, p.games) or 0.0, reverse=True)[:TOP_N]
    lines = [f"{ICON} {team.upper()} BASKETBALL LEADERS - {year}", ""]
    lines.append(f'PLAYERS MATCHING "{playerName}":' if playerName else "TOP SCORERS:")
    for i, p in enumerate(ranked, 1):
        line = f"{i}. {p.name or 'Unknown'}"
        ppg = perGame(p.points, p.games)
        if ppg is not None:
            line += f": {ppg:.1f} PPG"
        lines.append(line)
    return "\n".join(lines)


def playerDetail(p: PlayerSeasonStats, year: int) -> str:
    """Single-player card. Player shooting percentages arrive on the 0-100 scale."""
    lines = [f"{ICON} {(p.name or 'PLAYER').upper()} - {year}", ""]
    if p.team:
        lines.append(f"Team: {p.team}")
    if p.games is not None:
        lines.append(f"Games: {p.games}")

    for label, total in (
        ("Points Per Game", p.points),
        ("Rebounds Per Game", totalOf(p.rebounds)),
        ("Assists Per Game", p.assists),
    ):
        value = perGame(total, p.games)
        if value is not None:
            lines.append(f"{label}: {value:.1f}")

    for label, block in (
        ("FG%", p.fieldGoals),
        ("3PT%", p.threePointFieldGoals),
        ("FT%", p.freeThrows),
    ):
        value = pctOf(block)
        if value is not None:
            lines.append(f"{label}: {pct(value)}")
    return "\n".join(lines)


# ---------------------------
# get_basketball_team_stats
# ---------------------------
def formatTeamStats(data: Any, args: ToolArgs) -> str:
    team, year = args.team, args.year
    if not data:
        return f"No team stats found for {team.upper()} basketball in {year}"

    rows = [r for r in parseRecords(TeamSeasonStats, data) if r.season in (None, year)]
    if not rows:
        return seasonHint("team stats", team, year)

    s = rows[0]
    lines = [f"{ICON} {team.upper()} BASKETBALL TEAM STATS - {year}", ""]
    if s.wins is not None and s.losses is not None:
        lines.append(f"Record: {s.wins}-{s.losses}")
    if s.games is not None:
        lines.append(f"Games: {s.games}")

    ts = s.teamStats
    if ts is None:
        return "\n".join(lines)

    for label, total in (
        ("Points Per Game", totalOf(ts.points)),
        ("Rebounds Per Game", totalOf(ts.rebounds)),
        ("Assists Per Game", ts.assists),
        ("Turnovers Per Game", totalOf(ts.turnovers)),
    ):
        value = perGame(total, s.games)
        if value is not None:
            lines.append(f"{label}: {value:.1f}")

    # team percentages are fractions
    for label, block in (
        ("FG%", ts.fieldGoals),
        ("3PT%", ts.threePointFieldGoals),
        ("FT%", ts.freeThrows),
    ):
        value = pctOf(block)
        if value is not None:
            lines.append(f"{label}: {fracPct(value)}")
    return "\n".join(lines)


# ---------------------------
# get_basketball_schedule
# ---------------------------
def formatSchedule(data: Any, args: ToolArgs) -> str:
    team, year = args.team, args.year
    if not data:
        return f"No schedule found for {team.upper()} basketball in {year}"

    games = [g for g in parseRecords(Game, data) if g.season in (None, year)]
    if not games:
        return seasonHint("schedule", team, year)

    lines = [f"{ICON} {team.upper()} BASKETBALL SCHEDULE - {year}", ""]
    for i, g in enumerate(games, 1):
        isHome, opponent, teamPoints, oppPoints = gameView(g, team)
        line = f"{i}. "
        if g.startDate:
            line += f"{g.startDate[:10]} "
        line += f"{'vs' if isHome else '@'} {opponent}"
        if g.isFinal and g.hasScore:
            line += f" - {outcome(teamPoints, oppPoints)} {teamPoints}-{oppPoints}"
        lines.append(line)
    return "\n".join(lines)


# ---------------------------
# get_basketball_rankings
# ---------------------------
def formatRankings(data: Any, args: ToolArgs) -> str:
    team, year = args.team, args.year
    if not data:
        return f"{team.upper()} was not ranked at any point during the {year} basketball season."

    weeks = parseRecords(RankingWeek, data)
    latest = weeks[-1] if weeks else None

    found: list[str] = []
    for poll in (latest.polls if latest else []):
        hit = next(
            (r for r in poll.ranks if r.rank is not None and (r.school or "").lower() == team),
            None,
        )
        if hit:
            found.append(f"{poll.poll or 'Poll'}: #{hit.rank}")

    if not found:
        return (
            f"{ICON} {team.upper()} - {year} BASKETBALL SEASON\n\n"
            f"{team.upper()} was not ranked in the most recent {year} basketball polls."
        )

    lines = [f"{ICON} {team.upper()} BASKETBALL RANKINGS - {year}", ""]
    if latest.week is not None:
        lines.append(f"Week {latest.week}")
    return "\n".join(lines + found)


# ---------------------------
# get_basketball_shooting_stats
# ---------------------------
def formatShootingStats(data: Any, args: ToolArgs) -> str:
    """Shooting percentages on this endpoint are 0-1 fractions."""
    team, year = args.team, args.year
    if not data:
        return f"No shooting stats found for {team.upper()} basketball in {year}"

    players = parseRecords(ShootingStats, data)
    playerName = extractPlayerName(args.query)

    if playerName:
        player = next((p for p in players if nameMatches(playerName, p.name)), None)
        if player is None:
            return f"No shooting stats found for {playerName} on {team.upper()} in {year}"

        lines = [f"{ICON} {(player.name or playerName).upper()} SHOOTING - {year}", ""]
        for label, value in (
            ("FG%", player.fg_pct),
            ("2PT%", player.two_pt_pct),
            ("3PT%", player.three_pt_pct),
            ("FT%", player.ft_pct),
        ):
            if value is not None:
                lines.append(f"{label}: {fracPct(value)}")
        return "\n".join(lines)

    shooters = sorted(
        (p for p in players if p.three_pt_pct),
        key=lambda p: p.three_pt_pct,
        reverse=True,
    )[:TOP_N]
    if not shooters:
        return f"No 3-point shooting data recorded for {team.upper()} in {year}"

    lines = [f"{ICON} {team.upper()} SHOOTING STATS - {year}", "", "TOP 3-POINT SHOOTERS:"]
    for i, p in enumerate(shooters, 1):
        lines.append(f"{i}. {p.name or 'Unknown'}: {fracPct(p.three_pt_pct)}")
    return "\n".join(lines)


# ---------------------------
# get_basketball_roster
# ---------------------------
def formatRoster(data: Any, args: ToolArgs) -> str:
    team, year = args.team, args.year
    if not data:
        return f"No roster found for {team.upper()} basketball in {year}"

    # CFBD wraps the roster in one envelope per team-season
    rosters = [r for r in parseRecords(Roster, data) if r.season in (None, year)]
    if not rosters or not rosters[0].players:
        return seasonHint("roster", team, year)

    lines = [f"{ICON} {team.upper()} BASKETBALL ROSTER - {year}", ""]
    for i, p in enumerate(rosters[0].players, 1):
        line = f"{i}. "
        if p.jersey is not None:
            line += f"#{p.jersey} "
        line += p.name or "Unknown"
        if p.position:
            line += f" - {p.position}"
        if p.height:
            line += f" ({heightText(p.height)})"
        lines.append(line)
    return "\n".join(lines)

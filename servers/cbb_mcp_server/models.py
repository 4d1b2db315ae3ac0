"""
Typed views over CFBD basketball payloads.

Every field is optional: CFBD omits keys freely and the formatters drop an
output line when its source field is missing. Unknown keys are ignored.
Percentage scale differs per endpoint:
  - PlayerSeasonStats  ...pct on 0-100
  - TeamSeasonStats    ...pct on 0-1
  - ShootingStats      *_pct on 0-1
"""

from typing import Any, Optional, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .config import DEFAULT_TEAM, currentSeason


class Record(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class TotalBlock(Record):
    total: Optional[float] = None


class ShotBlock(Record):
    made: Optional[float] = None
    attempted: Optional[float] = None
    pct: Optional[float] = None


# ---------- /games ----------

class Game(Record):
    season: Optional[int] = None
    startDate: Optional[str] = None
    status: Optional[str] = None
    homeTeam: Optional[str] = None
    awayTeam: Optional[str] = None
    homePoints: Optional[int] = None
    awayPoints: Optional[int] = None

    @property
    def isFinal(self) -> bool:
        return (self.status or "").lower() == "final"

    @property
    def hasScore(self) -> bool:
        return self.homePoints is not None and self.awayPoints is not None


# ---------- /stats/player/season ----------

class PlayerSeasonStats(Record):
    season: Optional[int] = None
    team: Optional[str] = None
    name: Optional[str] = Field(default=None, validation_alias=AliasChoices("name", "player"))
    games: Optional[int] = None
    points: Optional[float] = None
    assists: Optional[float] = None
    rebounds: Optional[TotalBlock] = None
    fieldGoals: Optional[ShotBlock] = None
    threePointFieldGoals: Optional[ShotBlock] = None
    freeThrows: Optional[ShotBlock] = None


# ---------- /stats/team/season ----------

class TeamStatLine(Record):
    points: Optional[TotalBlock] = None
    rebounds: Optional[TotalBlock] = None
    assists: Optional[float] = None
    turnovers: Optional[TotalBlock] = None
    fieldGoals: Optional[ShotBlock] = None
    threePointFieldGoals: Optional[ShotBlock] = None
    freeThrows: Optional[ShotBlock] = None


class TeamSeasonStats(Record):
    season: Optional[int] = None
    team: Optional[str] = None
    games: Optional[int] = None
    wins: Optional[int] = None
    losses: Optional[int] = None
    teamStats: Optional[TeamStatLine] = None


# ---------- /rankings ----------

class PollRank(Record):
    rank: Optional[int] = None
    school: Optional[str] = Field(default=None, validation_alias=AliasChoices("school", "team"))


class Poll(Record):
    poll: Optional[str] = Field(default=None, validation_alias=AliasChoices("poll", "name"))
    ranks: list[PollRank] = []


class RankingWeek(Record):
    season: Optional[int] = None
    week: Optional[int] = None
    polls: list[Poll] = []


# ---------- /stats/player/shooting/season ----------

class ShootingStats(Record):
    name: Optional[str] = Field(default=None, validation_alias=AliasChoices("name", "player"))
    fg_pct: Optional[float] = None
    two_pt_pct: Optional[float] = None
    three_pt_pct: Optional[float] = None
    ft_pct: Optional[float] = None


# ---------- /teams/roster ----------

class RosterPlayer(Record):
    name: Optional[str] = Field(default=None, validation_alias=AliasChoices("name", "player"))
    position: Optional[str] = None
    jersey: Optional[Union[int, str]] = None
    height: Optional[Union[int, str]] = None


class Roster(Record):
    season: Optional[int] = None
    team: Optional[str] = None
    players: list[RosterPlayer] = []


def parseRecords(model: type[Record], data: Any) -> list:
    """
    Validate a CFBD payload into a list of `model`.
    Accepts a JSON array or a single JSON object; non-object items are skipped.
    """
    items = data if isinstance(data, list) else [data]
    return [model.model_validate(x) for x in items if isinstance(x, dict)]


# ---------- tools/call arguments ----------

class ToolArgs(BaseModel):
    """Arguments shared by every basketball tool; unknown keys are ignored."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    team: str = DEFAULT_TEAM
    year: int = Field(default=None, validate_default=True)
    query: Optional[str] = None

    @field_validator("team", mode="before")
    @classmethod
    def normalizeTeam(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_TEAM
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("year", mode="before")
    @classmethod
    def defaultYear(cls, v: Any) -> Any:
        return currentSeason() if v in (None, "") else v

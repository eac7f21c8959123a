"""Pydantic schemas for the JSON files exchanged with the event shell."""

from pydantic import BaseModel, Field, RootModel, field_validator

from .constants import NON_BINARY, TEAM_COLORS
from .roster import parse_gender, parse_helper_marker, parse_no_gender_restriction


class PlayerRecord(BaseModel):
    """Player as written by the shell (roster export, team members, matchup cells)."""

    id: str | None = None
    name: str = Field(..., min_length=1)
    gender: str = NON_BINARY
    score: int = Field(default=0, ge=0)
    no_gender_restriction: bool = Field(default=False, alias='noGenderRestriction')
    is_helper: bool = Field(default=False, alias='isHelper')

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        """Numeric ids from hand-written files become strings; blanks mean missing."""
        if v is None or v == '':
            return None
        return str(v)

    @field_validator('gender', mode='before')
    @classmethod
    def normalize_gender(cls, v):
        """Accept M/F/NB codes as well as Male/Female/NonBinary words."""
        return parse_gender(v)

    @field_validator('score', mode='before')
    @classmethod
    def default_score(cls, v):
        return v or 0

    @field_validator('no_gender_restriction', mode='before')
    @classmethod
    def parse_flexible(cls, v):
        return parse_no_gender_restriction(v)

    @field_validator('is_helper', mode='before')
    @classmethod
    def parse_helper(cls, v):
        return parse_helper_marker(v)

    class Config:
        extra = 'ignore'
        populate_by_name = True


class RosterFile(RootModel[list[PlayerRecord]]):
    """Roster export: a bare list of players."""


class TeamRecord(BaseModel):
    """Team with its members and score."""

    color: str = Field(..., min_length=1)
    members: list[PlayerRecord] = Field(default_factory=list)
    hex: str | None = None
    score: int = Field(default=0, ge=0)

    @field_validator('score', mode='before')
    @classmethod
    def default_score(cls, v):
        return v or 0

    class Config:
        extra = 'ignore'


class ResultsFile(RootModel[list[TeamRecord]]):
    """Results export: a bare list of teams."""


class MatchupSlotRecord(BaseModel):
    """One cell of a round."""

    color: str = Field(..., min_length=1)
    player: PlayerRecord | None = None

    class Config:
        extra = 'ignore'


class MatchupRecord(BaseModel):
    """One round of the playing order."""

    id: int = Field(..., ge=1)
    players: list[MatchupSlotRecord]

    @field_validator('players')
    @classmethod
    def unique_colors(cls, v):
        """A round lists each team colour once."""
        seen = set()
        for slot in v:
            if slot.color in seen:
                raise ValueError(f'Duplicate color in round: {slot.color}')
            seen.add(slot.color)
        return v

    class Config:
        extra = 'ignore'


class SessionFile(BaseModel):
    """Full event export: ``{teams, matchups}``."""

    teams: list[TeamRecord]
    matchups: list[MatchupRecord] = Field(default_factory=list)

    class Config:
        extra = 'ignore'


class RaffleState(BaseModel):
    """Persisted raffle pool: ids already drawn and removed."""

    excluded_ids: list[str] = Field(default_factory=list, alias='excludedIds')

    class Config:
        extra = 'forbid'
        populate_by_name = True


class EventConfig(BaseModel):
    """Event configuration settings."""

    event_name: str = Field(..., min_length=1)
    team_colors: list[str] = Field(..., min_length=1, max_length=len(TEAM_COLORS))
    team_hex: dict[str, str] = Field(default_factory=dict)

    @field_validator('team_colors')
    @classmethod
    def validate_team_colors(cls, v):
        """Ensure colours are known and listed once."""
        for color in v:
            if color not in TEAM_COLORS:
                raise ValueError(f'Invalid team color: {color}')
        if len(set(v)) != len(v):
            raise ValueError('Team colors must be unique')
        return v

    @field_validator('team_hex')
    @classmethod
    def validate_team_hex(cls, v):
        """Ensure hex values look like #rrggbb."""
        for color, value in v.items():
            if not (value.startswith('#') and len(value) == 7):
                raise ValueError(f'Invalid hex for {color}: {value}')
        return v

    class Config:
        extra = 'forbid'

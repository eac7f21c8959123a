"""Data models for the party draft engines.

All models round-trip through plain JSON dicts. Keys follow the shell's
export format (``noGenderRestriction``, ``isHelper``), so files written by
the browser app load here unchanged.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .constants import NON_BINARY, TEAM_HEX


@dataclass
class Player:
    """A registered player."""
    id: str
    name: str
    gender: str = NON_BINARY
    score: int = 0
    no_gender_restriction: bool = False  # "0" marker: flexible, fills gaps only
    is_helper: bool = False  # "H" marker: biased into early/late rows

    @property
    def is_flexible(self) -> bool:
        return self.no_gender_restriction

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'gender': self.gender,
            'score': self.score,
            'noGenderRestriction': self.no_gender_restriction,
            'isHelper': self.is_helper,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Player':
        return cls(
            id=str(data['id']),
            name=data.get('name', ''),
            gender=data.get('gender', NON_BINARY),
            score=int(data.get('score') or 0),
            no_gender_restriction=bool(data.get('noGenderRestriction', False)),
            is_helper=bool(data.get('isHelper', False)),
        )


@dataclass
class Team:
    """A coloured team and its members (insertion order)."""
    color: str
    members: list[Player] = field(default_factory=list)
    score: int = 0
    hex: str = ''

    def __post_init__(self):
        if not self.hex:
            self.hex = TEAM_HEX.get(self.color, '')

    def to_dict(self) -> dict[str, Any]:
        return {
            'color': self.color,
            'members': [m.to_dict() for m in self.members],
            'hex': self.hex,
            'score': self.score,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Team':
        return cls(
            color=data['color'],
            members=[Player.from_dict(m) for m in data.get('members', [])],
            score=int(data.get('score') or 0),
            hex=data.get('hex') or '',
        )


@dataclass
class MatchupSlot:
    """One cell of a round: a team colour and who plays for it (or nobody)."""
    color: str
    player: Optional[Player] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            'color': self.color,
            'player': self.player.to_dict() if self.player else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'MatchupSlot':
        player = data.get('player')
        return cls(color=data['color'], player=Player.from_dict(player) if player else None)


@dataclass
class Matchup:
    """One round of the playing order; ``id`` is its 1-based position."""
    id: int
    players: list[MatchupSlot] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return all(slot.player is None for slot in self.players)

    def slot_for(self, color: str) -> Optional[MatchupSlot]:
        for slot in self.players:
            if slot.color == color:
                return slot
        return None

    def to_dict(self) -> dict[str, Any]:
        return {'id': self.id, 'players': [s.to_dict() for s in self.players]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Matchup':
        return cls(
            id=int(data['id']),
            players=[MatchupSlot.from_dict(s) for s in data.get('players', [])],
        )

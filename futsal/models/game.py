"""
Game model for the Futsal Roster application.

A Game is the historical record of one match: frozen copies of both teams as
they were when the result was submitted, the winning side and the rank changes
applied to every participant.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from .player import Player
from ..utils.constants import TEAM1, TEAM2


@dataclass(frozen=True)
class GamePlayer:
    """Snapshot of a player taken at game time plus the payment flag."""
    player: Player
    paid: bool = False

    @property
    def id(self) -> int:
        return self.player.id

    @property
    def name(self) -> str:
        return self.player.name

    def to_dict(self) -> Dict[str, Any]:
        return {**self.player.to_dict(), "paid": self.paid}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GamePlayer':
        return cls(player=Player.from_dict(data), paid=bool(data.get("paid", False)))


@dataclass(frozen=True)
class RankChange:
    """Rank movement of one participant in one game."""
    player_id: int
    player_name: str
    old_rank: float
    new_rank: float
    change: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "playerId": self.player_id,
            "playerName": self.player_name,
            "oldRank": self.old_rank,
            "newRank": self.new_rank,
            "change": self.change,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RankChange':
        return cls(
            player_id=data["playerId"],
            player_name=data["playerName"],
            old_rank=float(data["oldRank"]),
            new_rank=float(data["newRank"]),
            change=float(data["change"]),
        )


@dataclass(frozen=True)
class Game:
    """
    Immutable record of a played game.

    Attributes:
        id: Unique identifier
        date: ISO timestamp of when the result was recorded
        team1: Participants of the first (red) team
        team2: Participants of the second (blue) team
        winner_team: Either ``"team1"`` or ``"team2"``
        rank_adjustment: Magnitude applied to winners and losers
        rank_changes: One entry per participant

    Raises:
        ValueError: If a player appears twice, the winner is unknown or the
            rank changes do not cover exactly the participants
    """
    id: int
    date: str
    team1: Tuple[GamePlayer, ...]
    team2: Tuple[GamePlayer, ...]
    winner_team: str
    rank_adjustment: float
    rank_changes: Tuple[RankChange, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.winner_team not in (TEAM1, TEAM2):
            raise ValueError(f"Unknown winner team: {self.winner_team}")
        ids = [p.id for p in self.team1] + [p.id for p in self.team2]
        if len(ids) != len(set(ids)):
            raise ValueError("A player cannot be assigned to a game twice")
        changed = [c.player_id for c in self.rank_changes]
        if sorted(changed) != sorted(ids):
            raise ValueError("Rank changes must cover exactly the game participants")

    def participant_ids(self) -> Tuple[int, ...]:
        return tuple(p.id for p in self.team1 + self.team2)

    def team_of(self, player_id: int) -> Optional[str]:
        """Return ``"team1"``/``"team2"`` for a participant, None otherwise."""
        if any(p.id == player_id for p in self.team1):
            return TEAM1
        if any(p.id == player_id for p in self.team2):
            return TEAM2
        return None

    def player_won(self, player_id: int) -> Optional[bool]:
        """True if the player won, False if lost, None if absent."""
        team = self.team_of(player_id)
        if team is None:
            return None
        return team == self.winner_team

    def find_participant(self, player_id: int) -> Optional[GamePlayer]:
        return next((p for p in self.team1 + self.team2 if p.id == player_id), None)

    def rank_change_for(self, player_id: int) -> Optional[RankChange]:
        return next((c for c in self.rank_changes if c.player_id == player_id), None)

    def with_payment(self, player_id: int) -> 'Game':
        """Return a copy of the game with the participant marked as paid."""
        def _mark(team: Tuple[GamePlayer, ...]) -> Tuple[GamePlayer, ...]:
            return tuple(replace(p, paid=True) if p.id == player_id else p for p in team)

        return replace(self, team1=_mark(self.team1), team2=_mark(self.team2))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "team1": [p.to_dict() for p in self.team1],
            "team2": [p.to_dict() for p in self.team2],
            "winnerTeam": self.winner_team,
            "rankAdjustment": self.rank_adjustment,
            "rankChanges": [c.to_dict() for c in self.rank_changes],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Game':
        return cls(
            id=data["id"],
            date=data["date"],
            team1=tuple(GamePlayer.from_dict(p) for p in data.get("team1", [])),
            team2=tuple(GamePlayer.from_dict(p) for p in data.get("team2", [])),
            winner_team=data["winnerTeam"],
            rank_adjustment=float(data["rankAdjustment"]),
            rank_changes=tuple(RankChange.from_dict(c) for c in data.get("rankChanges", [])),
        )

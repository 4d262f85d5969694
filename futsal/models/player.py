"""
Player model for the Futsal Roster application.

This module contains the Player dataclass which represents a member of the
group, including the skill rank used for team balancing and the win/loss
record kept after each recorded game.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..utils.constants import MAX_RANK, MIN_RANK


def clamp_rank(value: float) -> float:
    """Clamp a rank into the [1, 10] scale."""
    return max(MIN_RANK, min(MAX_RANK, value))


@dataclass(frozen=True)
class RankHistoryEntry:
    """One snapshot of a player's rank after a change."""
    date: str
    rank: float
    change: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"date": self.date, "rank": self.rank, "change": self.change}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RankHistoryEntry':
        """Create from dictionary for JSON deserialization."""
        return cls(
            date=data["date"],
            rank=float(data["rank"]),
            change=float(data.get("change") or 0.0),
        )


@dataclass
class Player:
    """
    Represents a player on the roster.

    Attributes:
        id: Unique, stable identifier (creation time in milliseconds)
        name: Display name, never empty
        rank: Current skill rank on the 1-10 scale
        image: Avatar URI (a generated avatar when the user gives none)
        games_played: Number of recorded games played
        wins: Number of recorded games won
        losses: Number of recorded games lost
        rank_history: Append-only list of rank snapshots

    Raises:
        ValueError: On construction when any field constraint is violated
    """
    id: int
    name: str
    rank: float
    image: str = ""
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    rank_history: List[RankHistoryEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Player name is required")
        if not MIN_RANK <= self.rank <= MAX_RANK:
            raise ValueError(f"Player rank must be between {MIN_RANK:g} and {MAX_RANK:g}")
        if min(self.games_played, self.wins, self.losses) < 0:
            raise ValueError("Player counters cannot be negative")
        if self.wins + self.losses != self.games_played:
            raise ValueError("Wins and losses must add up to games played")

    @property
    def win_rate(self) -> float:
        """
        Percentage of recorded games won.

        Returns:
            Win rate as percentage (0.0-100.0), 0.0 when no games were played
        """
        if self.games_played == 0:
            return 0.0
        return self.wins / self.games_played * 100.0

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert player to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the player
        """
        return {
            "id": self.id,
            "name": self.name,
            "rank": self.rank,
            "image": self.image,
            "gamesPlayed": self.games_played,
            "wins": self.wins,
            "losses": self.losses,
            "rankHistory": [entry.to_dict() for entry in self.rank_history],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        """
        Create player from dictionary for JSON deserialization.

        Missing counters and history default to an untouched player.

        Args:
            data: Dictionary representation of player

        Returns:
            Player instance
        """
        return cls(
            id=data["id"],
            name=data["name"],
            rank=float(data["rank"]),
            image=data.get("image") or "",
            games_played=int(data.get("gamesPlayed") or 0),
            wins=int(data.get("wins") or 0),
            losses=int(data.get("losses") or 0),
            rank_history=[
                RankHistoryEntry.from_dict(entry) for entry in data.get("rankHistory") or []
            ],
        )


def find_player(players: List[Player], player_id: int) -> Optional[Player]:
    """Look up a player by id, or None when absent."""
    return next((p for p in players if p.id == player_id), None)

"""Dataclasses representing dashboard and statistics reports."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class RankPoint:
    """One point of a player's rank chart."""

    game: int
    rank: float
    date: str


@dataclass
class RecentGame:
    """A game seen from one participant's side."""

    game_id: int
    date: str
    team: str
    won: bool
    rank_change: Optional[float]


@dataclass
class PlayerStatistics:
    """Aggregated record of a single player."""

    player_id: int
    name: str
    rank: float
    games_played: int
    wins: int
    losses: int
    win_rate: float
    rank_chart: List[RankPoint] = field(default_factory=list)
    recent_games: List[RecentGame] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class DashboardSummary:
    """Headline numbers shown on the landing page."""

    total_players: int
    total_games: int
    average_rank: float
    balance: float
    recent_games: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

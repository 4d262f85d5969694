"""Dataclasses describing a generated two-team split."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .player import Player


@dataclass
class BalancedTeams:
    """Result of the team balancer."""

    team1: List[Player] = field(default_factory=list)
    team2: List[Player] = field(default_factory=list)
    team1_strength: float = 0.0
    team2_strength: float = 0.0
    rebalanced: bool = False

    @property
    def strength_difference(self) -> float:
        return abs(self.team1_strength - self.team2_strength)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team1": [p.to_dict() for p in self.team1],
            "team2": [p.to_dict() for p in self.team2],
            "team1Strength": self.team1_strength,
            "team2Strength": self.team2_strength,
            "strengthDifference": round(self.strength_difference, 2),
            "rebalanced": self.rebalanced,
        }

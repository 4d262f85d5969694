"""Dashboard and per-player statistics for the Futsal Roster."""

from __future__ import annotations

from typing import List

from ..models import (
    DashboardSummary, Game, Player, PlayerStatistics, RankPoint, RecentGame, find_player
)
from ..utils.constants import DASHBOARD_RECENT_GAMES, STATS_RECENT_GAMES, TEAM_LABELS
from .errors import NotFoundError
from .ledger_service import ledger_balance
from .persistence_service import PersistenceService


def average_rank(players: List[Player]) -> float:
    """Mean roster rank rounded to one decimal, 0.0 for an empty roster."""
    if not players:
        return 0.0
    return round(sum(p.rank for p in players) / len(players), 1)


def rank_chart(player: Player) -> List[RankPoint]:
    """Chart series of a player's rank history, numbered from 1."""
    return [
        RankPoint(game=index + 1, rank=entry.rank, date=entry.date)
        for index, entry in enumerate(player.rank_history)
    ]


def recent_games_for(player_id: int, games: List[Game], limit: int = STATS_RECENT_GAMES) -> List[RecentGame]:
    """The player's last ``limit`` games, newest first."""
    played = [g for g in games if g.team_of(player_id) is not None]
    recent = []
    for game in reversed(played[-limit:] if limit else []):
        change = game.rank_change_for(player_id)
        recent.append(RecentGame(
            game_id=game.id,
            date=game.date,
            team=game.team_of(player_id),
            won=bool(game.player_won(player_id)),
            rank_change=change.change if change else None,
        ))
    return recent


class AnalyticsService:
    """
    Generate summaries over the persisted roster, games and ledger.

    Reads the latest documents on every call; never writes.
    """

    def __init__(self, persistence_service: PersistenceService) -> None:
        self.persistence_service = persistence_service

    def dashboard(self) -> DashboardSummary:
        """Build the :class:`DashboardSummary` for the landing page."""
        players = self.persistence_service.load_players()
        games = self.persistence_service.load_games()
        transactions = self.persistence_service.load_transactions()

        total_games = len(games)
        recent = []
        for offset, game in enumerate(reversed(games[-DASHBOARD_RECENT_GAMES:])):
            recent.append({
                "id": game.id,
                "number": total_games - offset,
                "date": game.date,
                "winnerTeam": game.winner_team,
                "winnerLabel": TEAM_LABELS[game.winner_team],
                "players": len(game.team1) + len(game.team2),
            })

        return DashboardSummary(
            total_players=len(players),
            total_games=total_games,
            average_rank=average_rank(players),
            balance=round(ledger_balance(transactions), 2),
            recent_games=recent,
        )

    def player_statistics(self, player_id: int) -> PlayerStatistics:
        """
        Build the statistics page data for one player.

        Raises:
            NotFoundError: If the player is not on the roster
        """
        player = find_player(self.persistence_service.load_players(), player_id)
        if player is None:
            raise NotFoundError(f"Player {player_id} not found")

        return PlayerStatistics(
            player_id=player.id,
            name=player.name,
            rank=player.rank,
            games_played=player.games_played,
            wins=player.wins,
            losses=player.losses,
            win_rate=round(player.win_rate, 1),
            rank_chart=rank_chart(player),
            recent_games=recent_games_for(player.id, self.persistence_service.load_games()),
        )

"""
Web application module for the Futsal Roster.

This module contains the Flask web server exposing the roster, team
generator, game results, history payments and the cofrinho as JSON API
endpoints. Every endpoint reads the latest stored documents through the
services and writes the full result back before answering.
"""
import logging
import os
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..services import NotFoundError, RosterError, SelectionError, ServiceFactory
from ..services.team_balancer import team_strength
from ..utils import APP_TITLE, AppConfig, fmt_currency
from ..utils.constants import (
    DEFAULT_RANK, DEFAULT_RANK_ADJUSTMENT, FINE_OPTIONS, RANK_ADJUSTMENT_OPTIONS, TEAM_LABELS
)

logger = logging.getLogger(__name__)


class WebAppState:
    """
    State holder for the web application.

    Wraps the service factory so every request handler uses services bound
    to the same store.
    """

    def __init__(self, factory: ServiceFactory):
        self.factory = factory

    @property
    def players(self):
        return self.factory.players

    @property
    def games(self):
        return self.factory.games

    @property
    def ledger(self):
        return self.factory.ledger

    @property
    def analytics(self):
        return self.factory.analytics


def _error_response(error: RosterError):
    status = 404 if isinstance(error, NotFoundError) else 400
    return jsonify({"success": False, "error": str(error), "kind": error.kind.value}), status


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _is_id(value: Any) -> bool:
    # bool is an int subclass
    return type(value) is int


def _id_list(data: Dict[str, Any], key: str) -> List[int]:
    """Read a list of player ids from the body, rejecting anything else."""
    value = data.get(key) or []
    if not isinstance(value, list) or not all(_is_id(i) for i in value):
        raise SelectionError(f"{key} must be a list of player ids")
    return value


def create_app(factory: Optional[ServiceFactory] = None) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        factory: Service factory to use, one backed by the configured data
            directory when omitted

    Returns:
        Configured Flask application instance
    """
    if factory is None:
        factory = ServiceFactory.for_directory(AppConfig.from_env().data_dir)
    app_state = WebAppState(factory)

    app = Flask(__name__)
    app.extensions["futsal_state"] = app_state

    @app.errorhandler(RosterError)
    def handle_roster_error(error: RosterError):
        logger.warning("%s %s rejected: %s", request.method, request.path, error)
        return _error_response(error)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        if isinstance(error, HTTPException):
            return error
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"success": False, "error": str(error)}), 500

    # ==================== Dashboard ==================== #

    @app.route("/api/dashboard", methods=["GET"])
    def get_dashboard():
        """Get headline numbers and the latest games."""
        summary = app_state.analytics.dashboard()
        data = summary.to_dict()
        data["balance_display"] = fmt_currency(summary.balance)
        return jsonify({"success": True, "dashboard": data})

    # ==================== Player Management Endpoints ==================== #

    @app.route("/api/players", methods=["GET"])
    def get_players():
        """Get all players."""
        players = [p.to_dict() for p in app_state.players.list_players()]
        return jsonify({"success": True, "players": players, "count": len(players)})

    @app.route("/api/players", methods=["POST"])
    def create_player():
        """Create a new player."""
        data = _json_body()
        player = app_state.players.create_player(
            name=data.get("name") or "",
            rank=data.get("rank", DEFAULT_RANK),
            image=data.get("image"),
        )
        return jsonify({
            "success": True,
            "message": f"Player '{player.name}' created successfully",
            "player": player.to_dict(),
        }), 201

    @app.route("/api/players/<int:player_id>", methods=["GET"])
    def get_player(player_id: int):
        """Get a single player."""
        player = app_state.players.get_player(player_id)
        return jsonify({"success": True, "player": player.to_dict()})

    @app.route("/api/players/<int:player_id>", methods=["PUT"])
    def update_player(player_id: int):
        """Update an existing player's name, rank and avatar."""
        data = _json_body()
        player = app_state.players.update_player(
            player_id,
            name=data.get("name") or "",
            rank=data.get("rank"),
            image=data.get("image"),
        )
        return jsonify({"success": True, "message": "Player updated successfully", "player": player.to_dict()})

    @app.route("/api/players/<int:player_id>", methods=["DELETE"])
    def delete_player(player_id: int):
        """Delete a player from the roster."""
        app_state.players.delete_player(player_id)
        return jsonify({"success": True, "message": f"Player {player_id} deleted successfully"})

    @app.route("/api/players/<int:player_id>/stats", methods=["GET"])
    def get_player_stats(player_id: int):
        """Get statistics for a single player."""
        stats = app_state.analytics.player_statistics(player_id)
        return jsonify({"success": True, "statistics": stats.to_dict()})

    # ==================== Team Generator ==================== #

    @app.route("/api/teams/generate", methods=["POST"])
    def generate_teams():
        """Balance the selected players; ``shuffle`` regenerates a new split."""
        data = _json_body()
        teams = app_state.games.generate_teams(
            _id_list(data, "player_ids"),
            shuffle=bool(data.get("shuffle", False)),
        )
        return jsonify({"success": True, "teams": teams.to_dict()})

    # ==================== Games ==================== #

    @app.route("/api/games", methods=["GET"])
    def get_games():
        """Get recorded games, newest first."""
        games = app_state.games.list_games()
        total = len(games)
        payload = []
        for index, game in enumerate(games):
            data = game.to_dict()
            data["number"] = total - index
            data["winnerLabel"] = TEAM_LABELS[game.winner_team]
            payload.append(data)
        return jsonify({"success": True, "games": payload, "count": total})

    @app.route("/api/games", methods=["POST"])
    def record_game():
        """Record a game result and update player ranks."""
        data = _json_body()
        game = app_state.games.record_result(
            team1_ids=_id_list(data, "team1"),
            team2_ids=_id_list(data, "team2"),
            winner=data.get("winner"),
            rank_adjustment=data.get("rank_adjustment", DEFAULT_RANK_ADJUSTMENT),
        )
        return jsonify({
            "success": True,
            "message": "Result recorded, player ranks updated",
            "game": game.to_dict(),
        }), 201

    @app.route("/api/games/strength", methods=["POST"])
    def selection_strength():
        """Average rank of two hand-picked teams while building a result."""
        data = _json_body()
        players = {p.id: p for p in app_state.players.list_players()}
        team1 = [players[i] for i in _id_list(data, "team1") if i in players]
        team2 = [players[i] for i in _id_list(data, "team2") if i in players]
        return jsonify({
            "success": True,
            "team1Strength": team_strength(team1),
            "team2Strength": team_strength(team2),
        })

    @app.route("/api/games/<int:game_id>/payments", methods=["POST"])
    def register_payment(game_id: int):
        """Mark a participant as paid, optionally charging a fine."""
        data = _json_body()
        player_id = data.get("player_id")
        if not _is_id(player_id):
            raise SelectionError("player_id is required")
        game = app_state.games.register_payment(game_id, player_id, fine_code=data.get("fine"))
        return jsonify({"success": True, "game": game.to_dict()})

    @app.route("/api/fines", methods=["GET"])
    def get_fines():
        """Get the fine presets."""
        fines = [
            {"code": code, "label": label, "amount": amount}
            for code, (label, amount) in FINE_OPTIONS.items()
        ]
        return jsonify({"success": True, "fines": fines, "rank_adjustments": RANK_ADJUSTMENT_OPTIONS})

    # ==================== Cofrinho ==================== #

    @app.route("/api/cofrinho", methods=["GET"])
    def get_cofrinho():
        """Get the ledger, newest first, with the current balance."""
        transactions = app_state.ledger.list_transactions()
        balance = round(app_state.ledger.balance(), 2)
        return jsonify({
            "success": True,
            "balance": balance,
            "balance_display": fmt_currency(balance),
            "transactions": [t.to_dict() for t in transactions],
            "count": len(transactions),
        })

    @app.route("/api/cofrinho", methods=["POST"])
    def add_transaction():
        """Add or remove money from the cofrinho."""
        data = _json_body()
        transaction = app_state.ledger.add_transaction(
            transaction_type=data.get("type", "add"),
            amount=data.get("amount"),
            description=str(data.get("description") or ""),
        )
        return jsonify({
            "success": True,
            "transaction": transaction.to_dict(),
            "balance": round(app_state.ledger.balance(), 2),
        }), 201

    @app.route("/api/cofrinho/<int:transaction_id>", methods=["DELETE"])
    def delete_transaction(transaction_id: int):
        """Delete a manual transaction."""
        app_state.ledger.delete_transaction(transaction_id)
        return jsonify({"success": True, "balance": round(app_state.ledger.balance(), 2)})

    return app


def run_web_app(config: Optional[AppConfig] = None) -> None:
    """
    Run the web application.

    Args:
        config: Runtime configuration, read from the environment when omitted
    """
    config = config or AppConfig.from_env()
    app = create_app(ServiceFactory.for_directory(config.data_dir))
    logger.info("Starting %s on %s:%d (data in %s)", APP_TITLE, config.host, config.port, os.path.abspath(config.data_dir))
    app.run(host=config.host, port=config.port, debug=False)

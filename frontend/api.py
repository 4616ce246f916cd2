# frontend/api.py

import logging
import threading
import uuid
from collections import OrderedDict
from dataclasses import replace

from flask import Blueprint, current_app, jsonify, request

from backend.errors import DuplicateName
from backend.game import GameSession

api_blueprint = Blueprint("api", __name__)

logger = logging.getLogger(__name__)


class GameRegistry:
    """
    Live game sessions keyed by game id. Each id also remembers whether its
    finished game has already been put on the leaderboard.

    At most max_games sessions are kept; creating one more evicts the game
    that was used least recently.
    """

    def __init__(self, max_games: int = 1000):
        self.max_games = max_games
        self._games = OrderedDict()
        self._recorded = set()
        self._lock = threading.Lock()

    def create(self, game: GameSession) -> str:
        game_id = uuid.uuid4().hex
        with self._lock:
            self._games[game_id] = game
            while len(self._games) > self.max_games:
                evicted, _ = self._games.popitem(last=False)
                self._recorded.discard(evicted)
                logger.debug("Evicted game %s", evicted)
        return game_id

    def get(self, game_id):
        if not isinstance(game_id, str):
            return None
        with self._lock:
            game = self._games.get(game_id)
            if game is not None:
                self._games.move_to_end(game_id)
            return game

    def discard(self, game_id) -> bool:
        if not isinstance(game_id, str):
            return False
        with self._lock:
            self._recorded.discard(game_id)
            return self._games.pop(game_id, None) is not None

    def mark_recorded(self, game_id) -> bool:
        with self._lock:
            if game_id in self._recorded:
                return False
            self._recorded.add(game_id)
            return True

    def unmark_recorded(self, game_id):
        with self._lock:
            self._recorded.discard(game_id)

    def __len__(self):
        return len(self._games)


def _registry() -> GameRegistry:
    return current_app.config["GAMES"]


def _leaderboard():
    return current_app.config["LEADERBOARD"]


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _lookup_game(data):
    game = _registry().get(data.get("game_id"))
    if game is None:
        return None, (jsonify({"error": "Unknown game"}), 404)
    return game, None


def _game_over_payload(game: GameSession) -> dict:
    payload = {"state": game.get_state()}
    if game.is_game_over():
        payload["qualifies"] = _leaderboard().qualifies(game.tiles_revealed)
    return payload


@api_blueprint.route("/new_game", methods=["POST"])
def new_game():
    data = request.get_json(silent=True) or {}
    seed = data.get("seed")
    if seed is not None and not _is_int(seed):
        return jsonify({"error": "Invalid input"}), 400

    config = current_app.config["GAME_CONFIG"]
    if seed is not None:
        config = replace(config, seed=seed)
    game = GameSession.from_config(config)
    game_id = _registry().create(game)
    return jsonify({"game_id": game_id, "state": game.get_state()})


@api_blueprint.route("/reveal", methods=["POST"])
def reveal():
    data = request.get_json(silent=True) or {}
    row = data.get("row")
    col = data.get("col")
    if not _is_int(row) or not _is_int(col):
        return jsonify({"error": "Invalid input"}), 400

    game, error = _lookup_game(data)
    if error:
        return error

    outcome = game.on_reveal(row, col)
    payload = _game_over_payload(game)
    payload["outcome"] = outcome.to_dict()
    return jsonify(payload)


@api_blueprint.route("/flag", methods=["POST"])
def flag():
    data = request.get_json(silent=True) or {}
    row = data.get("row")
    col = data.get("col")
    if not _is_int(row) or not _is_int(col):
        return jsonify({"error": "Invalid input"}), 400

    game, error = _lookup_game(data)
    if error:
        return error

    flagged = game.on_flag_toggle(row, col)
    return jsonify({"flagged": flagged, "state": game.get_state()})


@api_blueprint.route("/tick", methods=["POST"])
def tick():
    data = request.get_json(silent=True) or {}
    game, error = _lookup_game(data)
    if error:
        return error
    return jsonify({"elapsed_seconds": game.on_tick()})


@api_blueprint.route("/reset", methods=["POST"])
def reset():
    data = request.get_json(silent=True) or {}
    game, error = _lookup_game(data)
    if error:
        return error

    game.reset()
    _registry().unmark_recorded(data["game_id"])
    return jsonify({"game_id": data["game_id"], "state": game.get_state()})


@api_blueprint.route("/game/<game_id>", methods=["DELETE"])
def discard_game(game_id):
    if not _registry().discard(game_id):
        return jsonify({"error": "Unknown game"}), 404
    return jsonify({"game_id": game_id, "discarded": True})


@api_blueprint.route("/state/<game_id>", methods=["GET"])
def get_state(game_id):
    game, error = _lookup_game({"game_id": game_id})
    if error:
        return error
    payload = _game_over_payload(game)
    payload["encoded_board"] = game.encoded_board().tolist()
    return jsonify(payload)


@api_blueprint.route("/leaderboard", methods=["GET"])
def get_leaderboard():
    return jsonify(_leaderboard().to_list())


@api_blueprint.route("/leaderboard", methods=["POST"])
def submit_score():
    """
    Record a finished game under a player name. The client keeps asking for
    a name while this answers 409 (name taken); a player who cancels simply
    never posts.
    """
    data = request.get_json(silent=True) or {}
    name = data.get("name")
    if not isinstance(name, str):
        return jsonify({"error": "Invalid input"}), 400

    game, error = _lookup_game(data)
    if error:
        return error
    if not game.is_game_over():
        return jsonify({"error": "Game is not finished"}), 400

    registry = _registry()
    if not registry.mark_recorded(data["game_id"]):
        return jsonify({"error": "Score already recorded"}), 400

    try:
        accepted, entries = _leaderboard().submit(name, game.tiles_revealed)
    except DuplicateName as exc:
        registry.unmark_recorded(data["game_id"])
        return jsonify({"error": str(exc), "name": exc.name}), 409
    except ValueError as exc:
        registry.unmark_recorded(data["game_id"])
        return jsonify({"error": str(exc)}), 400

    body = {"accepted": accepted, "leaderboard": [entry.to_dict() for entry in entries]}
    return jsonify(body), (201 if accepted else 200)

# frontend/api.py

import asyncio
import logging

from flask import Blueprint, current_app, jsonify, request

from backend.config import UnknownDifficulty, get_difficulty, list_difficulties, load_config
from backend.errors import HintProviderError, InvalidDimensions, MinesweeperError
from backend.game import GameSession
from backend.grid import Difficulty
from models import UnknownProvider, get_provider

logger = logging.getLogger(__name__)

api_blueprint = Blueprint("api", __name__)

# One global session; the presentation layer is single-player.
game = None


def _config():
    return current_app.config.get("MINESWEEPER", None) or load_config()


def _hint_provider(name=None):
    hint_cfg = _config().get("hint", {})
    return get_provider(name or hint_cfg.get("provider", "local"), config=hint_cfg)


def _difficulty_from_request(data):
    if "difficulty" in data:
        return get_difficulty(data["difficulty"], _config())
    if any(key in data for key in ("rows", "cols", "mine_count")):
        try:
            rows = int(data.get("rows", 9))
            cols = int(data.get("cols", 9))
            mine_count = int(data.get("mine_count", 10))
        except (TypeError, ValueError):
            raise InvalidDimensions("rows, cols and mine_count must be integers.") from None
        return Difficulty(name=data.get("name", "custom"), rows=rows, cols=cols, mine_count=mine_count)
    return get_difficulty(config=_config())


@api_blueprint.errorhandler(MinesweeperError)
def handle_engine_error(error):
    if isinstance(error, HintProviderError):
        return jsonify({"error": str(error)}), 503
    return jsonify({"error": str(error)}), 400


@api_blueprint.errorhandler(UnknownDifficulty)
def handle_unknown_difficulty(error):
    return jsonify({"error": error.args[0]}), 400


@api_blueprint.errorhandler(UnknownProvider)
def handle_unknown_provider(error):
    return jsonify({"error": error.args[0]}), 400


@api_blueprint.route("/difficulties", methods=["GET"])
def difficulties():
    return jsonify([d.to_dict() for d in list_difficulties(_config())])


@api_blueprint.route("/new_game", methods=["POST"])
def new_game():
    global game
    data = request.get_json(silent=True) or {}
    difficulty = _difficulty_from_request(data)

    game = GameSession(difficulty, seed=data.get("seed"), provider=_hint_provider(data.get("provider")))
    logger.info("New %s game (%dx%d, %d mines)", difficulty.name, difficulty.rows, difficulty.cols,
                difficulty.mine_count)
    return jsonify(game.get_state())


def _require_game():
    if game is None:
        return jsonify({"error": "No active game. POST /api/new_game first."}), 409
    return None


@api_blueprint.route("/step", methods=["POST"])
def step():
    missing = _require_game()
    if missing:
        return missing

    data = request.get_json(silent=True) or {}
    action = data.get("action")
    row = data.get("row")
    col = data.get("col")

    if action not in {"reveal", "flag"} or not isinstance(row, int) or not isinstance(col, int):
        return jsonify({"error": "Invalid input"}), 400

    result = game.step(action, row, col)
    return jsonify(result)


@api_blueprint.route("/state", methods=["GET"])
def get_state():
    missing = _require_game()
    if missing:
        return missing
    return jsonify(game.get_state())


@api_blueprint.route("/hint", methods=["POST"])
def hint():
    missing = _require_game()
    if missing:
        return missing

    data = request.get_json(silent=True) or {}
    # A provider named here answers this request only; the session keeps its own.
    provider = _hint_provider(data["provider"]) if data.get("provider") else None

    suggestion = asyncio.run(game.request_hint_async(provider))
    return jsonify({
        "hint": suggestion.to_dict() if suggestion else None,
        "state": game.get_state(),
    })


@api_blueprint.route("/autoplay", methods=["POST"])
def autoplay():
    """
    Let a hint provider play a fresh game to the end, following every
    suggestion. The first click goes to the board center.
    """
    global game
    data = request.get_json(silent=True) or {}
    # No simulated latency while autoplaying.
    provider = get_provider(data.get("provider", "local"), config={"seed": data.get("seed")})
    difficulty = _difficulty_from_request(data)
    game = GameSession(difficulty, seed=data.get("seed"), provider=provider)

    frames = []
    row, col = difficulty.rows // 2, difficulty.cols // 2
    reasoning = "Opening move in the center of the board."
    while not game.is_game_over():
        state = game.reveal(row, col)
        frames.append({
            "state": state,
            "action": {"type": "reveal", "row": row, "col": col, "reasoning": reasoning},
        })
        suggestion = game.request_hint()
        if suggestion is None:
            break
        row, col, reasoning = suggestion.row, suggestion.col, suggestion.reasoning

    return jsonify({
        "frames": frames,
        "final": game.get_state(),
    })


@api_blueprint.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "OK"})

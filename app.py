import logging
import os

import redis
from dotenv import load_dotenv
from flask import Blueprint, Flask, abort, current_app, jsonify, request, session
from flask_session import Session
from sqlalchemy.exc import SQLAlchemyError

from db import database
from db.results import leaderboard, list_results, save_result
from game import WON, GameRound, RoundFinished
from game_logic import (
    DIFFICULTIES,
    InvalidGuess,
    UnsupportedDifficulty,
    evaluate_guess,
    is_valid_word,
    max_attempts_for,
    random_word,
)

load_dotenv()

api = Blueprint("api", __name__, url_prefix="/api")

ROUND_KEY = "round"
MAX_PLAYER_NAME = 50
MAX_RESULTS_LIMIT = 200
MAX_TIME_SECONDS = 2**31 - 1


# Flask app setup
def create_app(config=None):
    """Factory function to create and configure Flask app."""
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY", "dev-secret-change-in-production")
    app.config["DATABASE_URL"] = os.environ.get("DATABASE_URL", database.DATABASE_URL)
    app.config["REDIS_URL"] = os.environ.get("REDIS_URL", "redis://localhost:6379/0")
    app.config["SESSION_TYPE"] = os.environ.get("SESSION_TYPE", "redis") or None
    app.config["SESSION_PERMANENT"] = False
    app.config["SESSION_USE_SIGNER"] = True
    app.config["REQUIRE_VALID_WORDS"] = os.environ.get("REQUIRE_VALID_WORDS", "").lower() in ("1", "true", "yes")
    app.config["LOG_LEVEL"] = os.environ.get("LOG_LEVEL", "INFO")
    if config:
        app.config.update(config)

    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Redis-backed server-side sessions; no SESSION_TYPE keeps Flask's cookie session
    if app.config["SESSION_TYPE"] == "redis" and not app.config.get("SESSION_REDIS"):
        app.config["SESSION_REDIS"] = redis.from_url(app.config["REDIS_URL"])
    if app.config["SESSION_TYPE"]:
        Session(app)

    database.bind_engine(app.config["DATABASE_URL"])
    database.init_database()

    app.register_blueprint(api)
    register_error_handlers(app)
    return app


def register_error_handlers(app):
    @app.errorhandler(InvalidGuess)
    @app.errorhandler(UnsupportedDifficulty)
    def invalid_input(e):
        current_app.logger.warning("Rejected input: %s", e)
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(400)
    def bad_request(e):
        return jsonify({"error": e.description}), 400

    @app.errorhandler(404)
    def not_found(e):
        if request.path.startswith("/api/"):
            return jsonify({"error": f"Endpoint {request.method} {request.path} not found"}), 404
        return e

    @app.errorhandler(405)
    def method_not_allowed(e):
        if request.path.startswith("/api/"):
            return jsonify({"error": f"Method {request.method} not allowed on {request.path}"}), 405
        return e

    @app.errorhandler(SQLAlchemyError)
    def database_error(e):
        current_app.logger.exception("Database error")
        return jsonify({"error": "Database error"}), 500

    @app.errorhandler(500)
    def internal_error(e):
        return jsonify({"error": "Internal server error"}), 500


@api.before_request
def log_request():
    current_app.logger.info("%s %s", request.method, request.path)


# --------------------
# Request helpers
# --------------------
def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _text_field(data, name):
    value = data.get(name)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def _int_field(data, name, minimum, maximum):
    value = data.get(name)
    if isinstance(value, bool) or not isinstance(value, int) or not minimum <= value <= maximum:
        abort(400, description=f"'{name}' must be an integer between {minimum} and {maximum}")
    return value


def _difficulty(value):
    try:
        length = int(value)
    except (TypeError, ValueError):
        raise UnsupportedDifficulty(f"Unsupported difficulty: {value}")
    max_attempts_for(length)
    return length


def _optional_difficulty():
    value = request.args.get("difficulty")
    return _difficulty(value) if value else None


def _load_round():
    data = session.get(ROUND_KEY)
    return GameRound.from_dict(data) if data else None


# --------------------
# Words and stateless evaluation
# --------------------
@api.route("/word")
def get_word():
    """Random target word for a difficulty tier."""
    length = _difficulty(request.args.get("difficulty", 5))
    return jsonify({
        "word": random_word(length),
        "length": length,
        "max_attempts": DIFFICULTIES[length],
    })


@api.route("/guess", methods=["POST"])
def evaluate():
    """Score a guess against a target supplied by the client."""
    data = _json_body()
    guess = _text_field(data, "guess")
    target = _text_field(data, "target")

    if guess is None or target is None:
        abort(400, description="Guess and target are required")
    if not guess.isalpha() or not target.isalpha():
        abort(400, description="Guess and target must contain only letters")

    result = evaluate_guess(guess, target)
    return jsonify({
        "guess": result.guess,
        "result": result.labels,
        "solved": result.solved,
    })


# --------------------
# Game records
# --------------------
@api.route("/results", methods=["POST"])
def create_result():
    """Append a finished game."""
    data = _json_body()
    player = _text_field(data, "player")
    target = _text_field(data, "word")

    if player is None or target is None:
        abort(400, description="Player and word are required")
    if len(player) > MAX_PLAYER_NAME:
        abort(400, description=f"Player name must be at most {MAX_PLAYER_NAME} characters")

    difficulty = _difficulty(data.get("difficulty"))
    if len(target) != difficulty:
        abort(400, description=f"Word must have {difficulty} letters")
    attempts = _int_field(data, "attempts", 0, max_attempts_for(difficulty))
    time_seconds = _int_field(data, "time", 0, MAX_TIME_SECONDS)
    won = data.get("won")
    if not isinstance(won, bool):
        abort(400, description="'won' must be true or false")

    with database.get_db() as db:
        record = save_result(db, player, target, attempts, time_seconds, difficulty, won)
        return jsonify(record.to_dict()), 201


@api.route("/results")
def get_results():
    """Newest game records first."""
    difficulty = _optional_difficulty()
    limit = request.args.get("limit", 50, type=int)
    limit = max(1, min(limit, MAX_RESULTS_LIMIT))

    with database.get_db() as db:
        return jsonify([r.to_dict() for r in list_results(db, difficulty, limit)])


@api.route("/leaderboard")
def get_leaderboard():
    """Top players by wins."""
    difficulty = _optional_difficulty()
    with database.get_db() as db:
        return jsonify({"difficulty": difficulty, "leaderboard": leaderboard(db, difficulty)})


# --------------------
# Server-held round
# --------------------
@api.route("/round", methods=["POST"])
def start_round():
    """Start a round and keep its target in the session."""
    data = _json_body()
    player = _text_field(data, "player")
    if player is None:
        abort(400, description="Player name is required")
    if len(player) > MAX_PLAYER_NAME:
        abort(400, description=f"Player name must be at most {MAX_PLAYER_NAME} characters")

    length = _difficulty(data.get("difficulty"))
    game_round = GameRound(random_word(length), player=player)
    session[ROUND_KEY] = game_round.to_dict()
    current_app.logger.info("Round started for %s (difficulty %d)", player, length)
    return jsonify(game_round.public_view()), 201


@api.route("/round")
def get_round():
    game_round = _load_round()
    if game_round is None:
        return jsonify({"error": "No active round"}), 404
    return jsonify(game_round.public_view())


@api.route("/round/guess", methods=["POST"])
def submit_round_guess():
    """Score a guess against the session round's target."""
    game_round = _load_round()
    if game_round is None:
        abort(400, description="No active round")

    guess = _text_field(_json_body(), "guess")
    if guess is None:
        abort(400, description="Guess is required")
    if not guess.isalpha():
        abort(400, description="Guess must contain only letters")
    if current_app.config["REQUIRE_VALID_WORDS"] and not is_valid_word(guess):
        abort(400, description="Not in word list")

    try:
        result = game_round.submit(guess)
    except RoundFinished as e:
        abort(400, description=str(e))
    session[ROUND_KEY] = game_round.to_dict()

    if game_round.is_over:
        current_app.logger.info("Round %s for %s after %d attempts",
                                game_round.status, game_round.player, game_round.attempts)
        with database.get_db() as db:
            save_result(db, game_round.player, game_round.target, game_round.attempts,
                        game_round.elapsed_seconds, game_round.difficulty,
                        game_round.status == WON)

    view = game_round.public_view()
    view.update({"guess": result.guess, "result": result.labels})
    return jsonify(view)


if __name__ == "__main__":
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
    app = create_app()
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=os.environ.get("FLASK_DEBUG") == "1")

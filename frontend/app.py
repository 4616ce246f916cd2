# frontend/app.py

import logging
import os

from flask import Flask

from backend.config import DEFAULT_CONFIG_PATH, GameConfig, load_config
from backend.leaderboard import LeaderboardRanker
from backend.storage import LeaderboardStore
from frontend.api import GameRegistry, api_blueprint


def create_app(config: GameConfig = None, store: LeaderboardStore = None) -> Flask:
    """
    Build the Flask app. The leaderboard is loaded once here and shared by
    every game the app serves.
    """
    config = (config or GameConfig()).validate()
    if store is None:
        store = LeaderboardStore(config.scores_path, config.scores_key)

    app = Flask(__name__)
    app.config["GAME_CONFIG"] = config
    app.config["GAMES"] = GameRegistry(max_games=config.max_games)
    app.config["LEADERBOARD"] = LeaderboardRanker(capacity=config.leaderboard_size, store=store)
    app.register_blueprint(api_blueprint, url_prefix="/api")
    return app


def main():
    import argparse

    parser = argparse.ArgumentParser()
    parser.add_argument("--port", type=int, default=5000, help="Port to run the server on")
    parser.add_argument("--host", type=str, default="0.0.0.0", help="Host IP")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="path to game config yaml")
    parser.add_argument("--config-name", default="default", help="config section inside the yaml file")
    parser.add_argument("--scores", default=None, help="leaderboard file (overrides config)")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config = load_config(args.config, args.config_name)
    if args.scores:
        config.scores_path = os.path.abspath(args.scores)

    app = create_app(config)
    print(f"Running on http://{args.host}:{args.port}/")
    app.run(debug=args.debug, host=args.host, port=args.port)


if __name__ == "__main__":
    main()

# frontend/app.py

import logging

from flask import Flask

from backend.config import load_config
from frontend.api import api_blueprint


def create_app(config=None):
    app = Flask(__name__)
    app.config["MINESWEEPER"] = config if config is not None else load_config()
    app.register_blueprint(api_blueprint, url_prefix="/api")
    return app


def main():
    import argparse

    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default=None, help="Path to a YAML config file")
    parser.add_argument("--port", type=int, default=None, help="Port to run the server on")
    parser.add_argument("--host", type=str, default=None, help="Host IP")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

    config = load_config(args.config)
    server_cfg = config.get("server", {})
    host = args.host or server_cfg.get("host", "0.0.0.0")
    port = args.port or int(server_cfg.get("port", 5000))

    app = create_app(config)
    print(f"Running on http://{host}:{port}/")
    app.run(debug=args.debug, host=host, port=port)


if __name__ == "__main__":
    main()

"""
API gateway: combines the users and events blueprints.
This is the local entrypoint for development.
"""

import logging

from flask import Flask, jsonify
from flask_cors import CORS

from eventboard import config
from eventboard.common.errors import register_error_handlers
from eventboard.database.db_connection import Database, EXTENSION_KEY
from eventboard.events_service.routes import events_bp
from eventboard.users_service.routes import users_bp


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    """Basic console logging during API requests."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="[%(levelname)s] %(asctime)s - %(message)s",
    )


def create_app(database: Database) -> Flask:
    """
    Application factory for creating the Flask app.

    Args:
        database (Database): Open store handle. The caller owns it and is
            responsible for closing it.

    Returns:
        Flask: The configured Flask application.
    """
    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = database

    CORS(app, resources={
        r"/*": {
            "origins": config.CORS_ORIGINS,
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"],
        }
    })

    # --- REGISTER BLUEPRINTS ---
    app.register_blueprint(users_bp, url_prefix="/users")
    app.register_blueprint(events_bp, url_prefix="/events")
    register_error_handlers(app)

    logging.info("All blueprints registered successfully.")

    # --- BASIC HEALTH CHECKPOINTS ---
    @app.route("/")
    def ping():
        """
        Root URL for simple 'online' check.
        """
        return jsonify({"success": True, "message": "REST API is running"}), 200

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"}), 200

    return app


def main() -> None:
    configure_logging()
    with Database(config.DATABASE_PATH) as database:
        app = create_app(database)
        app.run(host="0.0.0.0", port=config.GATEWAY_PORT)


if __name__ == "__main__":
    main()

import logging
import os
from typing import List, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS

from .auth import EXTENSION_KEY, SessionManager, UserStore


def _parse_allowed_origins(env_value: Optional[str]) -> List[str]:
    if not env_value:
        # Sensible defaults for local development
        return [
            "http://localhost:5000",
            "http://127.0.0.1:5000",
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:8080",
            "http://127.0.0.1:8080",
        ]
    return [origin.strip() for origin in env_value.split(",") if origin.strip()]


def create_app(test_config: Optional[dict] = None) -> Flask:
    """Application factory for the ParkinsonCare Flask app."""
    load_dotenv()

    app = Flask(__name__)
    app.config.update(
        USER_STORE_PATH=os.getenv("USER_STORE_PATH") or None,
        MAX_CONTENT_LENGTH=int(float(os.getenv("MAX_UPLOAD_MB", "16")) * 1024 * 1024),
        ALLOWED_ORIGINS=_parse_allowed_origins(os.getenv("ALLOWED_ORIGINS")),
    )
    if test_config:
        app.config.update(test_config)

    # Logging configuration
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=log_level)
    logger = logging.getLogger(__name__)
    logger.setLevel(log_level)

    # CORS configuration
    allowed_origins = app.config["ALLOWED_ORIGINS"]
    CORS(app, resources={r"/*": {"origins": allowed_origins}})

    # Users and sessions live for the lifetime of the app
    store = UserStore(app.config["USER_STORE_PATH"])
    app.extensions[EXTENSION_KEY] = SessionManager(store)

    @app.get("/health")
    def health() -> tuple[dict, int]:
        return jsonify({"status": "ok"}), 200

    # Register blueprints
    from .api import api_bp
    from .infer import infer_bp  # imported here to avoid circular imports

    app.register_blueprint(api_bp)
    app.register_blueprint(infer_bp)

    logger.info("ParkinsonCare Flask app initialized. CORS for: %s", ", ".join(allowed_origins))
    return app

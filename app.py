"""
ArtworkCheck - Flask Application Entry Point.

This is a slim app factory that:
1. Loads configuration (.env + config.Config)
2. Configures thread-aware logging
3. Creates the analysis service (PNG/PDF analyzers, color extractor)
4. Registers route blueprints
5. Sets up JSON error handlers

ARCHITECTURE:
    Main Thread
    ├── Flask request handling
    └── Cleanup on shutdown (worker pool)

    Analysis worker pool
    └── PNG chunk analysis and color extraction, run side by side
"""

from __future__ import annotations

import atexit
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import RequestEntityTooLarge

from config import config_object_for
from logging_config import setup_logging, get_logger
from core.exceptions import (
    ArtworkCheckError,
    FormatError,
    UnreadableDimensionsError,
    UnsupportedFileTypeError,
)
from modules.color_extractor import ColorExtractor
from services.analysis_service import AnalysisService, AnalysisResultStore
from routes import register_blueprints


# Module logger (configured after setup_logging)
logger = get_logger(__name__)

ERROR_STATUS = {
    FormatError: 400,
    UnreadableDimensionsError: 400,
    UnsupportedFileTypeError: 415,
}


def _get_base_path() -> Path:
    """
    Get the base path for the application.

    In a frozen bundle: the directory containing the executable
    In development: the directory containing app.py
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    return Path(__file__).parent


def create_app(config_object: Optional[str] = None) -> Flask:
    """
    Application factory - creates and configures Flask app.

    Args:
        config_object: Import path of the configuration class. When omitted
            the class is chosen from FLASK_ENV (see config.CONFIG_BY_ENVIRONMENT)

    Returns:
        Configured Flask application
    """
    env_file = _get_base_path() / '.env'
    if env_file.exists():
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)

    if config_object is None:
        config_object = config_object_for(os.environ.get("FLASK_ENV", "development"))

    app = Flask(__name__)
    app.config.from_object(config_object)

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        log_level=log_level,
        log_dir=Path(app.config["LOG_DIR"]),
        enable_file_logging=enable_file_logging
    )
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting ArtworkCheck in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # SERVICES INITIALIZATION
    # =========================================================================

    analysis_service = AnalysisService(
        color_extractor=ColorExtractor.from_config(app.config),
        max_workers=app.config.get("ANALYSIS_WORKERS", 2),
    )
    app.config["ANALYSIS_SERVICE"] = analysis_service
    app.config["ANALYSIS_STORE"] = AnalysisResultStore(
        max_owners=app.config.get("ANALYSIS_STORE_MAX_OWNERS"),
    )

    def cleanup():
        """Cleanup on application shutdown."""
        logger.info("Shutting down...")
        analysis_service.shutdown(wait=False)

    atexit.register(cleanup)

    # =========================================================================
    # REGISTER BLUEPRINTS
    # =========================================================================

    register_blueprints(app)

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(ArtworkCheckError)
    def handle_analysis_error(e: ArtworkCheckError):
        status = ERROR_STATUS.get(type(e), 500)
        if status == 500:
            logger.error(f"Analysis failed: {e}", exc_info=True)
        else:
            logger.info(f"Analysis rejected: {e.message}")
        return jsonify(e.to_dict()), status

    @app.errorhandler(RequestEntityTooLarge)
    def handle_file_too_large(e):
        max_mb = app.config.get("MAX_CONTENT_LENGTH", 32 * 1024 * 1024) / (1024 * 1024)
        return jsonify({"error": f"File too large. Maximum upload size is {max_mb:.0f} MB."}), 413

    @app.errorhandler(404)
    def handle_not_found(e):
        return jsonify({"error": "Not found."}), 404

    @app.errorhandler(500)
    def handle_server_error(e):
        logger.error(f"500 error: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred. Please try again."}), 500

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    app.run(debug=debug_mode)

"""
Configuration for ArtworkCheck.

Values come from the environment (optionally a .env file) with defaults
suitable for local development.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    MAX_CONTENT_LENGTH = 32 * 1024 * 1024  # 32 MB uploads
    SESSION_COOKIE_NAME = "artwork_check_session"
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")
    LOG_DIR = os.environ.get("LOG_DIR", str(BASE_DIR / "logs"))

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"
    TESTING = False

    # ==========================================================================
    # Color Extraction
    # ==========================================================================
    # COLOR_MAX_DIMENSION: longest edge of the canvas pixels are sampled from
    # COLOR_MAX_SAMPLE_PIXELS: target number of sampled grid positions
    # COLOR_BUCKET_SIZE: per-channel quantization step (12 keeps close shades apart)
    # COLOR_MIN_ALPHA: pixels below this alpha are ignored for the palette
    # COLOR_IGNORE_LIGHT_THRESHOLD: all channels at or above -> background white
    # COLOR_MIN_SATURATION: HSL saturation below this -> background gray/beige
    #   (dark near-gray pixels are kept regardless)
    # ==========================================================================
    COLOR_MAX_DIMENSION = int(os.environ.get("COLOR_MAX_DIMENSION", "1024"))
    COLOR_MAX_SAMPLE_PIXELS = int(os.environ.get("COLOR_MAX_SAMPLE_PIXELS", "120000"))
    COLOR_BUCKET_SIZE = int(os.environ.get("COLOR_BUCKET_SIZE", "12"))
    COLOR_MIN_ALPHA = int(os.environ.get("COLOR_MIN_ALPHA", "32"))
    COLOR_IGNORE_LIGHT_THRESHOLD = int(os.environ.get("COLOR_IGNORE_LIGHT_THRESHOLD", "240"))
    COLOR_MIN_SATURATION = float(os.environ.get("COLOR_MIN_SATURATION", "0.08"))

    # Worker threads for the PNG metadata/color fan-out
    ANALYSIS_WORKERS = int(os.environ.get("ANALYSIS_WORKERS", "2"))

    # Sessions whose latest analysis is kept in memory (least recent evicted)
    ANALYSIS_STORE_MAX_OWNERS = int(os.environ.get("ANALYSIS_STORE_MAX_OWNERS", "500"))


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 3600  # 1 hour


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    SECRET_KEY = "testing-secret-key"


# FLASK_ENV value -> configuration class used by create_app()
CONFIG_BY_ENVIRONMENT = {
    "production": "config.ProductionConfig",
    "development": "config.DevelopmentConfig",
    "testing": "config.TestingConfig",
}


def config_object_for(environment: str) -> str:
    """Import path of the config class for an environment (falls back to Config)."""
    return CONFIG_BY_ENVIRONMENT.get((environment or "").strip().lower(), "config.Config")

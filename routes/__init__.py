"""
Flask route blueprints for ArtworkCheck.

- main: Health check
- analyze: Artwork upload, latest report and palette downloads (JSON API)

Each blueprint is registered with the Flask app in create_app().
"""

from .main import main_bp
from .analyze import analyze_bp

__all__ = [
    "main_bp",
    "analyze_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(main_bp)
    app.register_blueprint(analyze_bp)

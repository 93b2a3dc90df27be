"""
Main routes (health).

Simple liveness endpoint for the host environment.
"""

from flask import Blueprint, jsonify

main_bp = Blueprint("main", __name__)


@main_bp.route("/health", methods=["GET"])
def health():
    """Liveness check."""
    return jsonify({"status": "ok"})

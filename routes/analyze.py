"""
Artwork analysis routes (JSON API).

Handles:
- POST /api/analyze                  - Upload a PNG/PDF and get its report
- GET  /api/analysis/latest          - Newest report for this session
- GET  /api/analysis/palette.csv     - Palette download (PNG only)
- GET  /api/analysis/palette.json    - Palette download (PNG only)

The report returned here is the same JSON the chat assistant receives as
context; this layer only moves bytes in and JSON out.
"""

from uuid import uuid4

import bleach
from flask import (
    Blueprint,
    Response,
    current_app,
    jsonify,
    request,
    session,
)
from werkzeug.utils import secure_filename

from core.exceptions import UnsupportedFileTypeError
from logging_config import get_logger
from modules.palette_export import palette_csv, palette_json
from services.analysis_service import detect_artwork_type


# Module logger
logger = get_logger(__name__)

analyze_bp = Blueprint("analyze", __name__, url_prefix="/api")

UPLOAD_FIELD = "artwork"
MAX_FILENAME_LENGTH = 255


def _sanitize_filename(filename: str) -> str:
    """
    Make an uploaded filename safe to echo back in JSON and the UI.

    Args:
        filename: Raw filename from the multipart upload

    Returns:
        Filename without path parts or markup, at most 255 characters
    """
    if not filename:
        return ""
    cleaned = bleach.clean(filename.strip(), tags=[], strip=True)
    return secure_filename(cleaned)[:MAX_FILENAME_LENGTH]


def _owner_id() -> str:
    """Per-session key for the analysis result store."""
    owner = session.get("owner_id")
    if not owner:
        owner = uuid4().hex
        session["owner_id"] = owner
        session.modified = True
    return owner


def _latest_colors():
    store = current_app.config["ANALYSIS_STORE"]
    analysis = store.get(_owner_id())
    if analysis is None or analysis.colors is None:
        return None
    return analysis.colors


@analyze_bp.route("/analyze", methods=["POST"])
def analyze():
    """
    Analyze an uploaded artwork file.

    Errors raised by the analysis service (unsupported type, bad format,
    unreadable dimensions) are turned into JSON by the app error handlers.
    """
    upload = request.files.get(UPLOAD_FIELD)
    if upload is None or upload.filename == "":
        return jsonify({"error": "Please choose a PNG or PDF file to upload."}), 400

    # Type check uses the raw name; secure_filename can drop the extension
    if detect_artwork_type(upload.mimetype, upload.filename) is None:
        raise UnsupportedFileTypeError(upload.mimetype, upload.filename)

    filename = _sanitize_filename(upload.filename)
    data = upload.read()
    if not data:
        return jsonify({"error": "The uploaded file is empty."}), 400

    service = current_app.config["ANALYSIS_SERVICE"]
    store = current_app.config["ANALYSIS_STORE"]

    owner = _owner_id()
    token = store.begin(owner)

    analysis = service.analyze(data, mime_type=upload.mimetype, filename=upload.filename)

    if not store.put(owner, token, analysis):
        logger.info(f"Upload {filename!r} superseded by a newer upload")

    return jsonify({"filename": filename, "analysis": analysis.to_dict()})


@analyze_bp.route("/analysis/latest", methods=["GET"])
def latest():
    """Return the newest analysis stored for this session."""
    store = current_app.config["ANALYSIS_STORE"]
    analysis = store.get(_owner_id())
    if analysis is None:
        return jsonify({"error": "No artwork has been analyzed yet."}), 404
    return jsonify({"analysis": analysis.to_dict()})


@analyze_bp.route("/analysis/palette.csv", methods=["GET"])
def palette_download_csv():
    colors = _latest_colors()
    if colors is None:
        return jsonify({"error": "No color palette available."}), 404
    return Response(
        palette_csv(colors),
        mimetype="text/csv",
        headers={"Content-Disposition": "attachment; filename=palette.csv"},
    )


@analyze_bp.route("/analysis/palette.json", methods=["GET"])
def palette_download_json():
    colors = _latest_colors()
    if colors is None:
        return jsonify({"error": "No color palette available."}), 404
    return Response(
        palette_json(colors),
        mimetype="application/json",
        headers={"Content-Disposition": "attachment; filename=palette.json"},
    )

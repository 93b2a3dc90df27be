"""
Custom exceptions for ArtworkCheck.

Exception Hierarchy:
    ArtworkCheckError (base)
    ├── FormatError                 - Malformed binary signature or unreadable document
    ├── UnreadableDimensionsError   - Structurally valid file without usable geometry
    ├── UnsupportedFileTypeError    - File is neither PNG nor PDF
    └── PixelBufferUnavailableError - No raster surface could be produced (soft)

Usage:
    Hard errors (FormatError, UnreadableDimensionsError, UnsupportedFileTypeError)
    end the analysis attempt and are surfaced to the caller verbatim.
    PixelBufferUnavailableError only costs the color palette; the quality
    report is still returned.
"""

from typing import Optional, Dict, Any


class ArtworkCheckError(Exception):
    """
    Base exception for all ArtworkCheck errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """JSON body for the HTTP layer."""
        return {"error": self.message, "details": dict(self.details)}


# =============================================================================
# HARD ERRORS - The analysis attempt for this file fails
# =============================================================================

class FormatError(ArtworkCheckError):
    """
    The file bytes do not match the declared format.

    Raised when the PNG signature is wrong or the PDF parser cannot open
    the document at all. Not recoverable for this file.
    """

    def __init__(self, message: str, file_type: Optional[str] = None):
        details = {}
        if file_type:
            details["file_type"] = file_type
        super().__init__(message, details)
        self.file_type = file_type


class UnreadableDimensionsError(ArtworkCheckError):
    """
    The file parsed, but its geometry is zero or missing.

    Typical causes:
    - PNG without an IHDR chunk (or a zero width/height in it)
    - PDF without pages, or with an empty page box
    """

    def __init__(self, message: str = "Unable to read PNG dimensions",
                 width: float = 0, height: float = 0):
        details = {"width": width, "height": height}
        super().__init__(message, details)
        self.width = width
        self.height = height


class UnsupportedFileTypeError(ArtworkCheckError):
    """
    The upload is neither a PNG nor a PDF.

    Raised by the orchestrator before any decoding is attempted.
    """

    def __init__(self, mime_type: Optional[str] = None, filename: Optional[str] = None):
        message = "Unsupported file type. Please upload a PNG or PDF artwork file."
        details = {
            "mime_type": mime_type or "",
            "filename": filename or "",
            "resolution": "Export the artwork as PNG or PDF and upload it again",
        }
        super().__init__(message, details)
        self.mime_type = mime_type
        self.filename = filename


# =============================================================================
# SOFT ERRORS - Only the optional enrichment is lost
# =============================================================================

class PixelBufferUnavailableError(ArtworkCheckError):
    """
    No RGBA pixel surface could be produced for the image.

    The color extractor converts this into an empty palette.
    """

    def __init__(self, reason: str):
        message = f"Unable to obtain pixel buffer: {reason}"
        super().__init__(message, {"reason": reason})
        self.reason = reason

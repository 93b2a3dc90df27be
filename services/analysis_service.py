"""
Artwork analysis service.

Detects the artwork type and dispatches to the format analyzers. For PNG
files the metadata analysis and the color extraction run side by side on
a small thread pool and are joined before the report is returned.

Thread Model:
    Request thread (Flask)
    └── AnalysisService.analyze()
        ├── Analysis worker: PngAnalyzer.analyze()      (own copy of bytes)
        └── Analysis worker: ColorExtractor.extract()   (own copy of bytes)

    Neither worker touches shared mutable state. The color task is
    best-effort: its failure is logged and the quality report is returned
    without a palette.

Supersession:
    AnalysisResultStore keeps only the newest analysis per owner (browser
    session). A result that resolves after a newer upload started is
    dropped instead of replacing the newer one.

Usage:
    service = AnalysisService()
    analysis = service.analyze(data, mime_type="image/png", filename="art.png")
    analysis.to_dict()   # JSON context for the UI and chat assistant
    service.shutdown()
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from concurrent.futures import Future, ThreadPoolExecutor
from itertools import count
from pathlib import PurePath
from typing import Dict, Optional

from logging_config import get_logger
from models.analysis import ArtworkAnalysis
from models.color_report import ColorReport
from models.quality_report import FileType
from core.exceptions import UnsupportedFileTypeError
from modules.color_extractor import ColorExtractor
from modules.pdf_analyzer import PDFAnalyzer
from modules.png_analyzer import PngAnalyzer


# Module logger
logger = get_logger(__name__)

PNG_MIME_TYPES = frozenset({"image/png", "image/x-png"})
PDF_MIME_TYPES = frozenset({"application/pdf"})

EXTENSION_TYPES = {
    ".png": FileType.PNG,
    ".pdf": FileType.PDF,
}


def detect_artwork_type(mime_type: Optional[str], filename: Optional[str]) -> Optional[FileType]:
    """
    Detect the artwork type, MIME type first and file extension second.

    Returns:
        FileType, or None when neither hint names PNG or PDF
    """
    mime = (mime_type or "").split(";", 1)[0].strip().lower()
    if mime in PNG_MIME_TYPES:
        return FileType.PNG
    if mime in PDF_MIME_TYPES:
        return FileType.PDF
    if filename:
        return EXTENSION_TYPES.get(PurePath(filename).suffix.lower())
    return None


class AnalysisResultStore:
    """
    Thread-safe store holding the newest analysis per owner.

    Every upload calls begin() and gets a token. put() only keeps the
    result when that token is still the newest one for the owner, so a
    slow analysis can never overwrite the result of a later upload.

    At most ``max_owners`` owners are tracked. Starting an upload for a new
    owner beyond that evicts the least recently active owner, together with
    its result and pending token.

    Usage:
        token = store.begin(session_id)
        analysis = service.analyze(...)
        store.put(session_id, token, analysis)

        latest = store.get(session_id)
    """

    DEFAULT_MAX_OWNERS = 500

    def __init__(self, max_owners: Optional[int] = None):
        """Initialize empty store."""
        self.max_owners = max(1, max_owners or self.DEFAULT_MAX_OWNERS)
        self._results: Dict[str, ArtworkAnalysis] = {}
        # Owner -> newest token, least recently active first
        self._latest_tokens: OrderedDict[str, int] = OrderedDict()
        self._tokens = count(1)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._latest_tokens)

    def begin(self, owner: str) -> int:
        """
        Register a new upload for an owner.

        Any result still pending for an older token becomes stale.

        Returns:
            Token to pass to put()
        """
        with self._lock:
            token = next(self._tokens)
            self._latest_tokens[owner] = token
            self._latest_tokens.move_to_end(owner)
            self._evict()
            return token

    def put(self, owner: str, token: int, analysis: ArtworkAnalysis) -> bool:
        """
        Store a finished analysis if it is still the newest for the owner.

        Returns:
            True if stored, False if a newer upload superseded it (or the
            owner was evicted meanwhile)
        """
        with self._lock:
            if self._latest_tokens.get(owner) != token:
                logger.info(f"Discarding superseded analysis for {owner[:8]} (token {token})")
                return False
            self._results[owner] = analysis
            self._latest_tokens.move_to_end(owner)
            return True

    def get(self, owner: str) -> Optional[ArtworkAnalysis]:
        """Newest stored analysis for the owner, if any."""
        with self._lock:
            return self._results.get(owner)

    def discard(self, owner: str) -> None:
        """Forget the owner's analysis and invalidate pending tokens."""
        with self._lock:
            self._results.pop(owner, None)
            self._latest_tokens.pop(owner, None)

    def clear(self) -> int:
        """
        Remove all stored results.

        Returns:
            Number of results removed
        """
        with self._lock:
            removed = len(self._results)
            self._results.clear()
            self._latest_tokens.clear()
            logger.info(f"Cleared {removed} analysis results from store")
            return removed

    def _evict(self) -> None:
        # Caller holds the lock
        while len(self._latest_tokens) > self.max_owners:
            owner, _ = self._latest_tokens.popitem(last=False)
            self._results.pop(owner, None)
            logger.debug(f"Evicted analysis for {owner[:8]} (store full)")


class AnalysisService:
    """
    Orchestrates PNG and PDF analysis for one upload at a time per call.

    Attributes:
        png_analyzer: Chunk-based PNG quality analyzer
        pdf_analyzer: First-page geometry analyzer
        color_extractor: Palette and alpha statistics extractor
    """

    def __init__(
        self,
        png_analyzer: Optional[PngAnalyzer] = None,
        pdf_analyzer: Optional[PDFAnalyzer] = None,
        color_extractor: Optional[ColorExtractor] = None,
        max_workers: int = 2,
    ):
        self.png_analyzer = png_analyzer or PngAnalyzer()
        self.pdf_analyzer = pdf_analyzer or PDFAnalyzer()
        self.color_extractor = color_extractor or ColorExtractor()
        self._executor = ThreadPoolExecutor(
            max_workers=max(2, max_workers), thread_name_prefix="Analysis"
        )
        logger.info("AnalysisService initialized")

    def analyze(
        self,
        data: bytes,
        mime_type: Optional[str] = None,
        filename: str = "",
    ) -> ArtworkAnalysis:
        """
        Analyze one uploaded artwork file.

        Args:
            data: Raw file bytes
            mime_type: Declared MIME type (checked first)
            filename: Original filename (extension checked second)

        Returns:
            ArtworkAnalysis with quality report and, for PNG, the palette

        Raises:
            UnsupportedFileTypeError: If the file is neither PNG nor PDF
            FormatError: If the bytes do not match the format
            UnreadableDimensionsError: If the file has no usable geometry
        """
        file_type = detect_artwork_type(mime_type, filename)
        if file_type is None:
            logger.info(f"Rejected upload {filename!r} ({mime_type or 'no MIME type'})")
            raise UnsupportedFileTypeError(mime_type, filename)

        logger.info(f"Analyzing {file_type.value.upper()} {filename!r} ({len(data)} bytes)")

        if file_type is FileType.PNG:
            analysis = self._analyze_png(data)
        else:
            analysis = ArtworkAnalysis(quality=self.pdf_analyzer.analyze(bytes(data)))

        logger.info(
            f"Analysis complete for {filename!r}: rating={analysis.quality.rating.value}"
        )
        return analysis

    def _analyze_png(self, data: bytes) -> ArtworkAnalysis:
        quality_future = self._executor.submit(self.png_analyzer.analyze, bytes(data))
        color_future = self._executor.submit(self.color_extractor.extract, bytes(data))

        quality, colors = quality_future.result(), self._color_result(color_future)
        if colors is not None and colors.alpha_stats is not None:
            # Measured pixel alpha wins over the format's alpha capability flag
            quality = quality.with_alpha_stats(colors.alpha_stats)

        return ArtworkAnalysis(quality=quality, colors=colors)

    @staticmethod
    def _color_result(future: Future) -> Optional[ColorReport]:
        try:
            return future.result()
        except Exception as e:
            logger.warning(f"Color extraction failed, continuing without palette: {e}")
            return None

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker pool."""
        self._executor.shutdown(wait=wait)
        logger.info("AnalysisService shut down")

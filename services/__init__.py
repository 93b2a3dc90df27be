"""
Services layer for ArtworkCheck.

- AnalysisService: Type detection and PNG/PDF analysis orchestration
- AnalysisResultStore: Newest analysis per session, stale results dropped

Thread Model:
    Main Thread (Flask)
    └── AnalysisService worker pool (PNG metadata + color extraction)
"""

from .analysis_service import AnalysisService, AnalysisResultStore, detect_artwork_type

__all__ = [
    "AnalysisService",
    "AnalysisResultStore",
    "detect_artwork_type",
]

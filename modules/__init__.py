"""Analysis modules for the ArtworkCheck application."""

__all__ = [
    "color_extractor",
    "palette_export",
    "pdf_analyzer",
    "png_analyzer",
    "png_chunks",
    "print_size",
]

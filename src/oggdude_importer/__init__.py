"""
OggDude Importer - imports OggDude character generator data (armor, weapons,
gear and their artwork) into a host world's document store.
"""

from .base import (
    CategoryImportResult,
    ConflictMode,
    ImportReport,
    ImportStage,
    OggDudeImportError,
)
from .config import ImporterSettings, load_settings
from .pipeline import process_elements, run_import

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("oggdude-importer")
except Exception:
    __version__ = "0.1.0"  # Fallback if metadata unavailable
__all__ = [
    "CategoryImportResult",
    "ConflictMode",
    "ImportReport",
    "ImportStage",
    "ImporterSettings",
    "OggDudeImportError",
    "load_settings",
    "process_elements",
    "run_import",
]

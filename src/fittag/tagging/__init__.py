"""FitTag tagging module."""
from .config import TierConfig, TIER_PRESETS, get_tier_config
from .errors import ExtractionSourceFailure, TaggingError
from .pipeline import extract_tags, run_tagging
from .sources import AIExtractionResponse, CatalogEntry, CatalogMatcher, ExtractedItem
from .style_parser import extract_style_references
from .types import (
    Candidate,
    StyleReference,
    TaggingResult,
    ValidatedTag,
    ValidationResult,
)
from .validator import validate_candidate

__all__ = [
    "extract_tags",
    "run_tagging",
    "TierConfig",
    "TIER_PRESETS",
    "get_tier_config",
    "TaggingError",
    "ExtractionSourceFailure",
    "AIExtractionResponse",
    "ExtractedItem",
    "CatalogEntry",
    "CatalogMatcher",
    "extract_style_references",
    "validate_candidate",
    "Candidate",
    "StyleReference",
    "TaggingResult",
    "ValidatedTag",
    "ValidationResult",
]

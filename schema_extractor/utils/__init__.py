"""
Utility functions and helpers for schema extraction.

This package contains text scanning helpers shared by the parsers,
relationship id and placeholder position helpers, and the warning collector.
"""

from schema_extractor.utils.identifiers import PositionGenerator, relationship_id
from schema_extractor.utils.text import (
    braces_balanced,
    find_matching_brace,
    iter_blocks,
    split_top_level,
    strip_comments,
    unquote,
)
from schema_extractor.utils.warnings import ExtractionWarning, WarningCollector

__all__ = [
    "braces_balanced",
    "find_matching_brace",
    "iter_blocks",
    "split_top_level",
    "strip_comments",
    "unquote",
    "PositionGenerator",
    "relationship_id",
    "ExtractionWarning",
    "WarningCollector",
]

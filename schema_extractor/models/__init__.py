"""
Data models for schema extraction.

This package contains the normalized entity-relationship model produced by
the parsers (tables, columns, indexes, enums, relationships), the
ParseResult wrapper, and the extraction configuration.
"""

from schema_extractor.models.column import Column, ColumnReference
from schema_extractor.models.config import ErrorMode, ExtractionConfig
from schema_extractor.models.dialect import Dialect, ParserTier
from schema_extractor.models.enum_definition import EnumDefinition
from schema_extractor.models.relationship import Relationship
from schema_extractor.models.result import ParseResult
from schema_extractor.models.schema import Schema, SchemaStats
from schema_extractor.models.table import Index, Position, Table

__all__ = [
    "Column",
    "ColumnReference",
    "Dialect",
    "EnumDefinition",
    "ErrorMode",
    "ExtractionConfig",
    "Index",
    "ParseResult",
    "ParserTier",
    "Position",
    "Relationship",
    "Schema",
    "SchemaStats",
    "Table",
]

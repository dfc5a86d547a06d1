"""
Schema Extractor v1.0

Extracts an entity-relationship model (tables, columns, relationships,
indexes and enums) from Drizzle ORM and Prisma schema source text, for
rendering as a database diagram.

Example:
    >>> from schema_extractor import parse
    >>> result = parse("model User {\\n  id Int @id\\n}")
    >>> result.success
    True
    >>> [table.id for table in result.data.tables]
    ['User']
"""

from schema_extractor.version import __version__, __version_info__

__author__ = "Schema Extractor Contributors"

from schema_extractor.exceptions import (
    DialectMismatchError,
    EmptySchemaError,
    FallbackParseError,
    InvalidInputError,
    SchemaExtractionError,
    SourceSyntaxError,
    StructuralParseError,
    UnresolvedReferenceError,
)
from schema_extractor.extractor.schema_extractor import SchemaExtractor, parse
from schema_extractor.graph.schema_graph import SchemaGraph
from schema_extractor.models.column import Column, ColumnReference
from schema_extractor.models.config import ErrorMode, ExtractionConfig
from schema_extractor.models.dialect import Dialect, ParserTier
from schema_extractor.models.enum_definition import EnumDefinition
from schema_extractor.models.relationship import Relationship
from schema_extractor.models.result import ParseResult
from schema_extractor.models.schema import Schema, SchemaStats
from schema_extractor.models.table import Index, Position, Table
from schema_extractor.parser.dialect_detector import DialectDetector
from schema_extractor.parser.drizzle_fallback import DrizzleFallbackParser
from schema_extractor.parser.drizzle_parser import DrizzleSchemaParser
from schema_extractor.parser.prisma_fallback import PrismaFallbackParser
from schema_extractor.parser.prisma_parser import PrismaSchemaParser
from schema_extractor.registry.table_registry import TableRegistry
from schema_extractor.typemap.dict_provider import DictTypeMapProvider
from schema_extractor.typemap.provider import TypeMapProvider

__all__ = [
    # Version info
    "__version__",
    "__version_info__",
    # Entry points
    "SchemaExtractor",
    "parse",
    # Configuration
    "ExtractionConfig",
    "ErrorMode",
    "Dialect",
    "ParserTier",
    # Results
    "ParseResult",
    "Schema",
    "SchemaStats",
    # Data models
    "Table",
    "Column",
    "ColumnReference",
    "Index",
    "Position",
    "Relationship",
    "EnumDefinition",
    # Graph
    "SchemaGraph",
    # Registry
    "TableRegistry",
    # Type mapping
    "TypeMapProvider",
    "DictTypeMapProvider",
    # Exceptions
    "SchemaExtractionError",
    "InvalidInputError",
    "DialectMismatchError",
    "StructuralParseError",
    "SourceSyntaxError",
    "EmptySchemaError",
    "FallbackParseError",
    "UnresolvedReferenceError",
    # Parsers
    "DialectDetector",
    "DrizzleSchemaParser",
    "DrizzleFallbackParser",
    "PrismaSchemaParser",
    "PrismaFallbackParser",
]

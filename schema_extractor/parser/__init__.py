"""
Parser module for schema text.

This package contains the structural and fallback parsers of both
dialects, the TypeScript syntax tree adapter and dialect detection.
"""

from schema_extractor.parser.dialect_detector import DialectDetector
from schema_extractor.parser.drizzle_fallback import DrizzleFallbackParser
from schema_extractor.parser.drizzle_parser import DrizzleSchemaParser
from schema_extractor.parser.prisma_fallback import PrismaFallbackParser
from schema_extractor.parser.prisma_parser import PrismaSchemaParser
from schema_extractor.parser.syntax_tree import TypeScriptSyntaxParser

__all__ = [
    "DialectDetector",
    "DrizzleFallbackParser",
    "DrizzleSchemaParser",
    "PrismaFallbackParser",
    "PrismaSchemaParser",
    "TypeScriptSyntaxParser",
]

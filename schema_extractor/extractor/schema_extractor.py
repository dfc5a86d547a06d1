"""
Schema extraction entry point.

This module defines the SchemaExtractor class, which chooses a dialect,
runs the dialect's structural parser and, when that fails, the dialect's
fallback parser. Every outcome is returned as a ParseResult; no exception
crosses extract().
"""

from __future__ import annotations

from typing import Callable, Optional, Union

from schema_extractor.exceptions import (
    EmptySchemaError,
    InvalidInputError,
    SchemaExtractionError,
    UnresolvedReferenceError,
)
from schema_extractor.models.config import ExtractionConfig
from schema_extractor.models.dialect import Dialect, ParserTier
from schema_extractor.models.result import ParseResult
from schema_extractor.parser.dialect_detector import DialectDetector
from schema_extractor.parser.drizzle_fallback import DrizzleFallbackParser
from schema_extractor.parser.drizzle_parser import DrizzleSchemaParser
from schema_extractor.parser.prisma_fallback import PrismaFallbackParser
from schema_extractor.parser.prisma_parser import PrismaSchemaParser
from schema_extractor.utils.text import strip_comments
from schema_extractor.utils.warnings import WarningCollector

_NO_DECLARATIONS = {
    Dialect.DRIZZLE: (
        "No Drizzle table definitions found. Make sure you have pgTable(), "
        "mysqlTable(), or sqliteTable() calls."
    ),
    Dialect.PRISMA: (
        "No Prisma models or enums found. Make sure you have model definitions."
    ),
}

_Parser = Union[
    DrizzleSchemaParser, DrizzleFallbackParser, PrismaSchemaParser, PrismaFallbackParser
]


class SchemaExtractor:
    """Schema extractor - main entry point.

    Usage:
        >>> extractor = SchemaExtractor()
        >>> result = extractor.extract(schema_text)
        >>> print(result.to_json())

    Attributes:
        config: ExtractionConfig controlling fallback and relationship
            handling.
        detector: DialectDetector used when no dialect is given.

    Example:
        >>> extractor = SchemaExtractor()
        >>> result = extractor.extract("model User {\\n  id Int @id\\n}")
        >>> result.success
        True
        >>> result.dialect
        <Dialect.PRISMA: 'prisma'>
    """

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        random_source: Optional[Callable[[], float]] = None,
    ) -> None:
        """Initialize extractor.

        Args:
            config: ExtractionConfig object (if None, uses default config).
            random_source: Optional randomness source for placeholder
                positions. Pass a constant function for reproducible output.
        """
        self.config = config or ExtractionConfig()
        self.random_source = random_source
        self.detector = DialectDetector(
            self.config.drizzle_keywords, self.config.prisma_keywords
        )

    def extract(
        self, text: str, dialect: Union[Dialect, str, None] = None
    ) -> ParseResult:
        """Extract a schema from source text.

        Steps:
        1. Validate the input text
        2. Resolve the dialect (detect it when not given)
        3. Check that the text looks like the dialect at all
        4. Run the structural parser
        5. On failure, run the fallback parser

        Args:
            text: Schema source text.
            dialect: Optional Dialect or dialect value ("drizzle", "prisma").

        Returns:
            ParseResult; check ``success`` before reading ``data``.

        Example:
            >>> result = SchemaExtractor().extract("", "prisma")
            >>> result.success
            False
        """
        collector = WarningCollector()

        try:
            self._validate_input(text)
        except InvalidInputError as e:
            return ParseResult.fail(str(e), warnings=collector.get_all())

        cleaned = strip_comments(text).strip()
        if not cleaned:
            return ParseResult.fail(
                "Schema code is empty after removing comments",
                warnings=collector.get_all(),
            )

        try:
            resolved = Dialect.from_value(dialect)
        except ValueError as e:
            return ParseResult.fail(str(e), warnings=collector.get_all())

        if resolved == Dialect.UNKNOWN:
            resolved = self.detector.detect(cleaned)
            if resolved == Dialect.UNKNOWN:
                return ParseResult.fail(
                    "Could not detect the schema dialect. "
                    f"Specify one of {Dialect.values()}.",
                    warnings=collector.get_all(),
                )
            collector.info(f"Detected {resolved.display_name} schema")

        if not self.detector.looks_like(cleaned, resolved):
            return ParseResult.fail(
                _NO_DECLARATIONS[resolved], dialect=resolved, warnings=collector.get_all()
            )

        return self._run_parsers(text, resolved, collector)

    def extract_batch(
        self, texts: list[str], dialect: Union[Dialect, str, None] = None
    ) -> list[ParseResult]:
        """Extract schemas from multiple texts.

        Args:
            texts: Schema source texts.
            dialect: Optional dialect applied to every text.

        Returns:
            One ParseResult per text.
        """
        return [self.extract(text, dialect) for text in texts]

    def _validate_input(self, text: object) -> None:
        if text is None or not isinstance(text, str):
            raise InvalidInputError("Invalid schema code provided")
        if not text.strip():
            raise InvalidInputError("Schema code cannot be empty")

    def _run_parsers(
        self, text: str, dialect: Dialect, collector: WarningCollector
    ) -> ParseResult:
        structural, fallback = self._parsers_for(dialect)

        try:
            schema = structural.parse(text, collector)
            return ParseResult.ok(
                schema, dialect, ParserTier.STRUCTURAL, collector.get_all()
            )
        except UnresolvedReferenceError as e:
            return ParseResult.fail(str(e), dialect, collector.get_all())
        except Exception as e:
            structural_error = e

        if not self.config.enable_fallback:
            return ParseResult.fail(
                _describe(structural_error), dialect, collector.get_all()
            )

        collector.add_fallback_warning(
            dialect.display_name, _describe(structural_error)
        )

        try:
            schema = fallback.parse(text, collector)
        except SchemaExtractionError as e:
            return ParseResult.fail(str(e), dialect, collector.get_all())
        except Exception as e:
            return ParseResult.fail(
                f"Fallback parsing failed: {e}", dialect, collector.get_all()
            )

        if schema.is_empty():
            if isinstance(structural_error, EmptySchemaError):
                return ParseResult.fail(
                    str(structural_error), dialect, collector.get_all()
                )
            if self.config.fail_on_empty_fallback:
                return ParseResult.fail(
                    f"No valid {dialect.display_name} tables or enums found in the schema",
                    dialect,
                    collector.get_all(),
                )

        return ParseResult.ok(schema, dialect, ParserTier.FALLBACK, collector.get_all())

    def _parsers_for(self, dialect: Dialect) -> tuple[_Parser, _Parser]:
        if dialect == Dialect.DRIZZLE:
            return (
                DrizzleSchemaParser(self.config, self.random_source),
                DrizzleFallbackParser(self.config, self.random_source),
            )
        return (
            PrismaSchemaParser(self.config, self.random_source),
            PrismaFallbackParser(self.config, self.random_source),
        )


def _describe(error: Exception) -> str:
    message = str(error)
    return message if message else type(error).__name__


def parse(
    text: str,
    dialect: Union[Dialect, str, None] = None,
    config: Optional[ExtractionConfig] = None,
) -> ParseResult:
    """Extract a schema with a one-off SchemaExtractor.

    Args:
        text: Schema source text.
        dialect: Optional Dialect or dialect value.
        config: Optional ExtractionConfig.

    Returns:
        ParseResult.

    Example:
        >>> parse("export const t = pgTable('t', { id: serial('id') })").success
        True
    """
    return SchemaExtractor(config).extract(text, dialect)



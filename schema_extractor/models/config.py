"""
Configuration model for schema extraction.

This module defines the ExtractionConfig class and ErrorMode enum, which
control fallback behavior, relationship handling, placeholder layout and the
replaceable type dictionaries used by the parsers.
"""

from dataclasses import dataclass, field
from enum import Enum

from schema_extractor.typemap.defaults import (
    DRIZZLE_TYPE_MAPPING,
    PRISMA_TYPE_MAPPING,
)
from schema_extractor.typemap.dict_provider import DictTypeMapProvider
from schema_extractor.typemap.keywords import DrizzleKeywords, PrismaKeywords
from schema_extractor.typemap.provider import TypeMapProvider


class ErrorMode(str, Enum):
    """Enumeration of error handling modes.

    Attributes:
        FAIL: Raise an exception immediately; the extraction call fails.
        WARN: Record a warning and continue.
        IGNORE: Continue silently.

    Example:
        >>> ErrorMode.values()
        ['fail', 'warn', 'ignore']
    """

    FAIL = "fail"
    WARN = "warn"
    IGNORE = "ignore"

    @classmethod
    def values(cls) -> list[str]:
        """Return a list of all possible error mode values."""
        return [member.value for member in cls]


def _default_drizzle_types() -> TypeMapProvider:
    return DictTypeMapProvider(dict(DRIZZLE_TYPE_MAPPING))


def _default_prisma_types() -> TypeMapProvider:
    return DictTypeMapProvider(dict(PRISMA_TYPE_MAPPING))


@dataclass
class ExtractionConfig:
    """Configuration settings for schema extraction.

    Attributes:
        enable_fallback: If True, a failed structural parse hands the text to
            the dialect's fallback parser. Defaults to True.
        fail_on_empty_fallback: If True, a fallback parse that extracts no
            tables and no enums is reported as a failure instead of an empty
            success. Defaults to False.
        deduplicate_relationships: If True, relationships describing the same
            (source, source column, target, target column) link are emitted
            once. Defaults to False, keeping both the relations() helper
            entry and the inline reference entry.
        on_unresolved: What to do with a relationship whose endpoint is not
            a known table. Defaults to ErrorMode.WARN (drop and warn).
        table_spacing_x: Horizontal distance between placeholder positions.
        table_spacing_y: Vertical distance between placeholder rows.
        tables_per_row: Tables per placeholder row.
        position_jitter: Maximum random horizontal offset of a position.
        drizzle_types: Drizzle builder name to SQL type dictionary.
        prisma_types: Prisma scalar type to SQL type dictionary.
        drizzle_keywords: Constructor, helper and modifier names recognized
            in Drizzle schemas.
        prisma_keywords: Keywords and attribute names recognized in Prisma
            schemas.

    Example:
        >>> config = ExtractionConfig(deduplicate_relationships=True)
        >>> config.on_unresolved
        <ErrorMode.WARN: 'warn'>
    """

    enable_fallback: bool = True
    fail_on_empty_fallback: bool = False
    deduplicate_relationships: bool = False
    on_unresolved: ErrorMode = ErrorMode.WARN

    # Placeholder layout
    table_spacing_x: float = 250.0
    table_spacing_y: float = 200.0
    tables_per_row: int = 3
    position_jitter: float = 50.0

    drizzle_types: TypeMapProvider = field(default_factory=_default_drizzle_types)
    prisma_types: TypeMapProvider = field(default_factory=_default_prisma_types)
    drizzle_keywords: DrizzleKeywords = field(default_factory=DrizzleKeywords)
    prisma_keywords: PrismaKeywords = field(default_factory=PrismaKeywords)

    def __post_init__(self) -> None:
        """Validate configuration settings."""
        if not isinstance(self.enable_fallback, bool):
            raise TypeError("enable_fallback must be a boolean")
        if not isinstance(self.fail_on_empty_fallback, bool):
            raise TypeError("fail_on_empty_fallback must be a boolean")
        if not isinstance(self.deduplicate_relationships, bool):
            raise TypeError("deduplicate_relationships must be a boolean")
        if not isinstance(self.on_unresolved, ErrorMode):
            raise TypeError("on_unresolved must be an ErrorMode instance")
        if not isinstance(self.drizzle_types, TypeMapProvider):
            raise TypeError("drizzle_types must be a TypeMapProvider")
        if not isinstance(self.prisma_types, TypeMapProvider):
            raise TypeError("prisma_types must be a TypeMapProvider")
        if not isinstance(self.drizzle_keywords, DrizzleKeywords):
            raise TypeError("drizzle_keywords must be a DrizzleKeywords instance")
        if not isinstance(self.prisma_keywords, PrismaKeywords):
            raise TypeError("prisma_keywords must be a PrismaKeywords instance")
        if self.tables_per_row < 1:
            raise ValueError("tables_per_row must be at least 1")
        if self.position_jitter < 0:
            raise ValueError("position_jitter cannot be negative")

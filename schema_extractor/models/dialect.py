"""
Dialect and parser tier enumerations.

This module defines the Dialect enum, naming the schema languages the
extractor understands, and the ParserTier enum, recording which parser
produced a result.
"""

from enum import Enum


class Dialect(str, Enum):
    """Schema dialect enumeration.

    - DRIZZLE: Drizzle ORM TypeScript schemas (fluent-builder style)
    - PRISMA: Prisma schema language (block-declaration style)
    - UNKNOWN: Neither signature set matched
    """

    DRIZZLE = "drizzle"
    PRISMA = "prisma"
    UNKNOWN = "unknown"

    @classmethod
    def values(cls) -> list[str]:
        """Return the values of the parseable dialects."""
        return [member.value for member in cls if member is not cls.UNKNOWN]

    @classmethod
    def from_value(cls, value: "Dialect | str | None") -> "Dialect":
        """Coerce a Dialect or its string value into a Dialect.

        Args:
            value: Dialect member, case-insensitive string value, or None.

        Returns:
            Matching Dialect, or Dialect.UNKNOWN for None.

        Raises:
            ValueError: If the string does not name a dialect.
        """
        if value is None:
            return cls.UNKNOWN
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown dialect: '{value}'. Must be one of {cls.values()}"
            ) from None

    def is_supported(self) -> bool:
        """Check if this dialect has parsers."""
        return self is not Dialect.UNKNOWN

    @property
    def display_name(self) -> str:
        """Human-readable dialect name."""
        return {
            Dialect.DRIZZLE: "Drizzle",
            Dialect.PRISMA: "Prisma",
        }.get(self, "Unknown")


class ParserTier(str, Enum):
    """Which parser tier produced a ParseResult."""

    STRUCTURAL = "structural"
    FALLBACK = "fallback"

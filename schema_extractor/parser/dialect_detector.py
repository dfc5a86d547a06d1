"""
Dialect detection.

This module defines the DialectDetector class, which guesses the dialect of
schema text from keyword signatures and performs the "does this look like
the dialect at all" check run before any parser.
"""

import re
from typing import Optional

from schema_extractor.models.dialect import Dialect
from schema_extractor.typemap.keywords import DrizzleKeywords, PrismaKeywords

_DRIZZLE_IMPORT_RE = re.compile(r"from\s+['\"]drizzle-orm")


def _call_pattern(names: frozenset[str]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(name) for name in sorted(names))
    return re.compile(rf"(?<![\w$])(?:{alternatives})\s*\(")


class DialectDetector:
    """Detects the dialect of schema text.

    Example:
        >>> detector = DialectDetector()
        >>> detector.detect("model User {\\n  id Int @id\\n}")
        <Dialect.PRISMA: 'prisma'>
        >>> detector.detect("export const t = pgTable('t', {})")
        <Dialect.DRIZZLE: 'drizzle'>
    """

    def __init__(
        self,
        drizzle_keywords: Optional[DrizzleKeywords] = None,
        prisma_keywords: Optional[PrismaKeywords] = None,
    ) -> None:
        """Initialize a DialectDetector.

        Args:
            drizzle_keywords: Optional Drizzle keyword table.
            prisma_keywords: Optional Prisma keyword table.
        """
        drizzle = drizzle_keywords or DrizzleKeywords()
        prisma = prisma_keywords or PrismaKeywords()

        self._drizzle_table = _call_pattern(drizzle.table_constructors)
        self._drizzle_creator = _call_pattern(drizzle.table_creators)
        self._drizzle_enum = _call_pattern(drizzle.enum_constructors)
        self._drizzle_schema_table = re.compile(
            rf"\.{re.escape(drizzle.schema_table_method)}\s*\("
        )

        self._prisma_model_block = re.compile(
            rf"\b{re.escape(prisma.model_keyword)}\s+\w+\s*\{{"
        )
        self._prisma_enum_block = re.compile(
            rf"\b{re.escape(prisma.enum_keyword)}\s+\w+\s*\{{"
        )
        self._prisma_config_block = re.compile(r"\b(?:generator|datasource)\s+\w+\s*\{")
        self._prisma_keyword = re.compile(
            rf"\b(?:{re.escape(prisma.model_keyword)}|{re.escape(prisma.enum_keyword)})\s+\w+"
        )

    def detect(self, text: str) -> Dialect:
        """Guess the dialect of schema text.

        Prisma signatures win over Drizzle ones. An ``enum X {`` block on its
        own counts as Prisma only when no Drizzle signature is present.

        Args:
            text: Schema text.

        Returns:
            Detected Dialect, or Dialect.UNKNOWN.
        """
        if not text:
            return Dialect.UNKNOWN

        if self._prisma_model_block.search(text) or self._prisma_config_block.search(text):
            return Dialect.PRISMA

        if (
            self._drizzle_table.search(text)
            or self._drizzle_enum.search(text)
            or _DRIZZLE_IMPORT_RE.search(text)
        ):
            return Dialect.DRIZZLE

        if self._prisma_enum_block.search(text):
            return Dialect.PRISMA

        return Dialect.UNKNOWN

    def looks_like(self, text: str, dialect: Dialect) -> bool:
        """Check that text contains at least one declaration keyword of a dialect.

        Args:
            text: Comment-free schema text.
            dialect: Dialect to check against.

        Returns:
            True if a table/model or enum declaration keyword is present.
        """
        if dialect == Dialect.DRIZZLE:
            return bool(
                self._drizzle_table.search(text)
                or self._drizzle_creator.search(text)
                or self._drizzle_schema_table.search(text)
                or self._drizzle_enum.search(text)
            )
        if dialect == Dialect.PRISMA:
            return bool(self._prisma_keyword.search(text))
        return False

"""
Parse result model.

This module defines the ParseResult class, the tagged success/failure value
returned by every extraction call.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional

from schema_extractor.models.dialect import Dialect, ParserTier
from schema_extractor.models.schema import Schema
from schema_extractor.utils.warnings import ExtractionWarning


@dataclass(frozen=True)
class ParseResult:
    """Result of a schema extraction call.

    A ParseResult is either a success carrying a Schema or a failure carrying
    a human-readable error message, never both. Callers must check
    ``success`` before reading ``data``.

    Attributes:
        success: Whether extraction produced a schema.
        data: Extracted Schema (success only).
        error: Error message (failure only).
        dialect: Dialect the text was parsed as.
        tier: Parser tier that produced the schema (success only).
        warnings: Diagnostics collected during the call.

    Example:
        >>> result = ParseResult.fail("Schema text is empty")
        >>> result.success
        False
        >>> result.data is None
        True
    """

    success: bool
    data: Optional[Schema] = None
    error: Optional[str] = None
    dialect: Dialect = Dialect.UNKNOWN
    tier: Optional[ParserTier] = None
    warnings: tuple[ExtractionWarning, ...] = ()

    def __post_init__(self) -> None:
        """Enforce the success/failure tagging."""
        if self.success:
            if self.data is None:
                raise ValueError("a successful ParseResult must carry data")
            if self.error is not None:
                raise ValueError("a successful ParseResult cannot carry an error")
        else:
            if not self.error:
                raise ValueError("a failed ParseResult must carry an error message")
            if self.data is not None:
                raise ValueError("a failed ParseResult cannot carry data")

    @classmethod
    def ok(
        cls,
        data: Schema,
        dialect: Dialect = Dialect.UNKNOWN,
        tier: ParserTier = ParserTier.STRUCTURAL,
        warnings: Optional[list[ExtractionWarning]] = None,
    ) -> ParseResult:
        """Build a success result."""
        return cls(
            success=True,
            data=data,
            dialect=dialect,
            tier=tier,
            warnings=tuple(warnings or ()),
        )

    @classmethod
    def fail(
        cls,
        error: str,
        dialect: Dialect = Dialect.UNKNOWN,
        warnings: Optional[list[ExtractionWarning]] = None,
    ) -> ParseResult:
        """Build a failure result."""
        return cls(
            success=False,
            error=error,
            dialect=dialect,
            warnings=tuple(warnings or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary format.

        Returns:
            Dictionary with "success", "data", "error", "dialect", "tier"
            and "warnings" keys.
        """
        return {
            "success": self.success,
            "data": self.data.to_dict() if self.data is not None else None,
            "error": self.error,
            "dialect": self.dialect.value,
            "tier": self.tier.value if self.tier is not None else None,
            "warnings": [
                {"level": w.level, "message": w.message, "context": w.context}
                for w in self.warnings
            ],
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert result to JSON string.

        Args:
            indent: Number of spaces to use for indentation. Defaults to 2.

        Returns:
            JSON string representation of the result.
        """
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def to_graph(self) -> "SchemaGraph":
        """Build a SchemaGraph over the extracted tables and relationships.

        Raises:
            ValueError: If the result is a failure.
        """
        from schema_extractor.graph.schema_graph import SchemaGraph

        if self.data is None:
            raise ValueError(f"cannot build a graph from a failed result: {self.error}")
        return SchemaGraph(self.data)

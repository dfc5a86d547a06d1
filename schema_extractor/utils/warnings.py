"""
Warning system for schema extraction.

This module defines the diagnostic collection used during a single
extraction call. Parsers report dropped declarations, unresolved
references and parser hand-overs here; the collected warnings travel back
to the caller on the ParseResult.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

VALID_LEVELS = ("INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class ExtractionWarning:
    """Warning or error message produced during extraction.

    Attributes:
        level: Severity level ("INFO", "WARNING", "ERROR").
        message: Warning or error message text.
        context: Optional context information (e.g. a declaration name).

    Example:
        >>> warning = ExtractionWarning(
        ...     level="WARNING",
        ...     message="Index 'posts_idx' dropped",
        ...     context="posts",
        ... )
        >>> warning.level
        'WARNING'
    """

    level: str
    message: str
    context: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate warning level."""
        if self.level not in VALID_LEVELS:
            raise ValueError(
                f"Invalid warning level: {self.level}. "
                f"Must be one of {list(VALID_LEVELS)}"
            )


class WarningCollector:
    """Collects warnings and errors during one extraction call.

    A collector is created per call and never shared between calls.

    Attributes:
        warnings: List of ExtractionWarning objects collected so far.

    Example:
        >>> collector = WarningCollector()
        >>> collector.add("WARNING", "Spread 'base' is not a column group")
        >>> collector.has_errors()
        False
        >>> len(collector.get_all())
        1
    """

    def __init__(self) -> None:
        """Initialize a WarningCollector."""
        self.warnings: list[ExtractionWarning] = []

    def add(self, level: str, message: str, context: Optional[str] = None) -> None:
        """Add a warning or error message.

        Args:
            level: Severity level ("INFO", "WARNING", "ERROR").
            message: Warning or error message text.
            context: Optional context information.
        """
        self.warnings.append(
            ExtractionWarning(level=level, message=message, context=context)
        )

    def info(self, message: str, context: Optional[str] = None) -> None:
        """Add an INFO message."""
        self.add("INFO", message, context)

    def warning(self, message: str, context: Optional[str] = None) -> None:
        """Add a WARNING message."""
        self.add("WARNING", message, context)

    def error(self, message: str, context: Optional[str] = None) -> None:
        """Add an ERROR message."""
        self.add("ERROR", message, context)

    def has_errors(self) -> bool:
        """Check if any error-level warnings exist."""
        return any(warning.level == "ERROR" for warning in self.warnings)

    def get_all(self) -> list[ExtractionWarning]:
        """Get all collected warnings in the order they were added."""
        return self.warnings.copy()

    def get_by_level(self, level: str) -> list[ExtractionWarning]:
        """Get warnings with the given severity level.

        Args:
            level: Severity level to filter by ("INFO", "WARNING", "ERROR").

        Returns:
            List of ExtractionWarning objects with the specified level.
        """
        return [warning for warning in self.warnings if warning.level == level]

    def clear(self) -> None:
        """Clear all collected warnings."""
        self.warnings.clear()

    def add_unresolved_warning(
        self,
        kind: str,
        reference: str,
        context: Optional[str] = None,
    ) -> None:
        """Add a warning for a declaration dropped because a table is unknown.

        Args:
            kind: What was dropped ("Relationship", "Index").
            reference: The table identifier that could not be resolved.
            context: Optional declaration name.
        """
        message = (
            f"{kind} dropped: table '{reference}' is not declared in this schema."
        )
        self.add("WARNING", message, context)

    def add_fallback_warning(
        self, dialect_name: str, reason: str, context: Optional[str] = None
    ) -> None:
        """Add a warning recording a hand-over to the fallback parser.

        Args:
            dialect_name: Display name of the dialect.
            reason: Why the structural parser gave up.
            context: Optional context information.
        """
        message = (
            f"{dialect_name} structural parser failed ({reason}). "
            f"Results come from the fallback parser and may be incomplete."
        )
        self.add("WARNING", message, context)

    def get_summary(self) -> dict[str, int]:
        """Get a summary of warnings by level.

        Example:
            >>> collector = WarningCollector()
            >>> collector.add("INFO", "Info 1")
            >>> collector.add("WARNING", "Warning 1")
            >>> collector.get_summary() == {"INFO": 1, "WARNING": 1, "ERROR": 0}
            True
        """
        summary: dict[str, int] = {level: 0 for level in VALID_LEVELS}
        for warning in self.warnings:
            summary[warning.level] = summary.get(warning.level, 0) + 1
        return summary

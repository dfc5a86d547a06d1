"""
Custom exception classes for schema extraction.

This module defines all custom exceptions used throughout the schema
extractor package. Parsers raise these exceptions; the SchemaExtractor
converts them into failed ParseResult objects so that no exception crosses
the public extraction boundary.
"""

from typing import Optional


class SchemaExtractionError(Exception):
    """Base exception class for all schema extraction errors.

    Attributes:
        message: Human-readable error message describing the error.
    """

    def __init__(self, message: str) -> None:
        """Initialize a SchemaExtractionError with a message.

        Args:
            message: Error message describing what went wrong.
        """
        self.message = message
        super().__init__(self.message)


class InvalidInputError(SchemaExtractionError):
    """Exception raised when the schema text is missing, blank or not a string.

    Input validation failures are reported immediately and never retried
    with a fallback parser.
    """


class DialectMismatchError(SchemaExtractionError):
    """Exception raised when the text does not resemble the requested dialect.

    Attributes:
        message: Error message describing the mismatch.
        dialect: Value of the dialect the text was checked against.
    """

    def __init__(self, message: str, dialect: Optional[str] = None) -> None:
        """Initialize a DialectMismatchError.

        Args:
            message: Error message describing the mismatch.
            dialect: Optional dialect value ("drizzle", "prisma").
        """
        super().__init__(message)
        self.dialect = dialect


class StructuralParseError(SchemaExtractionError):
    """Exception raised when a structural parser cannot process its input.

    The SchemaExtractor treats this error as recoverable and hands the
    original text to the matching fallback parser.

    Attributes:
        message: Error message describing the failure.
        line: Optional 1-based line number where the problem was found.
        column: Optional 1-based column number where the problem was found.
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        """Initialize a StructuralParseError.

        Args:
            message: Error message describing the failure.
            line: Optional 1-based line number.
            column: Optional 1-based column number.
        """
        self.line = line
        self.column = column
        if line is not None:
            location = f"line {line}" if column is None else f"line {line}, column {column}"
            message = f"{message} ({location})"
        super().__init__(message)


class SourceSyntaxError(StructuralParseError):
    """Exception raised when the generic syntax tree contains errors."""


class EmptySchemaError(StructuralParseError):
    """Exception raised when parsing finished but found no tables and no enums."""


class FallbackParseError(SchemaExtractionError):
    """Exception raised when a fallback parser fails while scanning text."""


class UnresolvedReferenceError(SchemaExtractionError):
    """Exception raised when a relationship endpoint cannot be resolved.

    Only raised when ExtractionConfig.on_unresolved is ErrorMode.FAIL; the
    default behavior drops the relationship and records a warning.

    Attributes:
        message: Error message describing the unresolved reference.
        reference: The table identifier that could not be resolved.
        available_tables: Table identifiers known to the parser.
    """

    def __init__(
        self,
        message: str,
        reference: str,
        available_tables: Optional[list[str]] = None,
    ) -> None:
        """Initialize an UnresolvedReferenceError.

        Args:
            message: Error message describing the unresolved reference.
            reference: The unresolved table identifier.
            available_tables: Optional list of known table identifiers.
        """
        self.reference = reference
        self.available_tables = available_tables or []

        if available_tables:
            message = self._build_message(message)

        super().__init__(message)

    def _build_message(self, message: str) -> str:
        """Build detailed error message listing the known tables."""
        msg = [f"{message}\n", "Available tables:"]
        for table in self.available_tables:
            msg.append(f"  • {table}")
        return "\n".join(msg)

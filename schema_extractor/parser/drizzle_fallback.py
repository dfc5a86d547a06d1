"""
Drizzle fallback parser.

This module defines the DrizzleFallbackParser class, a regex scanner used
when the structural parser cannot process a Drizzle schema. It only
understands exported enum and table declarations written in their most
common literal shape. Shared column groups, relations() helpers and index
declarations are not recognized and are simply absent from its output.
"""

import re
from typing import Callable, Optional

from schema_extractor.exceptions import FallbackParseError, SchemaExtractionError
from schema_extractor.models.column import Column, ColumnReference
from schema_extractor.models.config import ExtractionConfig
from schema_extractor.models.enum_definition import EnumDefinition
from schema_extractor.models.relationship import Relationship
from schema_extractor.models.schema import Schema
from schema_extractor.models.table import Table
from schema_extractor.parser.relationships import resolve_relationships
from schema_extractor.registry.table_registry import TableRegistry
from schema_extractor.utils.identifiers import PositionGenerator
from schema_extractor.utils.text import (
    find_matching_brace,
    split_top_level,
    strip_comments,
)
from schema_extractor.utils.warnings import WarningCollector

_DECLARATION_RE = re.compile(r"export\s+const\s+(\w+)\s*=\s*([\w$]+)\s*\(")
_TABLE_HEAD_RE = re.compile(r"\s*(['\"`])([^'\"`]+)\1\s*,\s*\{")
_ENUM_BODY_RE = re.compile(r"\s*(['\"])[^'\"]+\1\s*,\s*\[([^\]]*)\]")
_COLUMN_RE = re.compile(r"^(\w+)\s*:\s*(\w+)\s*\(")
_REFERENCES_RE = re.compile(r"\.references\(\s*\(\s*\)\s*=>\s*(\w+)\.(\w+)\s*\)")
_CALL_OPEN_RE = re.compile(r"\s*\(")


class DrizzleFallbackParser:
    """Regex-based parser for Drizzle schemas.

    Completing the scan is always a success, even when nothing was found.

    Example:
        >>> parser = DrizzleFallbackParser()
        >>> schema = parser.parse(
        ...     "export const users = pgTable('users', { id: serial('id') }).enableRLS()"
        ... )
        >>> [table.id for table in schema.tables]
        ['users']
    """

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        random_source: Optional[Callable[[], float]] = None,
    ) -> None:
        """Initialize a DrizzleFallbackParser.

        Args:
            config: Optional ExtractionConfig.
            random_source: Optional randomness source for positions.
        """
        self.config = config or ExtractionConfig()
        self.keywords = self.config.drizzle_keywords
        self.types = self.config.drizzle_types
        self.random_source = random_source

    def parse(self, text: str, collector: Optional[WarningCollector] = None) -> Schema:
        """Scan Drizzle schema text.

        Args:
            text: Schema source.
            collector: Optional WarningCollector for diagnostics.

        Returns:
            Extracted Schema, possibly empty.

        Raises:
            FallbackParseError: If scanning fails unexpectedly.
            UnresolvedReferenceError: If a reference names an unknown table
                and the config's on_unresolved mode is FAIL.
        """
        if collector is None:
            collector = WarningCollector()

        try:
            return self._scan(text, collector)
        except SchemaExtractionError:
            raise
        except Exception as e:
            raise FallbackParseError(f"Drizzle fallback parsing failed: {e}") from e

    def _scan(self, text: str, collector: WarningCollector) -> Schema:
        text = strip_comments(text)
        positions = PositionGenerator(
            spacing_x=self.config.table_spacing_x,
            spacing_y=self.config.table_spacing_y,
            per_row=self.config.tables_per_row,
            jitter=self.config.position_jitter,
            random_source=self.random_source,
        )
        registry = TableRegistry(collector)
        enums: list[EnumDefinition] = []

        for match in _DECLARATION_RE.finditer(text):
            name, callee = match.group(1), match.group(2)
            args_start = match.end()

            if callee in self.keywords.enum_constructors:
                enum = self._scan_enum(name, text, args_start)
                if enum is not None:
                    enums.append(enum)
                continue

            if callee in self.keywords.table_creators:
                args_start = self._skip_creator_call(text, match.end() - 1)
                if args_start == -1:
                    continue
            elif callee not in self.keywords.table_constructors:
                continue

            head = _TABLE_HEAD_RE.match(text, args_start)
            if head is None:
                continue

            body_open = head.end() - 1
            body_close = find_matching_brace(text, body_open)
            body_end = len(text) if body_close == -1 else body_close
            body = text[body_open + 1 : body_end]

            registry.register_table(
                Table(
                    id=name,
                    name=head.group(2),
                    columns=tuple(self._scan_columns(body)),
                    position=positions.position_for(len(registry)),
                )
            )

        tables = registry.merged_tables()
        relationships = [
            Relationship.create(
                table.id, column.name, column.references.table, column.references.column
            )
            for table in tables
            for column in table.columns
            if column.references is not None
        ]
        relationships = resolve_relationships(
            relationships,
            registry.table_ids(),
            self.config.on_unresolved,
            collector,
        )

        return Schema(
            tables=tuple(tables), relationships=tuple(relationships), enums=tuple(enums)
        )

    def _scan_enum(self, name: str, text: str, args_start: int) -> Optional[EnumDefinition]:
        body = _ENUM_BODY_RE.match(text, args_start)
        if body is None:
            return None
        values = [value.strip().strip("'\"`") for value in body.group(2).split(",")]
        return EnumDefinition(name=name, values=tuple(value for value in values if value))

    def _skip_creator_call(self, text: str, open_paren: int) -> int:
        """Return the index just inside ``(`` of ``creator(fn)(``, or -1."""
        close_paren = find_matching_brace(text, open_paren)
        if close_paren == -1:
            return -1
        second = _CALL_OPEN_RE.match(text, close_paren + 1)
        return second.end() if second is not None else -1

    def _scan_columns(self, body: str) -> list[Column]:
        columns: list[Column] = []
        for entry in split_top_level(body):
            match = _COLUMN_RE.match(entry)
            if match is None:
                continue
            column_name, builder = match.group(1), match.group(2)
            modifiers = entry[match.end() :]

            reference = None
            found = _REFERENCES_RE.search(modifiers)
            if found is not None:
                reference = ColumnReference(table=found.group(1), column=found.group(2))

            columns.append(
                Column(
                    name=column_name,
                    type=self.types.resolve(builder) or builder,
                    is_primary_key="primaryKey()" in modifiers,
                    is_unique="unique()" in modifiers,
                    is_not_null="notNull()" in modifiers,
                    references=reference,
                )
            )
        return columns

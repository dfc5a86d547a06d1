"""
Prisma fallback parser.

This module defines the PrismaFallbackParser class, a coarse line scanner
used when the structural parser cannot process a Prisma schema. It keeps
only scalar fields with a dictionary type and never produces relationships
or indexes.
"""

import re
from typing import Callable, Optional

from schema_extractor.exceptions import FallbackParseError, SchemaExtractionError
from schema_extractor.models.column import Column
from schema_extractor.models.config import ExtractionConfig
from schema_extractor.models.enum_definition import EnumDefinition
from schema_extractor.models.schema import Schema
from schema_extractor.models.table import Table
from schema_extractor.parser.prisma_parser import ENUM_ATTRIBUTE_RE
from schema_extractor.registry.table_registry import TableRegistry
from schema_extractor.utils.identifiers import PositionGenerator
from schema_extractor.utils.text import strip_comments
from schema_extractor.utils.warnings import WarningCollector

_ENUM_RE = re.compile(r"(?<![\w.@])enum\s+(\w+)\s*\{([^}]*)\}")
_MODEL_RE = re.compile(r"(?<![\w.@])model\s+(\w+)\s*\{([^}]*)\}")
_FIELD_RE = re.compile(r"^(\w+)\s+([\w\[\]?]+)")


class PrismaFallbackParser:
    """Line-scanning parser for Prisma schemas.

    Models without any recognized column are left out. Completing the scan
    is a success even when nothing was found.
    """

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        random_source: Optional[Callable[[], float]] = None,
    ) -> None:
        """Initialize a PrismaFallbackParser.

        Args:
            config: Optional ExtractionConfig.
            random_source: Optional randomness source for positions.
        """
        self.config = config or ExtractionConfig()
        self.types = self.config.prisma_types
        self.random_source = random_source

    def parse(self, text: str, collector: Optional[WarningCollector] = None) -> Schema:
        """Scan Prisma schema text.

        Args:
            text: Prisma schema source.
            collector: Optional WarningCollector for diagnostics.

        Returns:
            Extracted Schema with tables and enums only.

        Raises:
            FallbackParseError: If scanning fails unexpectedly.
        """
        if collector is None:
            collector = WarningCollector()

        try:
            return self._scan(strip_comments(text), collector)
        except SchemaExtractionError:
            raise
        except Exception as e:
            raise FallbackParseError(f"Prisma fallback parsing failed: {e}") from e

    def _scan(self, text: str, collector: WarningCollector) -> Schema:
        positions = PositionGenerator(
            spacing_x=self.config.table_spacing_x,
            spacing_y=self.config.table_spacing_y,
            per_row=self.config.tables_per_row,
            jitter=self.config.position_jitter,
            random_source=self.random_source,
        )

        enums = [
            EnumDefinition(
                name=match.group(1),
                values=tuple(ENUM_ATTRIBUTE_RE.sub(" ", match.group(2)).split()),
            )
            for match in _ENUM_RE.finditer(text)
        ]

        registry = TableRegistry(collector)
        for match in _MODEL_RE.finditer(text):
            model_name, body = match.group(1), match.group(2)
            columns = self._scan_fields(body)
            if not columns:
                collector.info("Model has no recognizable columns; skipped", context=model_name)
                continue
            registry.register_table(
                Table(
                    id=model_name,
                    name=model_name,
                    columns=tuple(columns),
                    position=positions.position_for(len(registry)),
                )
            )

        return Schema(tables=tuple(registry.merged_tables()), enums=tuple(enums))

    def _scan_fields(self, body: str) -> list[Column]:
        columns: list[Column] = []
        for line in body.split("\n"):
            stripped = line.strip()
            if not stripped or stripped.startswith("@@"):
                continue

            match = _FIELD_RE.match(stripped)
            if match is None:
                continue

            field_name, type_text = match.group(1), match.group(2)
            column_type = self.types.resolve(re.sub(r"[\[\]?]", "", type_text))
            if column_type is None:
                continue

            columns.append(
                Column(
                    name=field_name,
                    type=column_type,
                    is_primary_key="@id" in stripped,
                    is_unique="@unique" in stripped,
                    is_not_null="?" not in type_text,
                )
            )
        return columns

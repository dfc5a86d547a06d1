"""
Schema model.

This module defines the Schema class, the normalized output of a parse
call, and SchemaStats, the summary counts shown next to a diagram.
"""

from dataclasses import dataclass
from typing import Any, Optional

from schema_extractor.models.enum_definition import EnumDefinition
from schema_extractor.models.relationship import Relationship
from schema_extractor.models.table import Table


@dataclass(frozen=True)
class SchemaStats:
    """Summary counts of an extracted schema."""

    table_count: int = 0
    relationship_count: int = 0
    column_count: int = 0
    enum_count: int = 0
    index_count: int = 0

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary."""
        return {
            "tableCount": self.table_count,
            "relationshipCount": self.relationship_count,
            "columnCount": self.column_count,
            "enumCount": self.enum_count,
            "indexCount": self.index_count,
        }


@dataclass(frozen=True)
class Schema:
    """Normalized entity-relationship model extracted from schema text.

    A Schema is created fresh for every parse call and handed to the caller
    in full; nothing inside the extractor keeps a reference to it.

    Attributes:
        tables: Tables in declaration order. Table ids are unique.
        relationships: Relationships whose endpoints are tables of this
            schema.
        enums: Enums in declaration order.
    """

    tables: tuple[Table, ...] = ()
    relationships: tuple[Relationship, ...] = ()
    enums: tuple[EnumDefinition, ...] = ()

    def get_table(self, table_id: str) -> Optional[Table]:
        """Get a table by id.

        Args:
            table_id: Table identifier.

        Returns:
            Table or None if not found.
        """
        for table in self.tables:
            if table.id == table_id:
                return table
        return None

    def get_enum(self, name: str) -> Optional[EnumDefinition]:
        """Get an enum by name."""
        for enum in self.enums:
            if enum.name == name:
                return enum
        return None

    def table_ids(self) -> list[str]:
        """Return all table ids in declaration order."""
        return [table.id for table in self.tables]

    def is_empty(self) -> bool:
        """Check whether the schema has no tables and no enums."""
        return not self.tables and not self.enums

    def get_statistics(self) -> SchemaStats:
        """Calculate summary counts.

        Returns:
            SchemaStats for this schema.
        """
        return SchemaStats(
            table_count=len(self.tables),
            relationship_count=len(self.relationships),
            column_count=sum(len(table.columns) for table in self.tables),
            enum_count=len(self.enums),
            index_count=sum(len(table.indexes) for table in self.tables),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary with "tables", "relationships" and "enums" lists.
        """
        return {
            "tables": [table.to_dict() for table in self.tables],
            "relationships": [rel.to_dict() for rel in self.relationships],
            "enums": [enum.to_dict() for enum in self.enums],
        }

"""
Table model.

This module defines the Table class together with the Index and Position
value objects attached to it.
"""

from dataclasses import dataclass
from typing import Any, Optional

from schema_extractor.models.column import Column


@dataclass(frozen=True)
class Index:
    """An index declared on a table.

    Attributes:
        name: Index name.
        columns: Indexed column names. Order is the composite key order.
        is_unique: Whether the index enforces uniqueness.
    """

    name: str
    columns: tuple[str, ...] = ()
    is_unique: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "columns": list(self.columns),
            "isUnique": self.is_unique,
        }


@dataclass(frozen=True)
class Position:
    """Placeholder layout position of a table.

    Positions are advisory defaults for a renderer; two parses of the same
    source are not required to produce the same position.
    """

    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Table:
    """A normalized table (Drizzle table or Prisma model).

    Attributes:
        id: Declared identifier (Drizzle variable name, Prisma model name).
            Relationships use it as their join key.
        name: External storage name (the Drizzle table name argument, or the
            Prisma @@map value); may differ from id.
        columns: Columns in declaration order.
        indexes: Indexes declared on the table.
        position: Placeholder layout position.

    Example:
        >>> table = Table(
        ...     id="users",
        ...     name="users",
        ...     columns=(Column(name="id", type="serial", is_primary_key=True),),
        ... )
        >>> table.get_column("id").type
        'serial'
    """

    id: str
    name: str
    columns: tuple[Column, ...] = ()
    indexes: tuple[Index, ...] = ()
    position: Position = Position(0.0, 0.0)

    def get_column(self, name: str) -> Optional[Column]:
        """Get a column by name.

        Args:
            name: Column name.

        Returns:
            Column or None if the table has no such column.
        """
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def has_column(self, name: str) -> bool:
        """Check if the table has a column with this name."""
        return self.get_column(name) is not None

    def primary_keys(self) -> list[Column]:
        """Return the primary key columns in declaration order."""
        return [column for column in self.columns if column.is_primary_key]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation of the Table.
        """
        return {
            "id": self.id,
            "name": self.name,
            "columns": [column.to_dict() for column in self.columns],
            "indexes": [index.to_dict() for index in self.indexes],
            "position": self.position.to_dict(),
        }

"""
Column model.

This module defines the Column class and the ColumnReference class, which
represent a normalized column and the inline foreign key it may declare.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ColumnReference:
    """Inline foreign key target of a column.

    Attributes:
        table: Identifier of the referenced table.
        column: Name of the referenced column.

    Example:
        >>> ref = ColumnReference(table="users", column="id")
        >>> ref.to_qualified_name()
        'users.id'
    """

    table: str
    column: str

    def to_qualified_name(self) -> str:
        """Return the reference as "table.column"."""
        return f"{self.table}.{self.column}"

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary."""
        return {"table": self.table, "column": self.column}


@dataclass(frozen=True)
class Column:
    """A normalized column (Drizzle column or Prisma scalar field).

    Columns are immutable snapshots produced once per parse call. A column
    is never emitted without a type: parsers drop declarations whose type
    cannot be resolved instead of constructing them.

    Attributes:
        name: Column name, unique within its table.
        type: Normalized type string, may carry arguments
            (e.g. "varchar(255)", "enum(Role)", "text[]").
        is_primary_key: Whether the column is (part of) the primary key.
        is_unique: Whether the column carries a uniqueness constraint.
        is_not_null: Whether the column is declared NOT NULL.
        references: Optional inline foreign key target.
        default_value: Optional normalized default. Generator defaults are
            reported as sentinels: "now()", "gen_random_uuid()",
            "autoincrement".

    Example:
        >>> col = Column(name="id", type="serial", is_primary_key=True)
        >>> col.to_dict()["isPrimaryKey"]
        True
    """

    name: str
    type: str
    is_primary_key: bool = False
    is_unique: bool = False
    is_not_null: bool = False
    references: Optional[ColumnReference] = None
    default_value: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate that required fields are not empty."""
        if not self.name:
            raise ValueError("column name cannot be empty")
        if not self.type:
            raise ValueError(f"column '{self.name}' type cannot be empty")

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase dictionary consumers read.

        Returns:
            Dictionary representation of the Column.
        """
        data: dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "isPrimaryKey": self.is_primary_key,
            "isUnique": self.is_unique,
            "isNotNull": self.is_not_null,
        }
        if self.references is not None:
            data["references"] = self.references.to_dict()
        if self.default_value is not None:
            data["defaultValue"] = self.default_value
        return data

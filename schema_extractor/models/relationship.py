"""
Relationship model.

This module defines the Relationship class, which links a foreign key
column of one table to a column of another table.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Relationship:
    """A resolved foreign key link between two tables.

    Attributes:
        id: Deterministic identifier, "rel-<source>-<sourceColumn>-<target>".
        source: Identifier of the owning table.
        target: Identifier of the referenced table.
        source_column: Foreign key column on the source table.
        target_column: Referenced column on the target table.

    Example:
        >>> rel = Relationship.create("posts", "authorId", "users", "id")
        >>> rel.id
        'rel-posts-authorId-users'
    """

    id: str
    source: str
    target: str
    source_column: str
    target_column: str

    @classmethod
    def create(
        cls, source: str, source_column: str, target: str, target_column: str
    ) -> "Relationship":
        """Create a relationship with a synthesized id.

        Args:
            source: Owning table identifier.
            source_column: Foreign key column name.
            target: Referenced table identifier.
            target_column: Referenced column name.

        Returns:
            New Relationship.
        """
        from schema_extractor.utils.identifiers import relationship_id

        return cls(
            id=relationship_id(source, source_column, target),
            source=source,
            target=target,
            source_column=source_column,
            target_column=target_column,
        )

    def link_key(self) -> tuple[str, str, str, str]:
        """Return the (source, source_column, target, target_column) key.

        Two relationships with the same key describe the same logical link.
        """
        return (self.source, self.source_column, self.target, self.target_column)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase dictionary consumers read."""
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "sourceColumn": self.source_column,
            "targetColumn": self.target_column,
        }

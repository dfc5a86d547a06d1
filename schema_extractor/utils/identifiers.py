"""
Identifier and placeholder position helpers.

Relationship ids are deterministic; placeholder positions take their jitter
from an injectable randomness source so callers and tests can make them
deterministic too.
"""

import random
from typing import Callable, Optional

from schema_extractor.models.table import Position

DEFAULT_ORIGIN = 50.0


def relationship_id(source_table: str, source_column: str, target_table: str) -> str:
    """Build the id of a relationship.

    Args:
        source_table: Owning table id.
        source_column: Foreign key column name.
        target_table: Referenced table id.

    Returns:
        Id of the form "rel-<source>-<sourceColumn>-<target>".

    Example:
        >>> relationship_id("posts", "authorId", "users")
        'rel-posts-authorId-users'
    """
    return f"rel-{source_table}-{source_column}-{target_table}"


class PositionGenerator:
    """Generates placeholder table positions.

    Tables are laid out left to right with a random horizontal offset, and
    move down one row every ``per_row`` tables.

    Attributes:
        spacing_x: Horizontal distance between consecutive tables.
        spacing_y: Vertical distance between rows.
        per_row: Number of tables per row.
        jitter: Maximum absolute horizontal offset.
        random_source: Zero-argument callable returning a float in [0, 1).

    Example:
        >>> generator = PositionGenerator(random_source=lambda: 0.5)
        >>> generator.position_for(4)
        Position(x=1050.0, y=250.0)
    """

    def __init__(
        self,
        spacing_x: float = 250.0,
        spacing_y: float = 200.0,
        per_row: int = 3,
        jitter: float = 50.0,
        random_source: Optional[Callable[[], float]] = None,
    ) -> None:
        """Initialize a PositionGenerator.

        Args:
            spacing_x: Horizontal distance between consecutive tables.
            spacing_y: Vertical distance between rows.
            per_row: Number of tables per row.
            jitter: Maximum absolute horizontal offset.
            random_source: Optional randomness source; defaults to
                random.random.
        """
        if per_row < 1:
            raise ValueError("per_row must be at least 1")
        self.spacing_x = spacing_x
        self.spacing_y = spacing_y
        self.per_row = per_row
        self.jitter = jitter
        self.random_source = random_source or random.random

    def position_for(self, index: int) -> Position:
        """Return the placeholder position of the index-th table.

        Args:
            index: Zero-based running index of the table within its parse.

        Returns:
            Position for the table.
        """
        offset = self.random_source() * 2 * self.jitter - self.jitter
        return Position(
            x=DEFAULT_ORIGIN + index * self.spacing_x + offset,
            y=DEFAULT_ORIGIN + (index // self.per_row) * self.spacing_y,
        )

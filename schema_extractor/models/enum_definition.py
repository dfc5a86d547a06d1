"""
Enum definition model.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class EnumDefinition:
    """A declared enum with its values in declaration order.

    Attributes:
        name: Enum name (the Drizzle variable name or the Prisma enum name).
        values: Enum values, declaration order preserved.
    """

    name: str
    values: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"name": self.name, "values": list(self.values)}

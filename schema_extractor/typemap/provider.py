"""
Abstract type map provider interface.

This module defines the TypeMapProvider abstract base class. A type map
translates a dialect-specific type name (a Drizzle column builder such as
"doublePrecision", or a Prisma scalar such as "DateTime") into the
normalized column type string reported on a Column. Parsers only talk to
this interface, so new primitive types can be registered without touching
parsing logic.
"""

from abc import ABC, abstractmethod
from typing import Optional


class TypeMapProvider(ABC):
    """Abstract interface for type dictionaries.

    Example:
        >>> class UpperProvider(TypeMapProvider):
        ...     def resolve(self, type_name):
        ...         return type_name.upper()
        ...     def type_names(self):
        ...         return []
    """

    @abstractmethod
    def resolve(self, type_name: str) -> Optional[str]:
        """Return the normalized type for a dialect type name.

        Args:
            type_name: Dialect type name, case-sensitive.

        Returns:
            Normalized type string, or None if the name is not mapped.
        """

    @abstractmethod
    def type_names(self) -> list[str]:
        """Return all dialect type names the provider knows."""

    def has_type(self, type_name: str) -> bool:
        """Check whether a dialect type name is mapped.

        Args:
            type_name: Dialect type name.

        Returns:
            True if resolve() would return a type.
        """
        return self.resolve(type_name) is not None

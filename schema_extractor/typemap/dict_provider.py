"""
Dictionary-based type map provider implementation.

This module defines the DictTypeMapProvider class, which implements the
TypeMapProvider interface using an in-memory dictionary.
"""

from typing import Optional

from schema_extractor.typemap.provider import TypeMapProvider


class DictTypeMapProvider(TypeMapProvider):
    """Type map provider backed by a dictionary.

    Attributes:
        mapping: Dictionary mapping dialect type names to normalized types.
            Example: {"String": "text", "Int": "integer"}

    Example:
        >>> provider = DictTypeMapProvider({"Int": "integer"})
        >>> provider.resolve("Int")
        'integer'
        >>> provider.resolve("Decimal") is None
        True
        >>> provider.with_overrides({"Decimal": "numeric"}).resolve("Decimal")
        'numeric'
    """

    def __init__(self, mapping: dict[str, str]) -> None:
        """Initialize a DictTypeMapProvider.

        Args:
            mapping: Dictionary mapping dialect type names to normalized
                type strings.

        Raises:
            ValueError: If mapping is None or maps a name to an empty type.
            TypeError: If mapping is not a dictionary.
        """
        if mapping is None:
            raise ValueError("mapping cannot be None")
        if not isinstance(mapping, dict):
            raise TypeError("mapping must be a dictionary")
        for name, normalized in mapping.items():
            if not normalized:
                raise ValueError(f"type '{name}' cannot map to an empty type")

        self.mapping: dict[str, str] = dict(mapping)

    def resolve(self, type_name: str) -> Optional[str]:
        """Return the normalized type for a dialect type name."""
        if not type_name:
            return None
        return self.mapping.get(type_name)

    def type_names(self) -> list[str]:
        """Return all mapped dialect type names."""
        return list(self.mapping.keys())

    def with_overrides(self, overrides: dict[str, str]) -> "DictTypeMapProvider":
        """Return a new provider with additional or replaced entries.

        Args:
            overrides: Entries to add on top of the current mapping.

        Returns:
            New DictTypeMapProvider; this provider is left unchanged.
        """
        merged = dict(self.mapping)
        merged.update(overrides)
        return DictTypeMapProvider(merged)

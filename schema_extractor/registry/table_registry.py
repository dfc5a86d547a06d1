"""
Table registry for one extraction call.

This module defines the TableRegistry class, which holds the tables a
parser has collected, queues the indexes discovered by later
passes, and merges both into finished Table records at the end of the call.
"""

import dataclasses
import warnings
from typing import Optional

from schema_extractor.models.table import Index, Table
from schema_extractor.utils.warnings import WarningCollector


def report_redeclaration(
    table_id: str, collector: Optional[WarningCollector] = None
) -> None:
    """Warn that a table id is declared again and the later one wins."""
    message = (
        f"Table '{table_id}' is declared more than once. "
        f"The later declaration replaces the earlier one."
    )
    warnings.warn(message, UserWarning)
    if collector is not None:
        collector.warning(message, context=table_id)


class TableRegistry:
    """Table registry: pipeline state of a single parse call.

    Tables are registered once and never patched. Indexes found by later
    passes are queued by table id and only merged in by merged_tables(),
    which builds new Table records.

    Usage:
        registry = TableRegistry()

        # Register a table from the table pass
        registry.register_table(Table(id="users", name="users"))

        # Queue an index from the index pass
        registry.attach_index("users", Index(name="email_idx", columns=("email",)))

        # Build the finished tables
        tables = registry.merged_tables()
    """

    def __init__(self, collector: Optional[WarningCollector] = None) -> None:
        """Initialize a TableRegistry.

        Args:
            collector: Optional WarningCollector for redefinition and
                dropped-index diagnostics.
        """
        self.tables: dict[str, Table] = {}
        self.collector = collector
        self._pending_indexes: dict[str, list[Index]] = {}

    def register_table(self, table: Table) -> None:
        """Register a table.

        A second table with the same id replaces the first one, keeping its
        declaration slot, and a UserWarning is issued.

        Args:
            table: Table to register.
        """
        if table.id in self.tables:
            report_redeclaration(table.id, self.collector)

        self.tables[table.id] = table

    def get_table(self, table_id: str) -> Optional[Table]:
        """Get a registered table by id."""
        return self.tables.get(table_id)

    def has_table(self, table_id: str) -> bool:
        """Check if a table with this id is registered."""
        return table_id in self.tables

    def table_ids(self) -> list[str]:
        """Return registered table ids in registration order."""
        return list(self.tables.keys())

    def attach_index(self, table_id: str, index: Index) -> bool:
        """Queue an index for the table with the given id.

        Args:
            table_id: Owning table id.
            index: Index to attach.

        Returns:
            True if the table is known, False if the index was dropped.
        """
        if table_id not in self.tables:
            if self.collector is not None:
                self.collector.add_unresolved_warning(
                    "Index", table_id, context=index.name
                )
            return False

        self._pending_indexes.setdefault(table_id, []).append(index)
        return True

    def pending_indexes(self, table_id: str) -> list[Index]:
        """Return the indexes queued for a table."""
        return list(self._pending_indexes.get(table_id, []))

    def merged_tables(self) -> list[Table]:
        """Build the finished tables with their queued indexes.

        Returns:
            New Table records in registration order.
        """
        merged: list[Table] = []
        for table_id, table in self.tables.items():
            extra = self._pending_indexes.get(table_id)
            if extra:
                table = dataclasses.replace(
                    table, indexes=table.indexes + tuple(extra)
                )
            merged.append(table)
        return merged

    def reset(self) -> None:
        """Reset registry."""
        self.tables.clear()
        self._pending_indexes.clear()

    def __len__(self) -> int:
        """Return number of registered tables."""
        return len(self.tables)

    def __repr__(self) -> str:
        """Return string representation of registry."""
        return f"TableRegistry(tables={len(self.tables)})"

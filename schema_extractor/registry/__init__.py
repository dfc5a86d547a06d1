"""
Registry module for per-call table state.
"""

from schema_extractor.registry.table_registry import (
    TableRegistry,
    report_redeclaration,
)

__all__ = ["TableRegistry", "report_redeclaration"]

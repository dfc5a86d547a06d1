"""
Schema graph module.

This package contains the networkx view over extracted tables and
relationships.
"""

from schema_extractor.graph.schema_graph import SchemaGraph

__all__ = [
    "SchemaGraph",
]

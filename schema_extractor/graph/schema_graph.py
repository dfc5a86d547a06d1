"""
Schema graph.

This module defines the SchemaGraph class, which uses networkx to view an
extracted schema as a directed multigraph: tables are nodes and every
relationship is an edge from the owning table to the referenced table.
"""

from __future__ import annotations

from typing import Any

import networkx as nx

from schema_extractor.models.relationship import Relationship
from schema_extractor.models.schema import Schema


class SchemaGraph:
    """Graph of tables and relationships.

    Attributes:
        schema: Schema the graph was built from.
        graph: networkx MultiDiGraph. Nodes are table ids; edges are keyed
            by relationship id.

    Example:
        >>> graph = SchemaGraph(schema)
        >>> sorted(graph.referenced_tables("posts"))
        ['users']
    """

    def __init__(self, schema: Schema) -> None:
        """Build the graph of a schema.

        Relationships whose endpoints are not tables of the schema are not
        added; dangling_relationships() lists them.

        Args:
            schema: Extracted Schema.
        """
        self.schema = schema
        self.graph = nx.MultiDiGraph()
        self._dangling: list[Relationship] = []

        for table in schema.tables:
            self.graph.add_node(
                table.id,
                name=table.name,
                column_count=len(table.columns),
                index_count=len(table.indexes),
            )

        for relationship in schema.relationships:
            ends = (relationship.source, relationship.target)
            if any(end not in self.graph for end in ends):
                self._dangling.append(relationship)
                continue
            self.graph.add_edge(
                relationship.source,
                relationship.target,
                key=relationship.id,
                source_column=relationship.source_column,
                target_column=relationship.target_column,
            )

    def has_table(self, table_id: str) -> bool:
        """Check if a table is a node of the graph."""
        return table_id in self.graph

    def referenced_tables(self, table_id: str) -> set[str]:
        """Get the tables a table points to through its foreign keys.

        Args:
            table_id: Table identifier.

        Returns:
            Set of referenced table ids (empty for unknown tables).
        """
        if table_id not in self.graph:
            return set()
        return set(self.graph.successors(table_id))

    def referencing_tables(self, table_id: str) -> set[str]:
        """Get the tables whose foreign keys point to a table."""
        if table_id not in self.graph:
            return set()
        return set(self.graph.predecessors(table_id))

    def related_tables(self, table_id: str) -> set[str]:
        """Get all tables reachable from a table in either direction.

        Args:
            table_id: Table identifier.

        Returns:
            Set of related table ids, excluding the table itself.

        Example:
            >>> graph.related_tables("comments") == {"posts", "users"}
            True
        """
        if table_id not in self.graph:
            return set()
        component = nx.node_connected_component(self.graph.to_undirected(), table_id)
        return set(component) - {table_id}

    def isolated_tables(self) -> list[str]:
        """Get tables without any relationship, in declaration order."""
        isolated = set(nx.isolates(self.graph))
        return [table.id for table in self.schema.tables if table.id in isolated]

    def dangling_relationships(self) -> list[Relationship]:
        """Get relationships whose source or target is not a table."""
        return list(self._dangling)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """Export graph to dictionary format.

        Returns:
            Dictionary containing nodes and edges.
        """
        return {
            "nodes": [
                {
                    "id": node,
                    "name": data.get("name"),
                    "columnCount": data.get("column_count"),
                    "indexCount": data.get("index_count"),
                }
                for node, data in self.graph.nodes(data=True)
            ],
            "edges": [
                {
                    "id": key,
                    "source": u,
                    "target": v,
                    "sourceColumn": data.get("source_column"),
                    "targetColumn": data.get("target_column"),
                }
                for u, v, key, data in self.graph.edges(keys=True, data=True)
            ],
        }

    def get_statistics(self) -> dict[str, int]:
        """Get graph statistics.

        Returns:
            Dictionary with node, edge, component and isolated table counts.
        """
        components = (
            nx.number_weakly_connected_components(self.graph)
            if self.graph.number_of_nodes()
            else 0
        )
        return {
            "total_nodes": self.graph.number_of_nodes(),
            "total_edges": self.graph.number_of_edges(),
            "connected_components": components,
            "isolated_tables": len(self.isolated_tables()),
            "dangling_relationships": len(self._dangling),
        }

    def to_dot(self) -> str:
        """Export graph to Graphviz DOT format.

        Returns:
            DOT format string with one labelled edge per relationship.

        Example:
            >>> "digraph" in graph.to_dot()
            True
        """
        lines = ["digraph schema {", "  node [shape=box];"]
        for node in self.graph.nodes:
            lines.append(f'  "{node}";')
        for u, v, data in self.graph.edges(data=True):
            label = f"{data.get('source_column')} -> {data.get('target_column')}"
            lines.append(f'  "{u}" -> "{v}" [label="{label}"];')
        lines.append("}")
        return "\n".join(lines)

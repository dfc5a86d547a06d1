"""
Tests for SchemaGraph.
"""

import networkx as nx

from schema_extractor import (
    Column,
    Relationship,
    Schema,
    SchemaGraph,
    Table,
    parse,
)
from schema_extractor.examples import EXAMPLE_PRISMA_SCHEMA


def table(table_id):
    return Table(id=table_id, name=table_id, columns=(Column(name="id", type="serial"),))


class TestSchemaGraph:
    """Tests for SchemaGraph."""

    def setup_method(self):
        schema = Schema(
            tables=(table("users"), table("posts"), table("comments"), table("tags")),
            relationships=(
                Relationship.create("posts", "authorId", "users", "id"),
                Relationship.create("comments", "postId", "posts", "id"),
                Relationship.create("comments", "authorId", "users", "id"),
                Relationship.create("comments", "parentId", "comments", "id"),
                Relationship.create("ghosts", "userId", "users", "id"),
            ),
        )
        self.graph = SchemaGraph(schema)

    def test_nodes_and_edges(self):
        assert isinstance(self.graph.graph, nx.MultiDiGraph)
        assert self.graph.graph.number_of_nodes() == 4
        assert self.graph.graph.number_of_edges() == 4
        assert self.graph.has_table("tags")
        assert not self.graph.has_table("ghosts")

    def test_referenced_and_referencing(self):
        assert self.graph.referenced_tables("comments") == {
            "posts",
            "users",
            "comments",
        }
        assert self.graph.referencing_tables("users") == {"posts", "comments"}
        assert self.graph.referenced_tables("nope") == set()
        assert self.graph.referencing_tables("nope") == set()

    def test_related_tables(self):
        assert self.graph.related_tables("users") == {"posts", "comments"}
        assert self.graph.related_tables("tags") == set()
        assert self.graph.related_tables("nope") == set()

    def test_isolated_and_dangling(self):
        assert self.graph.isolated_tables() == ["tags"]
        assert [rel.source for rel in self.graph.dangling_relationships()] == [
            "ghosts"
        ]

    def test_statistics(self):
        assert self.graph.get_statistics() == {
            "total_nodes": 4,
            "total_edges": 4,
            "connected_components": 2,
            "isolated_tables": 1,
            "dangling_relationships": 1,
        }

    def test_to_dict(self):
        data = self.graph.to_dict()

        assert data["nodes"][0] == {
            "id": "users",
            "name": "users",
            "columnCount": 1,
            "indexCount": 0,
        }
        edge = next(e for e in data["edges"] if e["id"] == "rel-posts-authorId-users")
        assert edge["source"] == "posts"
        assert edge["target"] == "users"
        assert edge["sourceColumn"] == "authorId"

    def test_to_dot(self):
        dot = self.graph.to_dot()

        assert dot.startswith("digraph schema {")
        assert '"posts" -> "users" [label="authorId -> id"];' in dot
        assert dot.endswith("}")

    def test_empty_schema(self):
        graph = SchemaGraph(Schema())

        assert graph.get_statistics()["connected_components"] == 0
        assert graph.to_dict() == {"nodes": [], "edges": []}


class TestResultGraph:
    """Tests for ParseResult.to_graph."""

    def test_prisma_example(self):
        graph = parse(EXAMPLE_PRISMA_SCHEMA).to_graph()

        assert graph.referenced_tables("Post") == {"User", "Category"}
        assert graph.referencing_tables("Post") == {"PostTag", "Comment"}
        assert graph.isolated_tables() == []
        assert graph.get_statistics()["connected_components"] == 1

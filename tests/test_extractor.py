"""
End-to-end tests for SchemaExtractor.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from schema_extractor import (
    Dialect,
    ErrorMode,
    ExtractionConfig,
    ParserTier,
    SchemaExtractor,
    parse,
)
from schema_extractor.examples import EXAMPLE_DRIZZLE_SCHEMA, EXAMPLE_PRISMA_SCHEMA

USERS = (
    "export const users = pgTable('users', { id: serial('id').primaryKey(), "
    "email: varchar('email').unique() })"
)

POSTS = (
    "\nexport const posts = pgTable('posts', {\n"
    "  id: serial('id').primaryKey(),\n"
    "  authorId: integer('author_id').references(() => users.id),\n"
    "});\n"
)

PRISMA_BLOG = """
model User {
  id String @id
}

model Post {
  id       String @id
  title    String
  authorId String
  author   User   @relation(fields: [authorId], references: [id])

  @@unique([authorId, title])
}
"""


def typing_view(schema):
    """Everything about a schema except positions."""
    return (
        [
            (table.id, table.name, [column.to_dict() for column in table.columns])
            for table in schema.tables
        ],
        [rel.to_dict() for rel in schema.relationships],
        [enum.to_dict() for enum in schema.enums],
    )


class TestDrizzleScenarios:
    """Drizzle extraction scenarios."""

    def setup_method(self):
        self.extractor = SchemaExtractor()

    def test_single_table(self):
        result = self.extractor.extract(USERS)

        assert result.success
        assert result.dialect == Dialect.DRIZZLE
        assert result.tier == ParserTier.STRUCTURAL
        table = result.data.tables[0]
        assert (table.id, table.name) == ("users", "users")
        assert table.columns[0].to_dict() == {
            "name": "id",
            "type": "serial",
            "isPrimaryKey": True,
            "isUnique": False,
            "isNotNull": False,
        }
        assert table.columns[1].type == "varchar"
        assert table.columns[1].is_unique
        assert result.data.relationships == ()

    def test_reference_synthesis(self):
        result = self.extractor.extract(USERS + POSTS)

        assert [rel.to_dict() for rel in result.data.relationships] == [
            {
                "id": "rel-posts-authorId-users",
                "source": "posts",
                "target": "users",
                "sourceColumn": "authorId",
                "targetColumn": "id",
            }
        ]

    def test_n_tables_zero_relationships(self):
        source = "\n".join(
            f"export const t{i} = pgTable('t{i}', {{ id: serial('id') }});"
            for i in range(5)
        )

        result = self.extractor.extract(source)

        assert len(result.data.tables) == 5
        assert result.data.relationships == ()

    def test_table_with_trailing_call(self):
        source = USERS + POSTS.replace("});", "}).enableRLS();")

        result = self.extractor.extract(source)

        assert result.success
        assert result.tier == ParserTier.STRUCTURAL
        assert result.data.table_ids() == ["users", "posts"]
        assert len(result.data.relationships) == 1

    def test_fallback_keeps_table_ids_unique(self):
        source = (
            "export const users = pgTable('users', { id: serial('id') });\n"
            "export const users = pgTable('users', { id: uuid('id') });\n"
            "export const broken = pgTable('broken', {\n"
        )

        with pytest.warns(UserWarning):
            result = self.extractor.extract(source, "drizzle")

        assert result.tier == ParserTier.FALLBACK
        assert result.data.table_ids() == ["users", "broken"]

    def test_fallback_after_syntax_error(self):
        source = (
            "export const users = pgTable('users', {\n"
            "  id: serial('id').primaryKey(),\n"
            "  email: varchar('email'\n"
            "});\n"
        )

        result = self.extractor.extract(source, "drizzle")

        assert result.success
        assert result.tier == ParserTier.FALLBACK
        assert result.data.tables[0].has_column("id")
        assert any("fallback parser" in w.message for w in result.warnings)

    def test_no_fallback(self):
        extractor = SchemaExtractor(ExtractionConfig(enable_fallback=False))

        result = extractor.extract(
            "export const users = pgTable('users', {\n  id: serial('id')\n"
        )

        assert not result.success
        assert "Syntax error" in result.error or "Missing token" in result.error

    def test_empty_structural_and_fallback_fails(self):
        result = self.extractor.extract(
            "const hidden = pgTable('hidden', { id: serial('id') });"
        )

        assert not result.success
        assert result.error == "No valid table/enum declarations found"

    def test_empty_fallback_is_success_by_default(self):
        source = "export const t = pgTable(name, { id: serial('id') }) +;"

        result = self.extractor.extract(source)

        assert result.success
        assert result.tier == ParserTier.FALLBACK
        assert result.data.is_empty()

    def test_strict_mode_fails_on_unknown_table(self):
        extractor = SchemaExtractor(ExtractionConfig(on_unresolved=ErrorMode.FAIL))

        result = extractor.extract(POSTS)

        assert not result.success
        assert "unknown table 'users'" in result.error

    def test_example(self):
        result = self.extractor.extract(EXAMPLE_DRIZZLE_SCHEMA)

        assert result.success
        assert result.tier == ParserTier.STRUCTURAL
        stats = result.data.get_statistics()
        assert stats.table_count == 3
        assert stats.enum_count == 10
        assert stats.relationship_count == 3
        assert stats.index_count == 2


class TestPrismaScenarios:
    """Prisma extraction scenarios."""

    def setup_method(self):
        self.extractor = SchemaExtractor()

    def test_relation(self):
        result = self.extractor.extract(PRISMA_BLOG)

        assert result.success
        assert result.dialect == Dialect.PRISMA
        rel = result.data.relationships[0]
        assert (rel.source, rel.target) == ("Post", "User")
        assert (rel.source_column, rel.target_column) == ("authorId", "id")

    def test_table_ids_are_unique(self):
        source = "model User {\n  id Int @id\n}\n" + PRISMA_BLOG

        with pytest.warns(UserWarning):
            result = self.extractor.extract(source, "prisma")

        assert result.success
        assert result.data.table_ids() == ["User", "Post"]
        assert result.data.get_table("User").columns[0].type == "text"

    def test_unique_index(self):
        result = self.extractor.extract(PRISMA_BLOG)

        (index,) = result.data.get_table("Post").indexes
        assert index.columns == ("authorId", "title")
        assert index.is_unique

    def test_fallback_on_unbalanced_braces(self):
        result = self.extractor.extract(
            "model User {\n  id Int @id\n}\nmodel Broken {\n  id Int @id\n"
        )

        assert result.success
        assert result.tier == ParserTier.FALLBACK
        assert result.data.table_ids() == ["User"]

    def test_fail_on_empty_fallback(self):
        extractor = SchemaExtractor(ExtractionConfig(fail_on_empty_fallback=True))

        result = extractor.extract("model Broken {\n  id Int @id\n")

        assert not result.success
        assert "No valid Prisma tables or enums" in result.error

    def test_empty_fallback_success_by_default(self):
        result = self.extractor.extract("model Broken {\n  id Int @id\n")

        assert result.success
        assert result.data.is_empty()

    def test_example(self):
        result = self.extractor.extract(EXAMPLE_PRISMA_SCHEMA)

        assert result.success
        assert len(result.data.tables) == 8
        assert len(result.data.relationships) == 9


class TestValidationAndRejection:
    """Input validation and dialect rejection."""

    def setup_method(self):
        self.extractor = SchemaExtractor()

    @pytest.mark.parametrize(
        "text, message",
        [
            ("", "Schema code cannot be empty"),
            ("   \n\t", "Schema code cannot be empty"),
            (None, "Invalid schema code provided"),
            (42, "Invalid schema code provided"),
            ("// only a comment\n/* and another */", "empty after removing comments"),
        ],
    )
    def test_invalid_input(self, text, message):
        result = self.extractor.extract(text)

        assert not result.success
        assert message in result.error
        assert result.data is None

    @pytest.mark.parametrize(
        "dialect, message",
        [
            ("drizzle", "No Drizzle table definitions found"),
            ("prisma", "No Prisma models or enums found"),
        ],
    )
    def test_dialect_rejection(self, dialect, message):
        result = self.extractor.extract("const answer = 42;", dialect)

        assert not result.success
        assert message in result.error

    def test_wrong_dialect_is_rejected(self):
        result = self.extractor.extract(PRISMA_BLOG, Dialect.DRIZZLE)

        assert not result.success
        assert result.dialect == Dialect.DRIZZLE

    def test_undetectable_dialect(self):
        result = self.extractor.extract("CREATE TABLE users (id int);")

        assert not result.success
        assert "Could not detect" in result.error

    def test_unknown_dialect_name(self):
        result = self.extractor.extract(USERS, "typeorm")

        assert not result.success
        assert "Unknown dialect" in result.error

    def test_detection_is_reported(self):
        result = self.extractor.extract(USERS)

        assert result.warnings[0].message == "Detected Drizzle schema"


class TestDeterminism:
    """Repeated and concurrent calls."""

    def test_idempotent_typing(self):
        first = parse(EXAMPLE_DRIZZLE_SCHEMA)
        second = parse(EXAMPLE_DRIZZLE_SCHEMA)

        assert typing_view(first.data) == typing_view(second.data)

    def test_fixed_random_source_fixes_positions(self):
        extractor = SchemaExtractor(random_source=lambda: 0.5)

        first = extractor.extract(EXAMPLE_PRISMA_SCHEMA)
        second = extractor.extract(EXAMPLE_PRISMA_SCHEMA)

        assert first.data == second.data

    def test_concurrent_calls(self):
        extractor = SchemaExtractor()
        texts = [EXAMPLE_DRIZZLE_SCHEMA, EXAMPLE_PRISMA_SCHEMA] * 4

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(extractor.extract, texts))

        assert all(result.success for result in results)
        assert typing_view(results[0].data) == typing_view(results[2].data)
        assert typing_view(results[1].data) == typing_view(results[3].data)

    def test_extract_batch(self):
        results = SchemaExtractor().extract_batch([USERS, PRISMA_BLOG, ""])

        assert [result.success for result in results] == [True, True, False]

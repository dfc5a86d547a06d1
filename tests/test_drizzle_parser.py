"""
Tests for the Drizzle structural parser.
"""

import dataclasses

import pytest

from schema_extractor import (
    DrizzleSchemaParser,
    EmptySchemaError,
    ErrorMode,
    ExtractionConfig,
    SourceSyntaxError,
    UnresolvedReferenceError,
)
from schema_extractor.examples import EXAMPLE_DRIZZLE_SCHEMA
from schema_extractor.parser.drizzle_parser import LiteralRenderer
from schema_extractor.parser.syntax_tree import (
    Identifier,
    NumberLiteral,
    ObjectLiteral,
    Property,
    StringLiteral,
)
from schema_extractor.typemap import DrizzleKeywords
from schema_extractor.utils import WarningCollector

USERS = """
import { pgTable, serial, varchar } from 'drizzle-orm/pg-core';

export const users = pgTable('users', {
  id: serial('id').primaryKey(),
  email: varchar('email').unique(),
});
"""

POSTS = """
export const posts = pgTable('posts', {
  id: serial('id').primaryKey(),
  title: varchar('title', { length: 255 }).notNull(),
  authorId: integer('author_id').references(() => users.id),
});
"""


class TestTables:
    """Tests for the table pass."""

    def setup_method(self):
        self.parser = DrizzleSchemaParser(random_source=lambda: 0.5)

    def test_simple_table(self):
        schema = self.parser.parse(USERS)

        assert len(schema.tables) == 1
        users = schema.tables[0]
        assert users.id == "users"
        assert users.name == "users"
        id_column, email = users.columns
        assert id_column.name == "id"
        assert id_column.type == "serial"
        assert id_column.is_primary_key
        assert email.type == "varchar"
        assert email.is_unique
        assert not email.is_not_null
        assert schema.relationships == ()

    def test_table_id_differs_from_name(self):
        schema = self.parser.parse(
            "export const blogPosts = pgTable('blog_posts', { id: serial('id') });"
        )

        assert schema.tables[0].id == "blogPosts"
        assert schema.tables[0].name == "blog_posts"

    def test_non_exported_tables_are_ignored(self):
        schema = self.parser.parse(
            USERS + "const hidden = pgTable('hidden', { id: serial('id') });"
        )

        assert [table.id for table in schema.tables] == ["users"]

    def test_positions_are_sequential(self):
        schema = self.parser.parse(USERS + POSTS)

        assert schema.tables[0].position.x == 50.0
        assert schema.tables[1].position.x == 300.0

    @pytest.mark.parametrize(
        "constructor", ["pgTable", "mysqlTable", "sqliteTable"]
    )
    def test_table_constructors(self, constructor):
        schema = self.parser.parse(
            f"export const t = {constructor}('t', {{ id: integer('id') }});"
        )

        assert schema.tables[0].columns[0].type == "integer"

    def test_table_creator_curried_call(self):
        schema = self.parser.parse(
            "export const users = pgTableCreator((name) => `app_${name}`)("
            "'users', { id: serial('id') });"
        )

        assert schema.tables[0].id == "users"

    def test_table_creator_alias(self):
        schema = self.parser.parse(
            "const createTable = pgTableCreator((name) => `app_${name}`);\n"
            "export const users = createTable('users', { id: serial('id') });"
        )

        assert schema.tables[0].name == "users"

    def test_schema_namespaced_table(self):
        schema = self.parser.parse(
            "export const auth = pgSchema('auth');\n"
            "export const accounts = auth.table('accounts', { id: uuid('id') });"
        )

        assert [table.id for table in schema.tables] == ["accounts"]

    def test_table_with_trailing_calls(self):
        schema = self.parser.parse(
            USERS
            + "export const posts = pgTable('posts', {\n"
            "  id: serial('id').primaryKey(),\n"
            "}).enableRLS().withRLS();\n"
        )

        assert [table.id for table in schema.tables] == ["users", "posts"]
        assert schema.tables[1].columns[0].is_primary_key

    def test_column_callback(self):
        schema = self.parser.parse(
            "export const users = pgTable('users', (t) => ({\n"
            "  id: t.integer().primaryKey(),\n"
            "  name: t.text().notNull(),\n"
            "}));"
        )

        columns = schema.tables[0].columns
        assert [(c.name, c.type) for c in columns] == [
            ("id", "integer"),
            ("name", "text"),
        ]
        assert columns[1].is_not_null

    def test_bad_arguments_skip_table(self):
        collector = WarningCollector()
        schema = self.parser.parse(
            USERS + "export const broken = pgTable(tableName, columns);", collector
        )

        assert [table.id for table in schema.tables] == ["users"]
        assert any(w.context == "broken" for w in collector.get_all())

    def test_later_declaration_replaces_earlier(self):
        with pytest.warns(UserWarning):
            schema = self.parser.parse(
                "export const users = pgTable('users', { id: serial('id') });\n"
                "export const users2 = users;\n"
                "export const users = pgTable('people', { id: serial('id') });\n"
            )

        assert len(schema.tables) == 1
        assert schema.tables[0].name == "people"

    def test_syntax_error(self):
        with pytest.raises(SourceSyntaxError):
            self.parser.parse("export const users = pgTable('users', {")

    def test_nothing_found(self):
        with pytest.raises(EmptySchemaError, match="No valid table/enum"):
            self.parser.parse("export const answer = 42;")

    def test_custom_constructor_keyword(self):
        keywords = dataclasses.replace(
            DrizzleKeywords(), table_constructors=frozenset({"myTable"})
        )
        parser = DrizzleSchemaParser(ExtractionConfig(drizzle_keywords=keywords))

        schema = parser.parse("export const t = myTable('t', { id: serial('id') });")

        assert schema.tables[0].id == "t"


class TestColumns:
    """Tests for column chain unwinding."""

    def setup_method(self):
        self.parser = DrizzleSchemaParser()

    def column(self, expression):
        schema = self.parser.parse(
            f"export const t = pgTable('t', {{ c: {expression} }});"
        )
        return schema.tables[0].columns[0]

    def test_object_argument(self):
        assert self.column("varchar('c', { length: 255 })").type == (
            "varchar({ length: 255 })"
        )

    def test_number_arguments(self):
        assert self.column("numeric('c', 10, 2)").type == "numeric(10, 2)"

    def test_mapped_name(self):
        assert self.column("doublePrecision('c')").type == "double precision"

    def test_unmapped_name_passes_through(self):
        assert self.column("roleEnum('role')").type == "roleEnum"

    def test_modifiers(self):
        column = self.column("text('c').notNull().unique().primaryKey()")

        assert column.is_not_null
        assert column.is_unique
        assert column.is_primary_key

    def test_literal_default(self):
        assert self.column("text('c').default('player')").default_value == "player"
        assert self.column("boolean('c').default(false)").default_value == "false"

    def test_non_literal_default(self):
        assert self.column("jsonb('c').default(sql`'{}'`)").default_value == (
            "default"
        )

    def test_default_sentinels(self):
        assert self.column("timestamp('c').defaultNow()").default_value == "now()"
        assert self.column("uuid('c').defaultRandom()").default_value == (
            "gen_random_uuid()"
        )
        assert self.column("text('c').$defaultFn(() => nanoid())").default_value == (
            "default"
        )

    def test_reference(self):
        column = self.column("integer('c').references(() => users.id)")

        assert column.references.table == "users"
        assert column.references.column == "id"

    def test_reference_with_options(self):
        column = self.column(
            "integer('c').references(() => users.id, { onDelete: 'cascade' })"
        )

        assert column.references.to_qualified_name() == "users.id"

    @pytest.mark.parametrize(
        "expression",
        [
            "integer('c').references(users.id)",
            "integer('c').references((x) => users.id)",
            "integer('c').references(() => getTable())",
        ],
    )
    def test_malformed_reference_is_ignored(self, expression):
        assert self.column(expression).references is None

    def test_non_chain_property_is_skipped(self):
        collector = WarningCollector()
        schema = self.parser.parse(
            "export const t = pgTable('t', { id: serial('id'), note: 'x' });",
            collector,
        )

        assert [c.name for c in schema.tables[0].columns] == ["id"]
        assert collector.get_by_level("INFO")

    def test_parse_column_directly(self):
        column = self.parser.parse_column(
            "email", StringLiteral("not a chain")
        )

        assert column is None


class TestSharedGroupsAndEnums:
    """Tests for the pre-scan pass."""

    def setup_method(self):
        self.parser = DrizzleSchemaParser()

    def test_spread_group_is_expanded(self):
        schema = self.parser.parse(
            "const timestamps = {\n"
            "  createdAt: timestamp('created_at').defaultNow(),\n"
            "  updatedAt: timestamp('updated_at'),\n"
            "};\n"
            "export const users = pgTable('users', {\n"
            "  id: serial('id').primaryKey(),\n"
            "  ...timestamps,\n"
            "});\n"
        )

        assert [c.name for c in schema.tables[0].columns] == [
            "id",
            "createdAt",
            "updatedAt",
        ]

    def test_nested_groups(self):
        schema = self.parser.parse(
            "const a = { x: text('x') };\n"
            "const b = { ...a, y: text('y') };\n"
            "export const t = pgTable('t', { ...b });\n"
        )

        assert [c.name for c in schema.tables[0].columns] == ["x", "y"]

    def test_self_referencing_group_terminates(self):
        schema = self.parser.parse(
            "const a = { ...a, x: text('x') };\n"
            "export const t = pgTable('t', { ...a });\n"
        )

        assert [c.name for c in schema.tables[0].columns] == ["x"]

    def test_unknown_spread_warns(self):
        collector = WarningCollector()
        schema = self.parser.parse(
            "export const t = pgTable('t', { id: serial('id'), ...imported });",
            collector,
        )

        assert [c.name for c in schema.tables[0].columns] == ["id"]
        assert collector.get_by_level("WARNING")

    def test_enums(self):
        schema = self.parser.parse(
            "export const roleEnum = pgEnum('role', ['admin', 'member']);"
        )

        assert schema.tables == ()
        assert schema.enums[0].name == "roleEnum"
        assert schema.enums[0].values == ("admin", "member")

    def test_malformed_enum_is_skipped(self):
        with pytest.raises(EmptySchemaError):
            self.parser.parse("export const roleEnum = pgEnum('role', values);")


class TestRelationships:
    """Tests for relations() helpers and inline references."""

    def setup_method(self):
        self.parser = DrizzleSchemaParser()

    def test_inline_reference(self):
        schema = self.parser.parse(USERS + POSTS)

        assert len(schema.relationships) == 1
        rel = schema.relationships[0]
        assert rel.id == "rel-posts-authorId-users"
        assert rel.source == "posts"
        assert rel.target == "users"
        assert rel.source_column == "authorId"
        assert rel.target_column == "id"

    def test_relations_helper(self):
        schema = self.parser.parse(
            USERS
            + "export const posts = pgTable('posts', {\n"
            "  id: serial('id'),\n"
            "  authorId: integer('author_id'),\n"
            "});\n"
            "export const postsRelations = relations(posts, ({ one }) => ({\n"
            "  author: one(users, { fields: [posts.authorId], references: [users.id] }),\n"
            "}));\n"
            "export const usersRelations = relations(users, ({ many }) => ({\n"
            "  posts: many(posts),\n"
            "}));\n"
        )

        assert [rel.id for rel in schema.relationships] == [
            "rel-posts-authorId-users"
        ]

    def test_mismatched_arrays_reuse_first_reference(self):
        schema = self.parser.parse(
            "export const a = pgTable('a', { id: serial('id'), k: text('k') });\n"
            "export const b = pgTable('b', { x: integer('x'), y: integer('y') });\n"
            "export const bRelations = relations(b, ({ one }) => ({\n"
            "  a: one(a, { fields: [b.x, b.y], references: [a.id] }),\n"
            "}));\n"
        )

        assert [(r.source_column, r.target_column) for r in schema.relationships] == [
            ("x", "id"),
            ("y", "id"),
        ]

    def test_duplicates_kept_by_default(self):
        source = (
            USERS
            + POSTS
            + "export const postsRelations = relations(posts, ({ one }) => ({\n"
            "  author: one(users, { fields: [posts.authorId], references: [users.id] }),\n"
            "}));\n"
        )

        assert len(self.parser.parse(source).relationships) == 2

        deduped = DrizzleSchemaParser(
            ExtractionConfig(deduplicate_relationships=True)
        ).parse(source)
        assert len(deduped.relationships) == 1

    def test_unresolved_reference_is_dropped_with_warning(self):
        collector = WarningCollector()
        schema = self.parser.parse(POSTS, collector)

        assert schema.relationships == ()
        assert schema.tables[0].get_column("authorId").references.table == "users"
        assert any("users" in w.message for w in collector.get_by_level("WARNING"))

    def test_unresolved_reference_fail_mode(self):
        parser = DrizzleSchemaParser(ExtractionConfig(on_unresolved=ErrorMode.FAIL))

        with pytest.raises(UnresolvedReferenceError) as excinfo:
            parser.parse(POSTS)

        assert excinfo.value.reference == "users"

    def test_unresolved_reference_ignore_mode(self):
        collector = WarningCollector()
        parser = DrizzleSchemaParser(ExtractionConfig(on_unresolved=ErrorMode.IGNORE))

        schema = parser.parse(POSTS, collector)

        assert schema.relationships == ()
        assert collector.get_by_level("WARNING") == []


class TestIndexes:
    """Tests for index declarations."""

    def setup_method(self):
        self.parser = DrizzleSchemaParser()

    def test_top_level_index(self):
        schema = self.parser.parse(
            USERS + "export const emailIdx = uniqueIndex('email_idx').on(users.email);"
        )

        index = schema.tables[0].indexes[0]
        assert index.name == "email_idx"
        assert index.columns == ("email",)
        assert index.is_unique

    def test_index_name_falls_back_to_variable(self):
        schema = self.parser.parse(
            USERS + "export const usersEmailIdx = index().on(users.email, users.id);"
        )

        index = schema.tables[0].indexes[0]
        assert index.name == "usersEmailIdx"
        assert index.columns == ("email", "id")
        assert not index.is_unique

    def test_trailing_calls_after_on(self):
        schema = self.parser.parse(
            USERS
            + "export const idx = index('idx').on(users.email).where(sql`true`);"
        )

        assert schema.tables[0].indexes[0].name == "idx"

    def test_index_on_unknown_table_is_dropped(self):
        collector = WarningCollector()
        schema = self.parser.parse(
            USERS + "export const idx = index('idx').on(posts.title);", collector
        )

        assert schema.tables[0].indexes == ()
        assert any("Index dropped" in w.message for w in collector.get_all())

    def test_callback_object_form(self):
        schema = self.parser.parse(
            "export const users = pgTable('users', {\n"
            "  email: text('email'),\n"
            "}, (table) => ({\n"
            "  emailIdx: uniqueIndex().on(table.email),\n"
            "}));\n"
        )

        index = schema.tables[0].indexes[0]
        assert index.name == "emailIdx"
        assert index.is_unique

    def test_callback_array_form(self):
        schema = self.parser.parse(
            "export const users = pgTable('users', {\n"
            "  email: text('email'),\n"
            "  name: text('name'),\n"
            "}, (table) => [index().on(table.email), index('by_name').on(table.name)]);\n"
        )

        assert [index.name for index in schema.tables[0].indexes] == [
            "users_index_0",
            "by_name",
        ]


class TestLiteralRenderer:
    """Tests for LiteralRenderer."""

    def test_render(self):
        renderer = LiteralRenderer()

        assert renderer.visit(StringLiteral("x")) == "x"
        assert renderer.visit(NumberLiteral("10")) == "10"
        assert renderer.visit(Identifier("x")) is None

    def test_render_object_skips_nested_objects(self):
        node = ObjectLiteral(
            entries=(
                Property("length", NumberLiteral("255")),
                Property("mode", StringLiteral("string")),
                Property("nested", ObjectLiteral()),
            )
        )

        assert LiteralRenderer().visit(node) == "{ length: 255, mode: string }"


class TestExampleSchema:
    """Tests against the bundled Drizzle example."""

    def test_example(self):
        schema = DrizzleSchemaParser().parse(EXAMPLE_DRIZZLE_SCHEMA)

        assert [table.id for table in schema.tables] == [
            "clubUsers",
            "clubs",
            "clubMembers",
        ]
        assert len(schema.enums) == 10
        assert {rel.id for rel in schema.relationships} >= {
            "rel-clubs-ownerId-clubUsers",
            "rel-clubMembers-clubId-clubs",
            "rel-clubMembers-userId-clubUsers",
        }
        members = schema.get_table("clubMembers")
        assert len(members.indexes) == 2
        assert members.has_column("createdAt")

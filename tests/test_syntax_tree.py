"""
Tests for the TypeScript syntax tree adapter.
"""

import pytest

from schema_extractor import SourceSyntaxError, StructuralParseError
from schema_extractor.parser.syntax_tree import (
    ArrayLiteral,
    ArrowFunction,
    Call,
    ExpressionVisitor,
    Identifier,
    KeywordLiteral,
    MemberAccess,
    NumberLiteral,
    ObjectLiteral,
    Opaque,
    Property,
    Spread,
    StringLiteral,
    TypeScriptSyntaxParser,
)


def parse_init(source):
    """Parse one declaration and return its initializer."""
    module = TypeScriptSyntaxParser().parse(source)
    return module.declarations[0].init


class TestDeclarations:
    """Tests for top-level declaration collection."""

    def setup_method(self):
        self.parser = TypeScriptSyntaxParser()

    def test_exported_and_local(self):
        module = self.parser.parse(
            "import { pgTable } from 'drizzle-orm/pg-core';\n"
            "const base = { a: 1 };\n"
            "export const users = pgTable('users', {});\n"
        )

        assert [d.name for d in module.declarations] == ["base", "users"]
        assert [d.name for d in module.exported()] == ["users"]
        assert module.declarations[1].line == 3

    def test_multiple_declarators(self):
        module = self.parser.parse("export const a = 1, b = 'x';")

        assert [d.name for d in module.declarations] == ["a", "b"]
        assert module.declarations[1].init == StringLiteral(value="x")

    def test_declaration_without_value(self):
        module = self.parser.parse("let pending;")

        assert module.declarations[0].init is None

    def test_ignores_other_statements(self):
        module = self.parser.parse(
            "function helper() { return 1; }\n"
            "export type User = { id: number };\n"
            "export const x = 1;\n"
        )

        assert [d.name for d in module.declarations] == ["x"]

    def test_syntax_error(self):
        with pytest.raises(SourceSyntaxError) as excinfo:
            self.parser.parse("export const users = pgTable('users', {")

        assert isinstance(excinfo.value, StructuralParseError)
        assert excinfo.value.line == 1

    def test_comments_are_skipped(self):
        module = self.parser.parse(
            "// users\nexport const users = pgTable('users', {\n"
            "  /* pk */ id: serial('id'),\n});\n"
        )

        columns = module.declarations[0].init.arguments[1]
        assert [entry.key for entry in columns.entries] == ["id"]


class TestConvert:
    """Tests for expression conversion."""

    def test_literals(self):
        array = parse_init("const x = ['a', \"b\", 3, true, null, `c`];")

        assert array == ArrayLiteral(
            elements=(
                StringLiteral("a"),
                StringLiteral("b"),
                NumberLiteral("3"),
                KeywordLiteral("true"),
                KeywordLiteral("null"),
                StringLiteral("c"),
            )
        )

    def test_template_with_substitution_is_opaque(self):
        node = parse_init("const x = `a${b}`;")

        assert isinstance(node, Opaque)
        assert node.kind == "template_string"

    def test_call_chain(self):
        node = parse_init("const x = serial('id').primaryKey();")

        assert node == Call(
            callee=MemberAccess(
                object=Call(callee=Identifier("serial"), arguments=(StringLiteral("id"),)),
                property="primaryKey",
            ),
            arguments=(),
        )

    def test_object_entries(self):
        node = parse_init("const x = { a: 1, 'b-c': 2, d, ...base };")

        assert isinstance(node, ObjectLiteral)
        assert node.entries == (
            Property("a", NumberLiteral("1")),
            Property("b-c", NumberLiteral("2")),
            Property("d", Identifier("d")),
            Spread(Identifier("base")),
        )
        assert node.get("b-c") == NumberLiteral("2")
        assert node.get("missing") is None

    def test_transparent_wrappers(self):
        assert parse_init("const x = (users);") == Identifier("users")
        assert parse_init("const x = users as const;") == Identifier("users")
        assert parse_init("const x = users!;") == Identifier("users")

    def test_arrow_function_expression_body(self):
        node = parse_init("const x = () => users.id;")

        assert node == ArrowFunction(
            parameters=(), body=MemberAccess(Identifier("users"), "id")
        )

    def test_arrow_function_destructured_parameters(self):
        node = parse_init("const x = ({ one, many: m }) => ({});")

        assert node.parameters == ("one", "m")
        assert node.body == ObjectLiteral()

    def test_arrow_function_single_parameter(self):
        node = parse_init("const x = t => t;")

        assert node.parameters == ("t",)

    def test_arrow_function_block_body(self):
        node = parse_init("const x = (t) => { const y = 1; return [t.a]; };")

        assert node.body == ArrayLiteral(
            elements=(MemberAccess(Identifier("t"), "a"),)
        )

    def test_unsupported_expression_is_opaque(self):
        node = parse_init("const x = a + b;")

        assert isinstance(node, Opaque)
        assert node.text == "a + b"


class TestExpressionVisitor:
    """Tests for ExpressionVisitor dispatch."""

    def test_dispatch_and_generic(self):
        class Names(ExpressionVisitor):
            def visit_Identifier(self, node):
                return node.name

        visitor = Names()

        assert visitor.visit(Identifier("users")) == "users"
        assert visitor.visit(NumberLiteral("1")) is None
        assert visitor.visit(None) is None

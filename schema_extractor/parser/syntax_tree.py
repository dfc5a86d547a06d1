"""
TypeScript syntax tree adapter.

This module defines the TypeScriptSyntaxParser class, which runs the
tree-sitter TypeScript grammar over schema source text and converts the
concrete syntax tree into a small closed set of frozen expression nodes.
The Drizzle structural parser only ever sees these nodes, never
tree-sitter objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Parser

from schema_extractor.exceptions import SourceSyntaxError

TYPESCRIPT_LANGUAGE = Language(tstypescript.language_typescript())

# Wrapper expressions that do not change the value they wrap.
_TRANSPARENT_WRAPPERS = frozenset(
    {
        "parenthesized_expression",
        "as_expression",
        "satisfies_expression",
        "non_null_expression",
    }
)
_KEYWORD_LITERALS = frozenset({"true", "false", "null", "undefined"})
_DECLARATION_TYPES = frozenset({"lexical_declaration", "variable_declaration"})


@dataclass(frozen=True)
class Identifier:
    """A bare name, e.g. ``users``."""

    name: str


@dataclass(frozen=True)
class StringLiteral:
    """A string literal with its quotes removed."""

    value: str


@dataclass(frozen=True)
class NumberLiteral:
    """A numeric literal kept as written."""

    text: str


@dataclass(frozen=True)
class KeywordLiteral:
    """``true``, ``false``, ``null`` or ``undefined``."""

    text: str


@dataclass(frozen=True)
class MemberAccess:
    """``object.property``."""

    object: "Node"
    property: str


@dataclass(frozen=True)
class Call:
    """``callee(arguments...)``."""

    callee: "Node"
    arguments: tuple["Node", ...] = ()


@dataclass(frozen=True)
class Property:
    """A ``key: value`` entry of an object literal."""

    key: str
    value: "Node"


@dataclass(frozen=True)
class Spread:
    """A ``...argument`` entry of an object or array literal."""

    argument: "Node"


@dataclass(frozen=True)
class ObjectLiteral:
    """``{ ... }`` with its properties and spreads in source order."""

    entries: tuple[Union[Property, Spread], ...] = ()

    def get(self, key: str) -> Optional["Node"]:
        """Return the value of the property named ``key``, if any."""
        for entry in self.entries:
            if isinstance(entry, Property) and entry.key == key:
                return entry.value
        return None


@dataclass(frozen=True)
class ArrayLiteral:
    """``[ ... ]``."""

    elements: tuple["Node", ...] = ()


@dataclass(frozen=True)
class ArrowFunction:
    """``(params) => body``. Destructured parameters contribute their names."""

    parameters: tuple[str, ...]
    body: "Node"


@dataclass(frozen=True)
class Opaque:
    """Any expression the schema parsers have no use for."""

    kind: str
    text: str


Node = Union[
    Identifier,
    StringLiteral,
    NumberLiteral,
    KeywordLiteral,
    MemberAccess,
    Call,
    ObjectLiteral,
    Property,
    Spread,
    ArrayLiteral,
    ArrowFunction,
    Opaque,
]


@dataclass(frozen=True)
class VariableDeclaration:
    """A top-level ``const``/``let``/``var`` binding.

    Attributes:
        name: Bound identifier.
        init: Converted initializer, or None when the binding has none.
        exported: Whether the declaration is part of an ``export`` statement.
        line: 1-based line of the declarator.
    """

    name: str
    init: Optional[Node]
    exported: bool
    line: int


@dataclass(frozen=True)
class SourceModule:
    """Top-level variable declarations of a source file, in source order."""

    declarations: tuple[VariableDeclaration, ...] = ()

    def exported(self) -> list[VariableDeclaration]:
        """Return the exported declarations."""
        return [decl for decl in self.declarations if decl.exported]


class ExpressionVisitor:
    """Base visitor over the closed expression node set.

    Subclasses define ``visit_<NodeClass>`` methods; nodes without a method
    go to generic_visit, which returns None.
    """

    def visit(self, node: Optional[Node]) -> Any:
        """Visit a node and return the handler's result."""
        if node is None:
            return None
        method_name = f"visit_{type(node).__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: Node) -> Any:
        """Default handler for nodes without a dedicated method."""
        return None


class TypeScriptSyntaxParser:
    """Parses TypeScript source into a SourceModule.

    A new tree-sitter Parser is created per call, so one instance can be
    shared between threads.

    Example:
        >>> module = TypeScriptSyntaxParser().parse("export const a = f('x')")
        >>> module.declarations[0].init
        Call(callee=Identifier(name='f'), arguments=(StringLiteral(value='x'),))
    """

    def parse(self, text: str) -> SourceModule:
        """Parse source text.

        Args:
            text: TypeScript source.

        Returns:
            SourceModule with the top-level variable declarations.

        Raises:
            SourceSyntaxError: If the syntax tree contains errors.
        """
        parser = Parser(TYPESCRIPT_LANGUAGE)
        tree = parser.parse(text.encode("utf-8"))
        root = tree.root_node

        if root.has_error:
            bad = _first_error(root) or root
            row, column = bad.start_point[0], bad.start_point[1]
            kind = "Missing token" if bad.is_missing else "Syntax error"
            raise SourceSyntaxError(
                f"{kind} in TypeScript source", line=row + 1, column=column + 1
            )

        declarations: list[VariableDeclaration] = []
        for statement in _named(root):
            exported = False
            if statement.type == "export_statement":
                exported = True
                statement = statement.child_by_field_name("declaration")
                if statement is None:
                    continue
            if statement.type not in _DECLARATION_TYPES:
                continue

            for declarator in _named(statement):
                if declarator.type != "variable_declarator":
                    continue
                name_node = declarator.child_by_field_name("name")
                if name_node is None or name_node.type != "identifier":
                    continue
                value_node = declarator.child_by_field_name("value")
                declarations.append(
                    VariableDeclaration(
                        name=_text(name_node),
                        init=convert(value_node) if value_node is not None else None,
                        exported=exported,
                        line=declarator.start_point[0] + 1,
                    )
                )

        return SourceModule(declarations=tuple(declarations))


def convert(ts_node: Any) -> Node:
    """Convert a tree-sitter expression node into the closed node set.

    Args:
        ts_node: tree-sitter Node of an expression.

    Returns:
        Converted expression; unsupported shapes become Opaque.
    """
    kind = ts_node.type

    if kind in _TRANSPARENT_WRAPPERS:
        inner = _named(ts_node)
        if inner:
            return convert(inner[0])
        return Opaque(kind=kind, text=_text(ts_node))

    if kind == "identifier":
        return Identifier(name=_text(ts_node))

    if kind == "string":
        return StringLiteral(value=_text(ts_node)[1:-1])

    if kind == "template_string":
        if any(child.type == "template_substitution" for child in ts_node.named_children):
            return Opaque(kind=kind, text=_text(ts_node))
        return StringLiteral(value=_text(ts_node)[1:-1])

    if kind == "number":
        return NumberLiteral(text=_text(ts_node))

    if kind in _KEYWORD_LITERALS:
        return KeywordLiteral(text=kind)

    if kind == "member_expression":
        obj = ts_node.child_by_field_name("object")
        prop = ts_node.child_by_field_name("property")
        if obj is None or prop is None:
            return Opaque(kind=kind, text=_text(ts_node))
        return MemberAccess(object=convert(obj), property=_text(prop))

    if kind == "call_expression":
        function = ts_node.child_by_field_name("function")
        arguments = ts_node.child_by_field_name("arguments")
        if function is None or arguments is None or arguments.type != "arguments":
            return Opaque(kind=kind, text=_text(ts_node))
        return Call(
            callee=convert(function),
            arguments=tuple(_convert_element(arg) for arg in _named(arguments)),
        )

    if kind == "object":
        return ObjectLiteral(entries=tuple(_convert_entries(ts_node)))

    if kind == "array":
        return ArrayLiteral(
            elements=tuple(_convert_element(element) for element in _named(ts_node))
        )

    if kind == "arrow_function":
        return _convert_arrow(ts_node)

    return Opaque(kind=kind, text=_text(ts_node))


def _convert_element(ts_node: Any) -> Node:
    if ts_node.type == "spread_element":
        inner = _named(ts_node)
        argument = convert(inner[0]) if inner else Opaque("spread_element", "")
        return Spread(argument=argument)
    return convert(ts_node)


def _convert_entries(ts_object: Any) -> list[Union[Property, Spread]]:
    entries: list[Union[Property, Spread]] = []
    for child in _named(ts_object):
        if child.type == "pair":
            key_node = child.child_by_field_name("key")
            value_node = child.child_by_field_name("value")
            if key_node is None or value_node is None:
                continue
            key = _text(key_node)
            if key_node.type == "string":
                key = key[1:-1]
            entries.append(Property(key=key, value=convert(value_node)))
        elif child.type == "shorthand_property_identifier":
            name = _text(child)
            entries.append(Property(key=name, value=Identifier(name=name)))
        elif child.type == "spread_element":
            spread = _convert_element(child)
            if isinstance(spread, Spread):
                entries.append(spread)
    return entries


def _convert_arrow(ts_node: Any) -> Node:
    parameters: list[str] = []
    single = ts_node.child_by_field_name("parameter")
    if single is not None:
        parameters.append(_text(single))
    formal = ts_node.child_by_field_name("parameters")
    if formal is not None:
        for parameter in _named(formal):
            pattern = parameter.child_by_field_name("pattern") or parameter
            parameters.extend(_pattern_names(pattern))

    body = ts_node.child_by_field_name("body")
    if body is None:
        return Opaque(kind="arrow_function", text=_text(ts_node))

    if body.type == "statement_block":
        returned = _returned_expression(body)
        body_node = (
            convert(returned)
            if returned is not None
            else Opaque(kind="statement_block", text=_text(body))
        )
    else:
        body_node = convert(body)

    return ArrowFunction(parameters=tuple(parameters), body=body_node)


def _pattern_names(pattern: Any) -> list[str]:
    if pattern.type == "identifier":
        return [_text(pattern)]
    if pattern.type == "object_pattern":
        names = []
        for child in _named(pattern):
            if child.type == "shorthand_property_identifier_pattern":
                names.append(_text(child))
            elif child.type == "pair_pattern":
                value = child.child_by_field_name("value")
                if value is not None:
                    names.extend(_pattern_names(value))
        return names
    return []


def _returned_expression(block: Any) -> Optional[Any]:
    for statement in _named(block):
        if statement.type == "return_statement":
            inner = _named(statement)
            return inner[0] if inner else None
    return None


def _first_error(node: Any) -> Optional[Any]:
    for child in node.children:
        if child.is_error or child.is_missing:
            return child
        if child.has_error:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _named(ts_node: Any) -> list[Any]:
    return [child for child in ts_node.named_children if child.type != "comment"]


def _text(ts_node: Any) -> str:
    raw = ts_node.text
    return raw.decode("utf-8") if raw is not None else ""

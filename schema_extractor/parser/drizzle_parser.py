"""
Drizzle structural parser.

This module defines the DrizzleSchemaParser class, which reads Drizzle ORM
TypeScript schema files through the tree-sitter syntax tree and produces a
normalized Schema. The parser runs a fixed sequence of passes over the
top-level declarations:

1. Pre-scan: enums, shared column groups and table-creator aliases.
2. Tables: table constructor calls and their column objects.
3. Relations: ``relations(table, ({ one }) => ({ ... }))`` helpers.
4. Indexes: top-level ``index(...).on(...)`` declarations.
5. Inline references: ``.references(() => table.column)`` on columns.

All state lives in local variables of one parse() call.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from schema_extractor.exceptions import EmptySchemaError
from schema_extractor.models.column import Column, ColumnReference
from schema_extractor.models.config import ExtractionConfig
from schema_extractor.models.enum_definition import EnumDefinition
from schema_extractor.models.relationship import Relationship
from schema_extractor.models.schema import Schema
from schema_extractor.models.table import Index, Table
from schema_extractor.parser.relationships import (
    deduplicate_relationships,
    resolve_relationships,
)
from schema_extractor.parser.syntax_tree import (
    ArrayLiteral,
    ArrowFunction,
    Call,
    ExpressionVisitor,
    Identifier,
    KeywordLiteral,
    MemberAccess,
    Node,
    NumberLiteral,
    ObjectLiteral,
    Property,
    SourceModule,
    Spread,
    StringLiteral,
    TypeScriptSyntaxParser,
    VariableDeclaration,
)
from schema_extractor.registry.table_registry import TableRegistry
from schema_extractor.typemap.keywords import LITERAL_DEFAULT_SENTINEL
from schema_extractor.utils.identifiers import PositionGenerator
from schema_extractor.utils.warnings import WarningCollector


class LiteralRenderer(ExpressionVisitor):
    """Renders literal expressions the way they appear in column types.

    Strings lose their quotes; numbers and keywords are kept as written.
    Object literals render as ``{ key: value, ... }`` using only their
    literal-valued properties. Anything else renders as None.
    """

    def visit_StringLiteral(self, node: StringLiteral) -> str:
        return node.value

    def visit_NumberLiteral(self, node: NumberLiteral) -> str:
        return node.text

    def visit_KeywordLiteral(self, node: KeywordLiteral) -> str:
        return node.text

    def visit_ObjectLiteral(self, node: ObjectLiteral) -> Optional[str]:
        parts = []
        for entry in node.entries:
            if not isinstance(entry, Property):
                continue
            value = self.visit(entry.value)
            if value is not None and not isinstance(entry.value, ObjectLiteral):
                parts.append(f"{entry.key}: {value}")
        if not parts:
            return None
        return "{ " + ", ".join(parts) + " }"


@dataclass
class _PreScan:
    """Declarations collected before the table pass."""

    enums: list[EnumDefinition] = field(default_factory=list)
    groups: dict[str, ObjectLiteral] = field(default_factory=dict)
    creator_aliases: set[str] = field(default_factory=set)


@dataclass(frozen=True)
class _ColumnChain:
    """A column definition unwound into its base call and modifiers."""

    base: str
    arguments: tuple[Node, ...]
    modifiers: tuple[tuple[str, tuple[Node, ...]], ...]

    def has(self, modifier: str) -> bool:
        return any(name == modifier for name, _ in self.modifiers)


class DrizzleSchemaParser:
    """Structural parser for Drizzle ORM schemas.

    Attributes:
        config: ExtractionConfig with the type dictionary, keyword table and
            relationship policy.
        keywords: DrizzleKeywords in use.
        types: TypeMapProvider resolving builder names to SQL types.

    Example:
        >>> parser = DrizzleSchemaParser()
        >>> schema = parser.parse(
        ...     "export const users = pgTable('users', { id: serial('id').primaryKey() })"
        ... )
        >>> schema.tables[0].columns[0].type
        'serial'
    """

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        random_source: Optional[Callable[[], float]] = None,
    ) -> None:
        """Initialize a DrizzleSchemaParser.

        Args:
            config: Optional ExtractionConfig. Defaults are used when None.
            random_source: Optional randomness source for placeholder
                positions.
        """
        self.config = config or ExtractionConfig()
        self.keywords = self.config.drizzle_keywords
        self.types = self.config.drizzle_types
        self.random_source = random_source
        self.syntax_parser = TypeScriptSyntaxParser()
        self.renderer = LiteralRenderer()

    def parse(self, text: str, collector: Optional[WarningCollector] = None) -> Schema:
        """Parse Drizzle schema source.

        Args:
            text: TypeScript source declaring Drizzle tables.
            collector: Optional WarningCollector for diagnostics.

        Returns:
            Extracted Schema.

        Raises:
            SourceSyntaxError: If the source does not parse as TypeScript.
            EmptySchemaError: If no table and no enum was found.
            UnresolvedReferenceError: If a relationship endpoint is unknown
                and the config's on_unresolved mode is FAIL.
        """
        if collector is None:
            collector = WarningCollector()

        module = self.syntax_parser.parse(text)
        scan = self._prescan(module)

        registry = TableRegistry(collector)
        positions = PositionGenerator(
            spacing_x=self.config.table_spacing_x,
            spacing_y=self.config.table_spacing_y,
            per_row=self.config.tables_per_row,
            jitter=self.config.position_jitter,
            random_source=self.random_source,
        )

        for declaration in module.exported():
            self._collect_table(declaration, scan, registry, positions, collector)

        relationships: list[Relationship] = []
        for declaration in module.declarations:
            relationships.extend(self._collect_relations(declaration))

        for declaration in module.declarations:
            self._collect_index(declaration, registry, collector)

        tables = registry.merged_tables()
        if not tables and not scan.enums:
            raise EmptySchemaError("No valid table/enum declarations found")

        for table in tables:
            for column in table.columns:
                if column.references is not None:
                    relationships.append(
                        Relationship.create(
                            table.id,
                            column.name,
                            column.references.table,
                            column.references.column,
                        )
                    )

        relationships = resolve_relationships(
            relationships, registry.table_ids(), self.config.on_unresolved, collector
        )
        if self.config.deduplicate_relationships:
            relationships = deduplicate_relationships(relationships)

        return Schema(
            tables=tuple(tables),
            relationships=tuple(relationships),
            enums=tuple(scan.enums),
        )

    # ------------------------------------------------------------------
    # Pass 1: enums, shared column groups, table-creator aliases
    # ------------------------------------------------------------------

    def _prescan(self, module: SourceModule) -> _PreScan:
        scan = _PreScan()
        for declaration in module.declarations:
            init = declaration.init
            if isinstance(init, ObjectLiteral):
                scan.groups[declaration.name] = init
            elif isinstance(init, Call) and isinstance(init.callee, Identifier):
                name = init.callee.name
                if name in self.keywords.enum_constructors:
                    enum = self._parse_enum(declaration.name, init)
                    if enum is not None:
                        scan.enums.append(enum)
                elif name in self.keywords.table_creators:
                    scan.creator_aliases.add(declaration.name)
        return scan

    def _parse_enum(self, name: str, call: Call) -> Optional[EnumDefinition]:
        if len(call.arguments) < 2:
            return None
        db_name, values = call.arguments[0], call.arguments[1]
        if not isinstance(db_name, StringLiteral) or not isinstance(values, ArrayLiteral):
            return None
        return EnumDefinition(
            name=name,
            values=tuple(
                element.value
                for element in values.elements
                if isinstance(element, StringLiteral) and element.value
            ),
        )

    # ------------------------------------------------------------------
    # Pass 2: tables and columns
    # ------------------------------------------------------------------

    def _is_table_call(self, node: Optional[Node], scan: _PreScan) -> bool:
        """Check whether a call constructs a table.

        Recognized shapes are ``pgTable(...)``, ``pgTableCreator(fn)(...)``,
        ``createTable(...)`` for an alias of a table creator, and
        ``schema.table(...)``.
        """
        if not isinstance(node, Call):
            return False
        callee = node.callee
        if isinstance(callee, Identifier):
            return (
                callee.name in self.keywords.table_constructors
                or callee.name in scan.creator_aliases
            )
        if isinstance(callee, Call) and isinstance(callee.callee, Identifier):
            return callee.callee.name in self.keywords.table_creators
        if isinstance(callee, MemberAccess):
            return callee.property == self.keywords.schema_table_method
        return False

    def _unwind_table_call(
        self, node: Optional[Node], scan: _PreScan
    ) -> Optional[Call]:
        """Return the table call under trailing calls like ``.enableRLS()``."""
        current = node
        while isinstance(current, Call):
            if self._is_table_call(current, scan):
                return current
            if not isinstance(current.callee, MemberAccess):
                return None
            current = current.callee.object
        return None

    def _collect_table(
        self,
        declaration: VariableDeclaration,
        scan: _PreScan,
        registry: TableRegistry,
        positions: PositionGenerator,
        collector: WarningCollector,
    ) -> None:
        call = self._unwind_table_call(declaration.init, scan)
        if not isinstance(call, Call):
            return

        if len(call.arguments) < 2 or not isinstance(call.arguments[0], StringLiteral):
            collector.warning(
                "Table declaration skipped: expected a table name and a column object",
                context=declaration.name,
            )
            return

        columns_node = call.arguments[1]
        builder_params: frozenset[str] = frozenset()
        if isinstance(columns_node, ArrowFunction):
            builder_params = frozenset(columns_node.parameters)
            columns_node = columns_node.body
        if not isinstance(columns_node, ObjectLiteral):
            collector.warning(
                "Table declaration skipped: column definitions are not an object literal",
                context=declaration.name,
            )
            return

        columns = self._parse_columns(
            columns_node, scan, declaration.name, builder_params, collector, set()
        )

        indexes: tuple[Index, ...] = ()
        if len(call.arguments) >= 3:
            indexes = tuple(self._parse_index_callback(declaration.name, call.arguments[2]))

        registry.register_table(
            Table(
                id=declaration.name,
                name=call.arguments[0].value,
                columns=tuple(columns),
                indexes=indexes,
                position=positions.position_for(len(registry)),
            )
        )

    def _parse_columns(
        self,
        columns_node: ObjectLiteral,
        scan: _PreScan,
        table_id: str,
        builder_params: frozenset[str],
        collector: WarningCollector,
        expanding: set[str],
    ) -> list[Column]:
        columns: list[Column] = []
        for entry in columns_node.entries:
            if isinstance(entry, Spread):
                group_name = (
                    entry.argument.name if isinstance(entry.argument, Identifier) else None
                )
                if group_name is None or group_name not in scan.groups:
                    collector.warning(
                        "Spread element is not a shared column group; skipped",
                        context=table_id,
                    )
                    continue
                if group_name in expanding:
                    continue
                columns.extend(
                    self._parse_columns(
                        scan.groups[group_name],
                        scan,
                        table_id,
                        builder_params,
                        collector,
                        expanding | {group_name},
                    )
                )
                continue

            column = self.parse_column(entry.key, entry.value, builder_params)
            if column is None:
                collector.info(
                    f"Property '{entry.key}' is not a column definition; skipped",
                    context=table_id,
                )
                continue
            columns.append(column)
        return columns

    def parse_column(
        self,
        name: str,
        value: Node,
        builder_params: frozenset[str] = frozenset(),
    ) -> Optional[Column]:
        """Build a Column from one property of a table's column object.

        Args:
            name: Property key, used as the column name.
            value: Property value, e.g. ``varchar('email', { length: 255 }).notNull()``.
            builder_params: Parameter names of a ``(t) => ({ ... })`` column
                callback, so that ``t.integer()`` counts as a base call.

        Returns:
            Column, or None if the value is not a column builder chain.
        """
        chain = self._unwind_chain(value, builder_params)
        if chain is None:
            return None

        arguments: list[str] = []
        for position, argument in enumerate(chain.arguments):
            if position == 0 and isinstance(argument, StringLiteral):
                # Storage column name, not part of the type.
                continue
            if not isinstance(argument, (StringLiteral, NumberLiteral, ObjectLiteral)):
                continue
            rendered = self.renderer.visit(argument)
            if rendered is not None:
                arguments.append(rendered)

        column_type = self.types.resolve(chain.base) or chain.base
        if arguments:
            column_type = f"{column_type}({', '.join(arguments)})"

        keywords = self.keywords
        return Column(
            name=name,
            type=column_type,
            is_primary_key=chain.has(keywords.primary_key_modifier),
            is_unique=chain.has(keywords.unique_modifier),
            is_not_null=chain.has(keywords.not_null_modifier),
            references=self._parse_reference(chain),
            default_value=self._parse_default(chain),
        )

    def _unwind_chain(
        self, value: Node, builder_params: frozenset[str]
    ) -> Optional[_ColumnChain]:
        modifiers: list[tuple[str, tuple[Node, ...]]] = []
        current = value

        while isinstance(current, Call) and isinstance(current.callee, MemberAccess):
            member = current.callee
            receiver = member.object
            if isinstance(receiver, Identifier) and receiver.name in builder_params:
                break
            modifiers.insert(0, (member.property, current.arguments))
            current = member.object

        if not isinstance(current, Call):
            return None
        callee = current.callee
        if isinstance(callee, Identifier):
            base = callee.name
        elif (
            isinstance(callee, MemberAccess)
            and isinstance(callee.object, Identifier)
            and callee.object.name in builder_params
        ):
            base = callee.property
        else:
            return None

        return _ColumnChain(
            base=base, arguments=current.arguments, modifiers=tuple(modifiers)
        )

    def _parse_reference(self, chain: _ColumnChain) -> Optional[ColumnReference]:
        for name, arguments in chain.modifiers:
            if name != self.keywords.references_modifier:
                continue
            if not arguments or not isinstance(arguments[0], ArrowFunction):
                return None
            function = arguments[0]
            body = function.body
            if (
                function.parameters
                or not isinstance(body, MemberAccess)
                or not isinstance(body.object, Identifier)
            ):
                return None
            return ColumnReference(table=body.object.name, column=body.property)
        return None

    def _parse_default(self, chain: _ColumnChain) -> Optional[str]:
        for name, arguments in chain.modifiers:
            if name == self.keywords.default_modifier:
                rendered = None
                if arguments and not isinstance(arguments[0], ObjectLiteral):
                    rendered = self.renderer.visit(arguments[0])
                return rendered if rendered is not None else LITERAL_DEFAULT_SENTINEL
            sentinel = self.keywords.sentinel_for(name)
            if sentinel is not None:
                return sentinel
        return None

    # ------------------------------------------------------------------
    # Pass 3: relations() helpers
    # ------------------------------------------------------------------

    def _collect_relations(self, declaration: VariableDeclaration) -> list[Relationship]:
        call = declaration.init
        if not (
            isinstance(call, Call)
            and isinstance(call.callee, Identifier)
            and call.callee.name == self.keywords.relations_helper
            and len(call.arguments) >= 2
        ):
            return []

        source, builder = call.arguments[0], call.arguments[1]
        if not isinstance(source, Identifier) or not isinstance(builder, ArrowFunction):
            return []
        if not isinstance(builder.body, ObjectLiteral):
            return []

        relationships: list[Relationship] = []
        for entry in builder.body.entries:
            if isinstance(entry, Property):
                relationships.extend(self._parse_one_relation(source.name, entry.value))
        return relationships

    def _parse_one_relation(self, source: str, value: Node) -> list[Relationship]:
        if not isinstance(value, Call):
            return []
        if _helper_name(value.callee) != self.keywords.one_helper:
            return []
        if len(value.arguments) < 2:
            return []

        target, options = value.arguments[0], value.arguments[1]
        if not isinstance(target, Identifier) or not isinstance(options, ObjectLiteral):
            return []

        fields = options.get("fields")
        references = options.get("references")
        if not isinstance(fields, ArrayLiteral) or not isinstance(references, ArrayLiteral):
            return []
        if not fields.elements or not references.elements:
            return []

        relationships = []
        for position, field_node in enumerate(fields.elements):
            if position < len(references.elements):
                reference_node = references.elements[position]
            else:
                reference_node = references.elements[0]
            if not isinstance(field_node, MemberAccess) or not isinstance(
                reference_node, MemberAccess
            ):
                continue
            relationships.append(
                Relationship.create(
                    source, field_node.property, target.name, reference_node.property
                )
            )
        return relationships

    # ------------------------------------------------------------------
    # Pass 4: indexes
    # ------------------------------------------------------------------

    def _collect_index(
        self,
        declaration: VariableDeclaration,
        registry: TableRegistry,
        collector: WarningCollector,
    ) -> None:
        parsed = self._parse_index_expression(declaration.init, declaration.name)
        if parsed is None:
            return

        index, owners = parsed
        if not owners:
            collector.warning(
                "Index dropped: its columns do not name a table", context=index.name
            )
            return
        registry.attach_index(owners[0], index)

    def _parse_index_callback(self, table_id: str, callback: Node) -> list[Index]:
        """Parse indexes returned from a table's third-argument callback."""
        if not isinstance(callback, ArrowFunction):
            return []

        body = callback.body
        candidates: list[tuple[str, Node]] = []
        if isinstance(body, ObjectLiteral):
            candidates = [
                (entry.key, entry.value)
                for entry in body.entries
                if isinstance(entry, Property)
            ]
        elif isinstance(body, ArrayLiteral):
            candidates = [
                (f"{table_id}_index_{position}", element)
                for position, element in enumerate(body.elements)
            ]

        indexes = []
        for fallback_name, node in candidates:
            parsed = self._parse_index_expression(node, fallback_name)
            if parsed is not None:
                indexes.append(parsed[0])
        return indexes

    def _parse_index_expression(
        self, node: Optional[Node], fallback_name: str
    ) -> Optional[tuple[Index, list[str]]]:
        """Parse ``index('name').on(t.a, t.b)`` with optional trailing calls.

        Returns:
            (Index, owning table identifiers taken from the column
            expressions), or None if the node is not an index declaration.
        """
        on_call = node
        while isinstance(on_call, Call) and isinstance(on_call.callee, MemberAccess):
            if on_call.callee.property == self.keywords.index_on_method:
                break
            on_call = on_call.callee.object

        if not (
            isinstance(on_call, Call)
            and isinstance(on_call.callee, MemberAccess)
            and on_call.callee.property == self.keywords.index_on_method
        ):
            return None

        helper = on_call.callee.object
        if not (
            isinstance(helper, Call)
            and isinstance(helper.callee, Identifier)
            and helper.callee.name in self.keywords.index_helpers
        ):
            return None

        name = fallback_name
        if helper.arguments and isinstance(helper.arguments[0], StringLiteral):
            name = helper.arguments[0].value or fallback_name

        columns: list[str] = []
        owners: list[str] = []
        for argument in on_call.arguments:
            if not isinstance(argument, MemberAccess):
                continue
            columns.append(argument.property)
            if isinstance(argument.object, Identifier):
                owners.append(argument.object.name)

        index = Index(
            name=name,
            columns=tuple(columns),
            is_unique=helper.callee.name == self.keywords.unique_index_helper,
        )
        return index, owners


def _helper_name(callee: Node) -> Optional[str]:
    """Return the name a helper is called by: ``one(...)`` or ``h.one(...)``."""
    if isinstance(callee, Identifier):
        return callee.name
    if isinstance(callee, MemberAccess):
        return callee.property
    return None


"""
Prisma structural parser.

This module defines the PrismaSchemaParser class. Prisma schemas are not a
general purpose language, so instead of a syntax tree the parser works on
balanced ``model``/``enum`` blocks and the field and attribute lines inside
them.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from schema_extractor.exceptions import (
    DialectMismatchError,
    EmptySchemaError,
    StructuralParseError,
)
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
from schema_extractor.registry.table_registry import report_redeclaration
from schema_extractor.typemap.keywords import (
    AUTOINCREMENT_SENTINEL,
    NOW_SENTINEL,
    UUID_SENTINEL,
)
from schema_extractor.utils.identifiers import PositionGenerator
from schema_extractor.utils.text import (
    braces_balanced,
    find_matching_brace,
    iter_blocks,
    split_top_level,
    strip_comments,
    unquote,
)
from schema_extractor.utils.warnings import WarningCollector

_FIELD_RE = re.compile(r"^(\w+)\s+([\w\[\]?]+)(.*)$")
_ATTRIBUTE_RE = re.compile(r"@@?([\w.]+)")
_NAMED_ARG_RE = re.compile(r"^(\w+)\s*:\s*(.+)$", re.DOTALL)
_LEADING_NAME_RE = re.compile(r"^\s*(\w+)")
ENUM_ATTRIBUTE_RE = re.compile(r"@@?[\w.]+(?:\([^)]*\))?")


@dataclass(frozen=True)
class PrismaAttribute:
    """A ``@name`` or ``@name(args)`` attribute.

    Attributes:
        name: Attribute name without the ``@``/``@@`` prefix, e.g.
            "default" or "db.VarChar".
        args: Top-level comma separated arguments.
        raw_args: Argument text between the parentheses, or None when the
            attribute has no parentheses.
    """

    name: str
    args: tuple[str, ...] = ()
    raw_args: Optional[str] = None

    def named_arg(self, key: str) -> Optional[str]:
        """Return the value of a ``key: value`` argument."""
        for arg in self.args:
            match = _NAMED_ARG_RE.match(arg)
            if match and match.group(1) == key:
                return match.group(2).strip()
        return None


@dataclass(frozen=True)
class PrismaField:
    """A field line of a model block."""

    name: str
    type: str
    is_array: bool
    is_optional: bool
    attributes: tuple[PrismaAttribute, ...]
    line: int

    def get_attribute(self, name: str) -> Optional[PrismaAttribute]:
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None

    def has_attribute(self, name: str) -> bool:
        return self.get_attribute(name) is not None


@dataclass(frozen=True)
class PrismaModel:
    """A model block split into fields and ``@@`` attributes."""

    name: str
    fields: tuple[PrismaField, ...]
    attributes: tuple[PrismaAttribute, ...]
    line: int

    def get_field(self, name: str) -> Optional[PrismaField]:
        for field in self.fields:
            if field.name == name:
                return field
        return None


def parse_attributes(text: str) -> list[PrismaAttribute]:
    """Scan attribute text for ``@name`` and ``@name(args)`` tokens.

    Args:
        text: Text following the field type, or a ``@@`` line.

    Returns:
        Attributes in source order.

    Example:
        >>> [a.name for a in parse_attributes('@id @db.VarChar(255) @default("x")')]
        ['id', 'db.VarChar', 'default']
    """
    attributes: list[PrismaAttribute] = []
    pos = 0

    while True:
        match = _ATTRIBUTE_RE.search(text, pos)
        if match is None:
            break

        name = match.group(1)
        pos = match.end()
        if pos < len(text) and text[pos] == "(":
            close = find_matching_brace(text, pos)
            if close == -1:
                raise StructuralParseError(f"Unterminated arguments of attribute '@{name}'")
            raw_args = text[pos + 1 : close]
            attributes.append(
                PrismaAttribute(
                    name=name, args=tuple(split_top_level(raw_args)), raw_args=raw_args
                )
            )
            pos = close + 1
        else:
            attributes.append(PrismaAttribute(name=name))

    return attributes


def parse_list(value: str) -> list[str]:
    """Return the names of a bracketed list such as ``[a, b(sort: Desc)]``.

    Per-item arguments are dropped; only the leading identifier is kept.
    """
    start = value.find("[")
    if start == -1:
        return []
    end = find_matching_brace(value, start)
    inner = value[start + 1 :] if end == -1 else value[start + 1 : end]

    names = []
    for item in split_top_level(inner):
        match = _LEADING_NAME_RE.match(item)
        if match:
            names.append(match.group(1))
    return names


class PrismaSchemaParser:
    """Structural parser for Prisma schemas.

    Attributes:
        config: ExtractionConfig with the type dictionary, keyword table and
            relationship policy.
        keywords: PrismaKeywords in use.
        types: TypeMapProvider resolving Prisma scalars to SQL types.

    Example:
        >>> schema = PrismaSchemaParser().parse("model User { id Int @id }")
        >>> schema.tables[0].columns[0].type
        'integer'
    """

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        random_source: Optional[Callable[[], float]] = None,
    ) -> None:
        """Initialize a PrismaSchemaParser.

        Args:
            config: Optional ExtractionConfig. Defaults are used when None.
            random_source: Optional randomness source for positions.
        """
        self.config = config or ExtractionConfig()
        self.keywords = self.config.prisma_keywords
        self.types = self.config.prisma_types
        self.random_source = random_source

    def parse(self, text: str, collector: Optional[WarningCollector] = None) -> Schema:
        """Parse Prisma schema text.

        Args:
            text: Prisma schema source.
            collector: Optional WarningCollector for diagnostics.

        Returns:
            Extracted Schema.

        Raises:
            DialectMismatchError: If the text has no model or enum keyword.
            StructuralParseError: If braces are unbalanced or a block is not
                closed.
            EmptySchemaError: If no model and no enum was found.
            UnresolvedReferenceError: If a relationship endpoint is unknown
                and the config's on_unresolved mode is FAIL.
        """
        if collector is None:
            collector = WarningCollector()

        cleaned = strip_comments(text)
        keyword_re = re.compile(
            rf"\b(?:{self.keywords.model_keyword}|{self.keywords.enum_keyword})\s+\w+"
        )
        if not keyword_re.search(cleaned):
            raise DialectMismatchError(
                "No Prisma models or enums found. Make sure you have model definitions.",
                dialect="prisma",
            )
        if not braces_balanced(cleaned):
            raise StructuralParseError("Unbalanced braces in Prisma schema")

        self._check_blocks(cleaned, collector)

        enums = [
            self._parse_enum(name, body)
            for name, body, _ in iter_blocks(cleaned, self.keywords.enum_keyword)
        ]
        models = [
            self._parse_model(name, body, line)
            for name, body, line in iter_blocks(cleaned, self.keywords.model_keyword)
        ]
        models = self._unique_models(models, collector)

        if not models and not enums:
            raise EmptySchemaError("No valid model/enum declarations found")

        model_names = {model.name for model in models}
        enum_names = {enum.name for enum in enums}

        relationships: list[Relationship] = []
        for model in models:
            relationships.extend(self._extract_relationships(model, models, collector))

        relationships = resolve_relationships(
            relationships,
            [model.name for model in models],
            self.config.on_unresolved,
            collector,
        )
        if self.config.deduplicate_relationships:
            relationships = deduplicate_relationships(relationships)

        positions = PositionGenerator(
            spacing_x=self.config.table_spacing_x,
            spacing_y=self.config.table_spacing_y,
            per_row=self.config.tables_per_row,
            jitter=self.config.position_jitter,
            random_source=self.random_source,
        )
        tables = [
            self._build_table(model, index, model_names, enum_names, relationships, positions)
            for index, model in enumerate(models)
        ]

        return Schema(
            tables=tuple(tables),
            relationships=tuple(relationships),
            enums=tuple(enums),
        )

    def _unique_models(
        self, models: list[PrismaModel], collector: WarningCollector
    ) -> list[PrismaModel]:
        """Keep one model per name. A later block replaces an earlier one in place."""
        unique: dict[str, PrismaModel] = {}
        for model in models:
            if model.name in unique:
                report_redeclaration(model.name, collector)
            unique[model.name] = model
        return list(unique.values())

    def _check_blocks(self, cleaned: str, collector: WarningCollector) -> None:
        for keyword in ("generator", "datasource"):
            if not re.search(rf"(?<![\w.@]){keyword}\s+\w+\s*\{{", cleaned):
                collector.info(f"Schema has no {keyword} block")

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _parse_enum(self, name: str, body: str) -> EnumDefinition:
        values = ENUM_ATTRIBUTE_RE.sub(" ", body).split()
        return EnumDefinition(name=name, values=tuple(values))

    def _parse_model(self, name: str, body: str, line: int) -> PrismaModel:
        fields: list[PrismaField] = []
        attributes: list[PrismaAttribute] = []

        for offset, raw_line in enumerate(body.split("\n")):
            stripped = raw_line.strip()
            if not stripped:
                continue
            if stripped.startswith("@@"):
                attributes.extend(parse_attributes(stripped))
                continue

            match = _FIELD_RE.match(stripped)
            if match is None:
                continue

            field_name, type_text, rest = match.groups()
            is_array = type_text.endswith("[]")
            is_optional = type_text.endswith("?")
            base_type = type_text.rstrip("?")
            if base_type.endswith("[]"):
                base_type = base_type[:-2]

            fields.append(
                PrismaField(
                    name=field_name,
                    type=base_type,
                    is_array=is_array,
                    is_optional=is_optional,
                    attributes=tuple(parse_attributes(rest)),
                    line=line + offset,
                )
            )

        return PrismaModel(
            name=name, fields=tuple(fields), attributes=tuple(attributes), line=line
        )

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _build_table(
        self,
        model: PrismaModel,
        index: int,
        model_names: set[str],
        enum_names: set[str],
        relationships: list[Relationship],
        positions: PositionGenerator,
    ) -> Table:
        keywords = self.keywords
        indexes: list[Index] = []
        composite_key: list[str] = []
        table_name = model.name

        for attribute in model.attributes:
            if attribute.name == keywords.map_attribute and attribute.args:
                table_name = unquote(attribute.args[0])
                continue
            if attribute.name not in keywords.index_attributes or not attribute.args:
                continue

            columns = parse_list(attribute.named_arg("fields") or attribute.args[0])
            if not columns:
                continue
            if attribute.name == keywords.id_attribute:
                composite_key.extend(columns)

            name = attribute.named_arg("name") or attribute.named_arg("map")
            if name:
                name = unquote(name)
            else:
                name = f"{model.name}_{attribute.name}_{len(indexes)}"
            indexes.append(
                Index(
                    name=name,
                    columns=tuple(columns),
                    is_unique=attribute.name in keywords.unique_index_attributes,
                )
            )

        foreign_keys = {
            relationship.source_column: ColumnReference(
                table=relationship.target, column=relationship.target_column
            )
            for relationship in relationships
            if relationship.source == model.name
        }

        columns = []
        for field in model.fields:
            if field.type in model_names:
                continue
            columns.append(
                self._build_column(
                    field, enum_names, composite_key, foreign_keys.get(field.name)
                )
            )

        return Table(
            id=model.name,
            name=table_name,
            columns=tuple(columns),
            indexes=tuple(indexes),
            position=positions.position_for(index),
        )

    def _build_column(
        self,
        field: PrismaField,
        enum_names: set[str],
        composite_key: list[str],
        reference: Optional[ColumnReference],
    ) -> Column:
        keywords = self.keywords
        is_id = field.has_attribute(keywords.id_attribute)
        default = field.get_attribute(keywords.default_attribute)
        default_arg = default.args[0] if default is not None and default.args else None

        column_type = self._resolve_type(field, enum_names, is_id, default_arg)
        if field.is_array:
            column_type += "[]"

        return Column(
            name=field.name,
            type=column_type,
            is_primary_key=is_id or field.name in composite_key,
            is_unique=field.has_attribute(keywords.unique_attribute),
            is_not_null=not field.is_optional,
            references=reference,
            default_value=(
                self._normalize_default(default_arg) if default is not None else None
            ),
        )

    def _resolve_type(
        self,
        field: PrismaField,
        enum_names: set[str],
        is_id: bool,
        default_arg: Optional[str],
    ) -> str:
        prefix = self.keywords.native_type_prefix
        for attribute in field.attributes:
            if attribute.name.startswith(prefix) and len(attribute.name) > len(prefix):
                native = attribute.name[len(prefix) :].lower()
                if attribute.raw_args is not None and attribute.raw_args.strip():
                    native += f"({', '.join(attribute.args)})"
                return native

        if is_id and default_arg and self.keywords.autoincrement_generator in default_arg:
            for scalar, serial in self.keywords.serial_types:
                if field.type == scalar:
                    return serial

        mapped = self.types.resolve(field.type)
        if mapped is not None:
            return mapped
        if field.type in enum_names:
            return f"enum({field.type})"
        return field.type.lower()

    def _normalize_default(self, default_arg: Optional[str]) -> str:
        keywords = self.keywords
        value = default_arg or ""
        if any(generator in value for generator in keywords.uuid_generators):
            return UUID_SENTINEL
        if keywords.now_generator in value:
            return NOW_SENTINEL
        if keywords.autoincrement_generator in value:
            return AUTOINCREMENT_SENTINEL
        return value

    # ------------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------------

    def _extract_relationships(
        self,
        model: PrismaModel,
        models: list[PrismaModel],
        collector: WarningCollector,
    ) -> list[Relationship]:
        by_name = {candidate.name: candidate for candidate in models}
        relationships: list[Relationship] = []

        for field in model.fields:
            target = by_name.get(field.type)
            if target is None:
                continue

            relation = field.get_attribute(self.keywords.relation_attribute)
            fields_arg = relation.named_arg("fields") if relation is not None else None
            references_arg = (
                relation.named_arg("references") if relation is not None else None
            )

            if fields_arg is not None and references_arg is not None:
                sources = parse_list(fields_arg)
                references = parse_list(references_arg)
                if not sources or not references:
                    collector.warning(
                        "Relation has empty fields or references",
                        context=f"{model.name}.{field.name}",
                    )
                    continue
                for position, source_column in enumerate(sources):
                    target_column = (
                        references[position]
                        if position < len(references)
                        else references[0]
                    )
                    relationships.append(
                        Relationship.create(
                            model.name, source_column, target.name, target_column
                        )
                    )
                continue

            if field.is_array:
                continue

            foreign_key = self._find_foreign_key(model, field.name)
            target_key = next(
                (
                    candidate
                    for candidate in target.fields
                    if candidate.has_attribute(self.keywords.id_attribute)
                ),
                None,
            )
            if foreign_key is not None and target_key is not None:
                relationships.append(
                    Relationship.create(
                        model.name, foreign_key.name, target.name, target_key.name
                    )
                )

        return relationships

    def _find_foreign_key(
        self, model: PrismaModel, relation_name: str
    ) -> Optional[PrismaField]:
        """Find the scalar holding the key of a relation field.

        Matches ``<field>Id``, ``<field>_id`` and ``<field>id`` case-insensitively.
        """
        lowered = f"{relation_name.lower()}id"
        for field in model.fields:
            if (
                field.name == f"{relation_name}Id"
                or field.name == f"{relation_name}_id"
                or field.name.lower() == lowered
            ):
                return field
        return None

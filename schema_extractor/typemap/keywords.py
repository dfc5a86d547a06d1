"""
Keyword tables used by the parsers.

Each table is a frozen dataclass so callers can build a variant with
dataclasses.replace() and hand it to a parser, e.g. to recognize a custom
table constructor.
"""

from dataclasses import dataclass

NOW_SENTINEL = "now()"
UUID_SENTINEL = "gen_random_uuid()"
AUTOINCREMENT_SENTINEL = "autoincrement"
LITERAL_DEFAULT_SENTINEL = "default"


@dataclass(frozen=True)
class DrizzleKeywords:
    """Function and method names with a meaning in Drizzle schemas."""

    table_constructors: frozenset[str] = frozenset(
        {"pgTable", "mysqlTable", "sqliteTable", "singlestoreTable"}
    )
    table_creators: frozenset[str] = frozenset(
        {"pgTableCreator", "mysqlTableCreator", "sqliteTableCreator"}
    )
    schema_table_method: str = "table"
    enum_constructors: frozenset[str] = frozenset({"pgEnum"})
    relations_helper: str = "relations"
    one_helper: str = "one"
    many_helper: str = "many"
    index_helpers: frozenset[str] = frozenset({"index", "uniqueIndex"})
    unique_index_helper: str = "uniqueIndex"
    index_on_method: str = "on"

    primary_key_modifier: str = "primaryKey"
    unique_modifier: str = "unique"
    not_null_modifier: str = "notNull"
    references_modifier: str = "references"
    default_modifier: str = "default"

    # Default-setting modifiers that map to a fixed sentinel value.
    default_sentinels: tuple[tuple[str, str], ...] = (
        ("defaultNow", NOW_SENTINEL),
        ("defaultRandom", UUID_SENTINEL),
        ("autoincrement", AUTOINCREMENT_SENTINEL),
        ("$defaultFn", LITERAL_DEFAULT_SENTINEL),
        ("$default", LITERAL_DEFAULT_SENTINEL),
    )

    def sentinel_for(self, modifier: str) -> str | None:
        """Return the sentinel default for a modifier name, if any."""
        for name, sentinel in self.default_sentinels:
            if name == modifier:
                return sentinel
        return None


@dataclass(frozen=True)
class PrismaKeywords:
    """Block keywords and attribute names with a meaning in Prisma schemas."""

    model_keyword: str = "model"
    enum_keyword: str = "enum"
    id_attribute: str = "id"
    unique_attribute: str = "unique"
    default_attribute: str = "default"
    relation_attribute: str = "relation"
    native_type_prefix: str = "db."
    index_attributes: frozenset[str] = frozenset({"index", "unique", "id"})
    unique_index_attributes: frozenset[str] = frozenset({"unique", "id"})
    map_attribute: str = "map"

    uuid_generators: tuple[str, ...] = ("uuid(", "cuid(")
    now_generator: str = "now()"
    autoincrement_generator: str = "autoincrement()"

    # Integer scalars that become serial columns with @id @default(autoincrement())
    serial_types: tuple[tuple[str, str], ...] = (
        ("Int", "serial"),
        ("BigInt", "bigserial"),
    )


DEFAULT_DRIZZLE_KEYWORDS = DrizzleKeywords()
DEFAULT_PRISMA_KEYWORDS = PrismaKeywords()

"""
Command-line interface for schema extractor.

This module provides a command-line interface for extracting tables,
columns, relationships, indexes and enums from Drizzle and Prisma schema
files, with pretty, tabular and JSON output.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from colorama import Fore, Style, init
from tabulate import tabulate

from schema_extractor import (
    Dialect,
    ErrorMode,
    ExtractionConfig,
    ParseResult,
    SchemaExtractor,
)
from schema_extractor.examples import EXAMPLES
from schema_extractor.models.schema import Schema

init(autoreset=True)

USE_COLOR = True
QUIET = False


def _color(text: str, color: str) -> str:
    if not USE_COLOR:
        return text
    return f"{color}{text}{Style.RESET_ALL}"


def print_success(msg: str) -> None:
    """Print success message."""
    if QUIET:
        return
    try:
        print(_color(f"✓ {msg}", Fore.GREEN) if USE_COLOR else f"[OK] {msg}")
    except UnicodeEncodeError:
        print(f"[OK] {msg}")


def print_error(msg: str) -> None:
    """Print error message."""
    try:
        text = _color(f"✗ {msg}", Fore.RED) if USE_COLOR else f"[ERROR] {msg}"
        print(text, file=sys.stderr)
    except UnicodeEncodeError:
        print(f"[ERROR] {msg}", file=sys.stderr)


def print_warning(msg: str) -> None:
    """Print warning message."""
    if QUIET:
        return
    try:
        print(_color(f"⚠ {msg}", Fore.YELLOW) if USE_COLOR else f"[WARN] {msg}")
    except UnicodeEncodeError:
        print(f"[WARN] {msg}")


def print_info(msg: str) -> None:
    """Print info message."""
    if QUIET:
        return
    print(_color(msg, Fore.CYAN))


def main(argv: Optional[list[str]] = None) -> None:
    """
    CLI main entry point.

    Supported commands:
        # Extract a schema, detecting the dialect
        schema-extractor schema.prisma

        # Force a dialect and print tables
        schema-extractor schema.ts --dialect drizzle --format table

        # Machine readable output
        schema-extractor schema.ts --format json

        # Tables connected to one table
        schema-extractor schema.prisma --related Post

        # Bundled example
        schema-extractor --example drizzle
    """
    global USE_COLOR, QUIET

    parser = argparse.ArgumentParser(
        prog="schema-extractor",
        description="Drizzle and Prisma schema extractor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Extract a Prisma schema
  %(prog)s prisma/schema.prisma

  # Extract a Drizzle schema as a table listing
  %(prog)s src/db/schema.ts --format table

  # Export the normalized schema
  %(prog)s src/db/schema.ts --export schema.json

  # Read from stdin
  cat schema.prisma | %(prog)s - --dialect prisma
        """,
    )

    # === Input parameters ===
    input_group = parser.add_argument_group("Input Options")
    input_group.add_argument(
        "schema_file", nargs="?", help="Schema file to extract ('-' for stdin)"
    )
    input_group.add_argument(
        "--example",
        "-x",
        choices=sorted(EXAMPLES),
        help="Use a bundled example schema instead of a file",
    )
    input_group.add_argument(
        "--dialect",
        "-d",
        choices=Dialect.values(),
        help="Schema dialect (default: detect)",
    )

    # === Query parameters ===
    query_group = parser.add_argument_group("Query Options")
    query_group.add_argument(
        "--related",
        "-r",
        metavar="TABLE",
        help="Show the tables connected to a table",
    )

    # === Output parameters ===
    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument(
        "--format",
        "-f",
        choices=["pretty", "table", "json"],
        default="pretty",
        help="Output format (default: pretty)",
    )
    output_group.add_argument(
        "--export", "-o", metavar="FILE", help="Export the result as JSON to a file"
    )
    output_group.add_argument(
        "--no-color", action="store_true", help="Disable colored output"
    )

    # === Configuration parameters ===
    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a relationship references an unknown table",
    )
    config_group.add_argument(
        "--dedupe",
        action="store_true",
        help="Emit each (source, column, target, column) relationship once",
    )
    config_group.add_argument(
        "--no-fallback",
        action="store_true",
        help="Do not retry with the fallback parser",
    )
    config_group.add_argument(
        "--no-warnings", action="store_true", help="Suppress warnings"
    )

    args = parser.parse_args(argv)

    if args.no_color:
        USE_COLOR = False
    QUIET = args.format == "json"

    # 1. Read schema text
    text = read_input(args.schema_file, args.example)
    if text is None:
        sys.exit(1)

    # 2. Configure extractor
    config = ExtractionConfig(
        enable_fallback=not args.no_fallback,
        deduplicate_relationships=args.dedupe,
        on_unresolved=ErrorMode.FAIL if args.strict else ErrorMode.WARN,
    )

    # 3. Extract
    print_info("Extracting schema...")
    result = SchemaExtractor(config=config).extract(text, args.dialect)

    if not args.no_warnings:
        show_warnings(result)

    if not result.success or result.data is None:
        if args.format == "json":
            print(result.to_json(indent=2))
        print_error(f"Schema extraction failed: {result.error}")
        sys.exit(1)

    stats = result.data.get_statistics()
    tier = result.tier.value if result.tier else "-"
    print_success(
        f"Extracted {stats.table_count} tables, {stats.relationship_count} "
        f"relationships and {stats.enum_count} enums "
        f"({result.dialect.display_name}, {tier} parser)."
    )

    # 4. Output
    if args.related:
        handle_related(result, args.related, args.format)
    elif args.format == "json":
        print(result.to_json(indent=2))
    elif args.format == "table":
        handle_table(result.data)
    else:
        handle_pretty(result.data)

    # 5. Export (if needed)
    if args.export:
        handle_export(result, args.export)


def read_input(schema_file: Optional[str], example: Optional[str]) -> Optional[str]:
    """Read schema text from a file, stdin or a bundled example."""
    if example:
        print_info(f"Using bundled {example} example")
        return EXAMPLES[example]

    if not schema_file:
        print_error("No schema file given. Pass a file, '-' or --example.")
        return None

    if schema_file == "-":
        return sys.stdin.read()

    path = Path(schema_file)
    if not path.exists():
        print_error(f"File not found: {schema_file}")
        return None

    print_info(f"Reading schema from: {path}")
    return path.read_text(encoding="utf-8")


def describe_flags(column) -> str:
    """Return the short flag list of a column, e.g. "PK, NN"."""
    flags = []
    if column.is_primary_key:
        flags.append("PK")
    if column.is_unique:
        flags.append("UQ")
    if column.is_not_null:
        flags.append("NN")
    return ", ".join(flags)


def handle_pretty(schema: Schema) -> None:
    """Show tables, enums and relationships as an indented listing."""
    for table in schema.tables:
        title = table.id
        if table.name != table.id:
            title += f" ({table.name})"
        print(f"\n{_color(title, Fore.CYAN)}")
        for column in table.columns:
            line = f"  - {column.name}: {column.type}"
            flags = describe_flags(column)
            if flags:
                line += f" [{flags}]"
            if column.references is not None:
                line += f" -> {column.references.to_qualified_name()}"
            if column.default_value is not None:
                line += f" = {column.default_value}"
            print(line)
        for index in table.indexes:
            kind = "unique index" if index.is_unique else "index"
            print(f"  * {kind} {index.name} ({', '.join(index.columns)})")

    if schema.enums:
        print(f"\n{_color('Enums', Fore.MAGENTA)}")
        for enum in schema.enums:
            print(f"  - {enum.name}: {', '.join(enum.values)}")

    if schema.relationships:
        print(f"\n{_color('Relationships', Fore.YELLOW)}")
        for rel in schema.relationships:
            source = f"{rel.source}.{rel.source_column}"
            print(f"  - {source} -> {rel.target}.{rel.target_column}")


def handle_table(schema: Schema) -> None:
    """Show columns, relationships and enums with tabulate."""
    rows = [
        [
            table.id,
            column.name,
            column.type,
            describe_flags(column),
            column.references.to_qualified_name() if column.references else "",
            column.default_value or "",
        ]
        for table in schema.tables
        for column in table.columns
    ]
    print(
        tabulate(
            rows,
            headers=["Table", "Column", "Type", "Flags", "References", "Default"],
            tablefmt="simple",
        )
    )

    if schema.relationships:
        print()
        print(
            tabulate(
                [
                    [
                        rel.id,
                        rel.source,
                        rel.source_column,
                        rel.target,
                        rel.target_column,
                    ]
                    for rel in schema.relationships
                ],
                headers=["Relationship", "Source", "Column", "Target", "Column"],
                tablefmt="simple",
            )
        )

    if schema.enums:
        print()
        print(
            tabulate(
                [[enum.name, ", ".join(enum.values)] for enum in schema.enums],
                headers=["Enum", "Values"],
                tablefmt="simple",
            )
        )


def handle_related(result: ParseResult, table_id: str, format: str) -> None:
    """Handle --related command."""
    graph = result.to_graph()
    if not graph.has_table(table_id):
        print_error(f"Table not found: {table_id}")
        sys.exit(1)

    referenced = sorted(graph.referenced_tables(table_id))
    referencing = sorted(graph.referencing_tables(table_id))
    related = sorted(graph.related_tables(table_id))

    if format == "json":
        print(
            json.dumps(
                {
                    "table": table_id,
                    "references": referenced,
                    "referencedBy": referencing,
                    "related": related,
                },
                indent=2,
            )
        )
        return

    print_info(f"\nTables connected to {table_id}:\n")
    print(f"References:    {', '.join(referenced) or '-'}")
    print(f"Referenced by: {', '.join(referencing) or '-'}")
    print(f"Related:       {', '.join(related) or '-'}")


def handle_export(result: ParseResult, output_file: str) -> None:
    """Export the result and its graph as JSON."""
    output_path = Path(output_file)
    print_info(f"\nExporting schema to: {output_path}")

    data = result.to_dict()
    if result.success:
        data["graph"] = result.to_graph().to_dict()

    output_path.write_text(
        json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8"
    )
    print_success(f"Exported to {output_path}")


def show_warnings(result: ParseResult) -> None:
    """Show warning messages."""
    warnings = [w for w in result.warnings if w.level != "INFO"]
    if not warnings:
        return

    print_warning(f"{len(warnings)} warning(s):")
    for i, warning in enumerate(warnings, 1):
        context = f" ({warning.context})" if warning.context else ""
        line = f"  {i}. {warning.message}{context}"
        if QUIET:
            print(line, file=sys.stderr)
        else:
            print(line)


if __name__ == "__main__":
    main()

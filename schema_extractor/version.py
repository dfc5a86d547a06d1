"""Version information."""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)

# Version history
CHANGELOG = """
# Changelog

## v1.0.0

### Dual-dialect schema extraction

- Drizzle ORM schemas parsed from a tree-sitter TypeScript syntax tree
- Prisma schemas parsed block by block
- Regex fallback parser for each dialect
- Shared column groups (`...auditSchema`) and table-creator aliases
- `relations()` helpers, inline `.references()` and Prisma `@relation`
- Indexes from `index()` / `uniqueIndex()` and `@@index` / `@@unique` / `@@id`

**CLI**

- Pretty, table and JSON output
- `--related` relationship lookups
- Export to JSON

### Known Limitations

- Columns are not typed across files (imported tables are unresolved)
- Composite `primaryKey()` table helpers are not reported as indexes
"""

"""
Relationship post-processing shared by the structural parsers.

Parsers only emit relationships whose endpoints are tables of the same
schema. Everything else is dropped here, reported according to the
configured ErrorMode.
"""

from typing import Iterable

from schema_extractor.exceptions import UnresolvedReferenceError
from schema_extractor.models.config import ErrorMode
from schema_extractor.models.relationship import Relationship
from schema_extractor.utils.warnings import WarningCollector


def resolve_relationships(
    relationships: Iterable[Relationship],
    table_ids: list[str],
    mode: ErrorMode,
    collector: WarningCollector,
) -> list[Relationship]:
    """Keep relationships whose source and target are known tables.

    Args:
        relationships: Candidate relationships in emission order.
        table_ids: Ids of the tables collected by the parser.
        mode: What to do with a dangling relationship.
        collector: Collector receiving WARN-mode diagnostics.

    Returns:
        Relationships with both endpoints in ``table_ids``.

    Raises:
        UnresolvedReferenceError: In FAIL mode, for the first dangling
            relationship.
    """
    known = set(table_ids)
    resolved: list[Relationship] = []

    for relationship in relationships:
        missing = [
            end for end in (relationship.source, relationship.target) if end not in known
        ]
        if not missing:
            resolved.append(relationship)
            continue

        if mode == ErrorMode.FAIL:
            raise UnresolvedReferenceError(
                f"Relationship '{relationship.id}' references unknown table "
                f"'{missing[0]}'",
                reference=missing[0],
                available_tables=list(table_ids),
            )
        if mode == ErrorMode.WARN:
            collector.add_unresolved_warning(
                "Relationship", missing[0], context=relationship.id
            )

    return resolved


def deduplicate_relationships(relationships: Iterable[Relationship]) -> list[Relationship]:
    """Drop relationships describing a link already seen, keeping the first."""
    seen: set[tuple[str, str, str, str]] = set()
    unique: list[Relationship] = []
    for relationship in relationships:
        key = relationship.link_key()
        if key in seen:
            continue
        seen.add(key)
        unique.append(relationship)
    return unique

"""Schema migrations for persisted version records.

Record sets are persisted in an envelope tagged with a schema number:

    {"schema": 2, "versions": [{"version": "10.0.0", "localPath": "/builds/x"}]}

Schema history:
- 1: bare JSON array. Early releases stored local builds as
  ``{"tag_name", "name", "url"}``; later ones as ``{"version", ...}``.
- 2: the envelope above.

Migrators take the raw entries of one schema and return entries valid in the
current schema. Entries a migrator cannot convert are dropped.
"""

import logging
from typing import Any, Callable

CURRENT_SCHEMA = 2
LEGACY_SCHEMA = 1

_logging = logging.getLogger(__name__)


class UnknownSchemaError(ValueError):
    """Raised when a payload's shape or schema number is not recognised."""
    pass


def unwrap(payload: Any) -> tuple[int, list]:
    """Split a decoded payload into its schema number and raw entries.

    Raises:
        UnknownSchemaError: If the payload is neither a bare array nor an
            envelope this version understands
    """
    if isinstance(payload, list):
        return LEGACY_SCHEMA, payload

    if not isinstance(payload, dict):
        raise UnknownSchemaError(
            f"Expected an array or object, got {type(payload).__name__}"
        )

    schema = payload.get("schema")
    entries = payload.get("versions")
    if not isinstance(schema, int) or isinstance(schema, bool):
        raise UnknownSchemaError("Envelope is missing an integer 'schema'")
    if schema > CURRENT_SCHEMA:
        raise UnknownSchemaError(
            f"Schema {schema} is newer than supported schema {CURRENT_SCHEMA}"
        )
    if not isinstance(entries, list):
        raise UnknownSchemaError("Envelope field 'versions' must be an array")
    return schema, entries


def wrap(entries: list[dict]) -> dict:
    return {"schema": CURRENT_SCHEMA, "versions": entries}


def is_expected_format(entries: list) -> bool:
    """Check every entry is an object with a non-empty version string."""
    return all(
        isinstance(entry, dict)
        and isinstance(entry.get("version"), str)
        and bool(entry["version"])
        for entry in entries
    )


def migrate_legacy_entries(entries: list) -> list[dict]:
    """Rewrite ``{tag_name, name, url}`` entries as local versions."""
    migrated = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue

        tag_name = entry.get("tag_name")
        name = entry.get("name")
        url = entry.get("url")
        if not tag_name or not name or not url:
            continue

        migrated.append({"version": tag_name, "name": name, "localPath": url})

    dropped = len(entries) - len(migrated)
    if dropped:
        _logging.debug(f"Dropped {dropped} unmigratable legacy entries")
    return migrated


def drop_invalid_entries(entries: list) -> list[dict]:
    return [entry for entry in entries if is_expected_format([entry])]


MIGRATIONS: dict[int, Callable[[list], list[dict]]] = {
    LEGACY_SCHEMA: migrate_legacy_entries,
    CURRENT_SCHEMA: drop_invalid_entries,
}


def migrate(schema: int, entries: list) -> list[dict]:
    """Run the migrator registered for ``schema``.

    Raises:
        UnknownSchemaError: If no migrator is registered
    """
    migrator = MIGRATIONS.get(schema)
    if migrator is None:
        raise UnknownSchemaError(f"No migration registered for schema {schema}")

    _logging.info(f"Migrating {len(entries)} entries from schema {schema}")
    return migrator(entries)


__all__ = [
    "CURRENT_SCHEMA",
    "LEGACY_SCHEMA",
    "UnknownSchemaError",
    "unwrap",
    "wrap",
    "is_expected_format",
    "migrate_legacy_entries",
    "migrate",
]

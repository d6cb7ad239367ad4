"""
Catalogue loading and validation.

Raw catalogue documents are JSON: either ``{"records": [...]}`` or a bare list
of record mappings. Each mapping is adapted to a ``Record`` (canonical
snake_case keys are preferred; the camelCase and nested aliases used by older
exports are accepted too), validated against the tier table, and collected
into a ``RecordStore``.

Example:
    >>> from facetsearch.core.catalogue import load_catalogue
    >>> store = load_catalogue()          # bundled reference catalogue
    >>> store.get("es").name
    'Spanish'
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import orjson

from ..utils.error_handling import CatalogueError, ErrorCollector, RecordValidationError
from ..utils.logging_config import SearchLogger, get_logger
from .store import RecordStore
from .types import MAX_TIER, MIN_TIER, TIER_HOURS, Record

DEFAULT_CATALOGUE = Path(__file__).resolve().parent.parent / "data" / "catalogue.json"

_SLUG_RE = re.compile(r"\s+")


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first present, non-empty key; dotted keys descend into mappings."""
    for key in keys:
        value: Any = raw
        for part in key.split("."):
            if not isinstance(value, Mapping) or part not in value:
                value = None
                break
            value = value[part]
        if value not in (None, "", [], ()):
            return value
    return None


def _number(value: Any, field_name: str, record_id: str) -> float:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RecordValidationError(
            f"Field '{field_name}' must be numeric, got {type(value).__name__}",
            record_id=record_id,
            context={"field": field_name},
        )
    return value


def adapt_record(raw: Mapping[str, Any]) -> Record:
    """
    Convert a raw record mapping into a ``Record``.

    Args:
        raw: Mapping read from a catalogue document

    Returns:
        The adapted record (not yet validated against the tier table)

    Raises:
        RecordValidationError: If the mapping has no name or a numeric field
            holds a non-numeric value
    """
    if not isinstance(raw, Mapping):
        raise RecordValidationError(f"Record must be an object, got {type(raw).__name__}")

    name = _first(raw, "name")
    if not isinstance(name, str) or not name.strip():
        raise RecordValidationError(
            "Record is missing required field: name",
            record_id=raw.get("id"),
            context={"field": "name"},
        )

    record_id = str(_first(raw, "id") or _SLUG_RE.sub("-", name.strip().lower()))

    places = _first(raw, "places", "countries") or ()
    if isinstance(places, str):
        places = (places,)

    # ``difficulty`` is a score mapping in newer exports and a bare tier in older ones
    tier = _first(raw, "tier", "fsi.category")
    if tier is None and not isinstance(raw.get("difficulty"), Mapping):
        tier = raw.get("difficulty")
    if tier is None:
        raise RecordValidationError(
            f"Record {record_id} is missing required field: tier",
            record_id=record_id,
            context={"field": "tier"},
        )

    family = str(_first(raw, "family") or "Unknown")

    return Record(
        id=record_id,
        name=name,
        native_name=str(_first(raw, "native_name", "localName", "nativeName") or name),
        tier=int(_number(tier, "tier", record_id)),
        family=family,
        subfamily=str(_first(raw, "subfamily") or family),
        places=tuple(str(place) for place in places),
        overall_score=_number(
            _first(raw, "overall_score", "difficulty.overall"), "overall_score", record_id
        ),
        population_count=int(
            _number(_first(raw, "population_count", "speakers"), "population_count", record_id)
        ),
        study_hours=int(
            _number(_first(raw, "study_hours", "fsi.hours", "hours"), "study_hours", record_id)
        ),
        writing_system=str(_first(raw, "writing_system", "writingSystem") or ""),
        color=str(_first(raw, "color") or ""),
        glyph=str(_first(raw, "glyph", "flagEmoji", "flag") or ""),
    )


def validate_record(record: Record) -> list[str]:
    """Return the problems that keep ``record`` out of a store; empty when valid."""
    issues: list[str] = []

    if not MIN_TIER <= record.tier <= MAX_TIER:
        issues.append(f"Invalid tier {record.tier} for {record.name}, must be {MIN_TIER}-{MAX_TIER}")
    else:
        low, high = TIER_HOURS[record.tier]
        if not low <= record.study_hours <= high:
            expected = f"{low}" if low == high else f"{low}-{high}"
            issues.append(
                f"Invalid study hours {record.study_hours} for tier {record.tier} "
                f"in {record.name}. Expected: {expected}"
            )

    for field_name in ("overall_score", "population_count", "study_hours"):
        if getattr(record, field_name) < 0:
            issues.append(f"Negative {field_name} for {record.name}")

    return issues


def load_records(
    raw_records: Iterable[Any],
    strict: bool = True,
    collector: ErrorCollector | None = None,
    version: int = 0,
) -> RecordStore:
    """
    Adapt and validate raw records into a store.

    Args:
        raw_records: Raw record mappings, in catalogue order
        strict: Raise on the first invalid record instead of skipping it
        collector: Receives one entry per rejected record when not strict
        version: Version of the resulting store

    Returns:
        RecordStore with the accepted records, catalogue order preserved

    Raises:
        RecordValidationError: In strict mode, for the first invalid record
    """
    records: list[Record] = []
    seen_ids: set[str] = set()

    for index, raw in enumerate(raw_records):
        try:
            record = adapt_record(raw)
            issues = validate_record(record)
            if record.id in seen_ids:
                issues.append(f"Duplicate record id: {record.id}")
            if issues:
                raise RecordValidationError(
                    "; ".join(issues), record_id=record.id, context={"index": index}
                )
        except RecordValidationError as e:
            if strict:
                raise
            if collector is not None:
                collector.add_error(e, context={"index": index})
            continue

        seen_ids.add(record.id)
        records.append(record)

    return RecordStore(records, version=version)


def load_catalogue(
    path: str | Path | None = None,
    strict: bool = True,
    collector: ErrorCollector | None = None,
    logger: SearchLogger | None = None,
) -> RecordStore:
    """
    Load a catalogue document into a RecordStore.

    Args:
        path: JSON document to read; the bundled catalogue when None
        strict: Raise on the first invalid record instead of skipping it
        collector: Receives rejected records when not strict
        logger: Logger for the load event

    Raises:
        CatalogueError: If the file cannot be read or decoded, or has no record list
        RecordValidationError: In strict mode, for the first invalid record
    """
    source = Path(path) if path is not None else DEFAULT_CATALOGUE

    try:
        document = orjson.loads(source.read_bytes())
    except OSError as e:
        raise CatalogueError(
            f"Cannot read catalogue {source}: {e}", context={"path": str(source)}
        ) from e
    except orjson.JSONDecodeError as e:
        raise CatalogueError(
            f"Catalogue {source} is not valid JSON: {e}", context={"path": str(source)}
        ) from e

    raw_records = document.get("records") if isinstance(document, dict) else document
    if not isinstance(raw_records, list):
        raise CatalogueError(
            f"Catalogue {source} does not contain a record list",
            context={"path": str(source)},
        )

    store = load_records(raw_records, strict=strict, collector=collector)
    (logger or get_logger()).log_catalogue_loaded(
        source=str(source), records=len(store), skipped=len(raw_records) - len(store)
    )
    return store

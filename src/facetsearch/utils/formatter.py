"""
Output formatting module for facetsearch.

This module renders engine output (ranked results, filtered records,
suggestions, bounds and filter statistics) as plain text, JSON or rich console
tables. It is shared by the CLI and by API users that want a printable view.

Key Functions:
    format_results: Ranked SearchResult list in any supported format
    format_records: Filtered Record list in any supported format
    format_suggestions: Typeahead suggestions
    format_bounds: Selectable filter options and numeric bounds
    format_stats: FilterResult summary
    to_json_bytes: orjson serialisation used by every JSON path

Supported Output Formats:
    - TEXT: One line per item, with ``[[...]]`` markers around name matches
    - JSON: Structured JSON for programmatic processing
    - TABLE: rich table printed to the console

Example:
    >>> from facetsearch.utils.formatter import format_results
    >>> from facetsearch.core.types import OutputFormat
    >>> print(format_results(engine.search("chin"), OutputFormat.TEXT))
    0.379  Mandarin [[Chin]]ese (中文)  tier 5  Sino-Tibetan  [name, places]
    # results=1
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict
from typing import Any

import orjson
from rich.console import Console
from rich.table import Table

from ..core.types import (
    TIER_DESCRIPTIONS,
    TIER_LABELS,
    FilterBounds,
    FilterResult,
    MatchSpan,
    OutputFormat,
    Record,
    SearchField,
    SearchResult,
    Suggestion,
)


def to_json_bytes(payload: Any) -> bytes:
    """Serialise a payload of plain values and dataclasses with orjson."""

    def default(obj: Any) -> Any:
        if isinstance(obj, (set, frozenset)):
            return sorted(obj)
        raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")

    return orjson.dumps(payload, default=default, option=orjson.OPT_INDENT_2)


def record_to_dict(record: Record) -> dict[str, Any]:
    data = asdict(record)
    data["places"] = list(record.places)
    return data


def result_to_dict(result: SearchResult) -> dict[str, Any]:
    return {
        "record": record_to_dict(result.record),
        "score": round(result.score, 6),
        "matched_fields": sorted(f.value for f in result.matched_fields),
        "highlights": [
            {"field": h.field.value, "span": [h.span[0], h.span[1]]} for h in result.highlights
        ],
    }


def suggestion_to_dict(suggestion: Suggestion) -> dict[str, Any]:
    return {
        "kind": suggestion.kind.value,
        "value": suggestion.value,
        "label": suggestion.label,
        "occurrence_count": suggestion.occurrence_count,
    }


def highlight_spans(
    text: str, spans: Sequence[MatchSpan], marker_left: str = "[[", marker_right: str = "]]"
) -> str:
    """
    Wrap each span of ``text`` in markers.

    Overlapping or adjacent spans are merged first so markers never nest.
    """
    merged: list[list[int]] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], end)
        else:
            merged.append([start, end])

    out: list[str] = []
    pos = 0
    for start, end in merged:
        out.append(text[pos:start])
        out.append(marker_left + text[start:end] + marker_right)
        pos = end
    out.append(text[pos:])
    return "".join(out)


def _display_name(result: SearchResult, marked: bool) -> str:
    name = result.record.name
    spans = [h.span for h in result.highlights if h.field == SearchField.NAME]
    # Spans index the lower-cased name, which only lines up when lengths agree
    if marked and spans and len(name.lower()) == len(name):
        return highlight_spans(name, spans)
    return name


def _record_line(record: Record, name: str | None = None) -> str:
    label = name or record.name
    if record.native_name and record.native_name != record.name:
        label = f"{label} ({record.native_name})"
    return f"{label}  tier {record.tier}  {record.family}"


def format_text(results: Sequence[SearchResult], highlight: bool = False) -> str:
    """One line per result: score, name, tier, family and matched fields."""
    out: list[str] = []
    for result in results:
        fields = ", ".join(sorted(f.value for f in result.matched_fields))
        line = _record_line(result.record, _display_name(result, highlight))
        out.append(f"{result.score:.3f}  {line}  [{fields}]")
    out.append(f"# results={len(results)}")
    return "\n".join(out)


def _records_table(records: Sequence[Record], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Name", style="bold")
    table.add_column("Native")
    table.add_column("Tier", justify="right")
    table.add_column("Family")
    table.add_column("Score", justify="right")
    table.add_column("Hours", justify="right")
    table.add_column("Speakers", justify="right")
    for r in records:
        table.add_row(
            r.name,
            r.native_name,
            TIER_LABELS.get(r.tier, str(r.tier)),
            r.family,
            f"{r.overall_score:g}",
            str(r.study_hours),
            f"{r.population_count:,}",
        )
    return table


def render_results_table(results: Sequence[SearchResult], console: Console | None = None) -> None:
    """Render ranked results as a rich table."""
    console = console or Console()
    table = Table(title=f"{len(results)} results")
    table.add_column("Score", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Native")
    table.add_column("Tier", justify="right")
    table.add_column("Family")
    table.add_column("Matched")
    for result in results:
        r = result.record
        table.add_row(
            f"{result.score:.3f}",
            r.name,
            r.native_name,
            TIER_LABELS.get(r.tier, str(r.tier)),
            r.family,
            ", ".join(sorted(f.value for f in result.matched_fields)),
        )
    console.print(table)


def format_results(
    results: Sequence[SearchResult], fmt: OutputFormat, console: Console | None = None
) -> str:
    """Format ranked results; TABLE prints to the console and returns ``""``."""
    if fmt == OutputFormat.JSON:
        return to_json_bytes([result_to_dict(r) for r in results]).decode("utf-8")
    if fmt == OutputFormat.TABLE:
        render_results_table(results, console)
        return ""
    return format_text(results, highlight=True)


def format_records(
    records: Sequence[Record], fmt: OutputFormat, console: Console | None = None
) -> str:
    if fmt == OutputFormat.JSON:
        return to_json_bytes([record_to_dict(r) for r in records]).decode("utf-8")
    if fmt == OutputFormat.TABLE:
        (console or Console()).print(_records_table(records, f"{len(records)} records"))
        return ""
    lines = [_record_line(r) for r in records]
    lines.append(f"# records={len(records)}")
    return "\n".join(lines)


def format_suggestions(
    suggestions: Sequence[Suggestion], fmt: OutputFormat, console: Console | None = None
) -> str:
    if fmt == OutputFormat.JSON:
        return to_json_bytes([suggestion_to_dict(s) for s in suggestions]).decode("utf-8")
    if fmt == OutputFormat.TABLE:
        table = Table(title="Suggestions")
        table.add_column("Kind")
        table.add_column("Label", style="bold")
        table.add_column("Count", justify="right")
        for s in suggestions:
            table.add_row(s.kind.value, s.label, str(s.occurrence_count))
        (console or Console()).print(table)
        return ""
    return "\n".join(f"{s.kind.value:<7} {s.label} ({s.occurrence_count})" for s in suggestions)


def format_bounds(bounds: FilterBounds, fmt: OutputFormat) -> str:
    if fmt == OutputFormat.JSON:
        return to_json_bytes(bounds).decode("utf-8")
    lines = ["tiers: " + ", ".join(TIER_LABELS.get(t, str(t)) for t in bounds.tiers)]
    lines.extend(
        f"  {TIER_LABELS[t]}: {TIER_DESCRIPTIONS[t]}"
        for t in bounds.tiers
        if t in TIER_DESCRIPTIONS
    )
    lines.extend(
        [
            "families: " + ", ".join(bounds.families),
            "places: " + ", ".join(bounds.places),
            f"score: {bounds.score_bounds[0]:g}-{bounds.score_bounds[1]:g}",
            f"hours: {bounds.hours_bounds[0]:g}-{bounds.hours_bounds[1]:g}",
            f"population: {bounds.population_bounds[0]:,}-{bounds.population_bounds[1]:,}",
        ]
    )
    return "\n".join(lines)


def format_stats(
    stats: FilterResult, fmt: OutputFormat, console: Console | None = None
) -> str:
    """Format a FilterResult: applied filters, counts and timing."""
    summary = stats.applied_filters
    if fmt == OutputFormat.JSON:
        payload = {
            "total_count": stats.total_count,
            "elapsed_ms": round(stats.elapsed_ms, 3),
            "applied_filters": asdict(summary),
            "records": [r.id for r in stats.records],
        }
        return to_json_bytes(payload).decode("utf-8")

    lines = [
        f"tiers: {summary.tiers or '-'}",
        f"families: {summary.families or '-'}",
        f"places: {summary.places or '-'}",
        f"query: {summary.query or '-'}",
        f"range filters: {'yes' if summary.has_range_filters else 'no'}",
        f"# total={stats.total_count} elapsed_ms={stats.elapsed_ms:.2f}",
    ]
    if fmt == OutputFormat.TABLE:
        console = console or Console()
        console.print(_records_table(stats.records, f"{stats.total_count} records"))
        console.print("[dim]" + " | ".join(lines) + "[/dim]")
        return ""
    return "\n".join(lines)

"""
Exceptions and error collection for facetsearch.

Filtering, scoring and suggesting are total and never raise. Errors only occur
at the edges of the package: when a SearchConfig is validated and when raw
catalogue data is read and adapted into records. Every such error is a
``SearchError`` carrying a category, a severity, hints for the user and a
free-form context mapping.

A lenient catalogue load does not stop at the first bad record; it hands each
rejection to an ``ErrorCollector`` and ``create_error_report`` renders the
collected problems for the CLI.

Example:
    >>> from facetsearch.utils.error_handling import (
    ...     ErrorCollector, RecordValidationError, create_error_report,
    ... )
    >>> collector = ErrorCollector()
    >>> collector.add_error(RecordValidationError("Invalid tier 9 for Bad", record_id="bad"))
    >>> print(create_error_report(collector).splitlines()[0])
    Catalogue Error Report
"""

from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    CATALOGUE = "catalogue"
    UNKNOWN = "unknown"


class SearchError(Exception):
    """
    Base exception for facetsearch errors.

    Subclasses set ``default_category``, ``default_severity`` and
    ``default_suggestions``; explicit constructor arguments override them.
    """

    default_category = ErrorCategory.UNKNOWN
    default_severity = ErrorSeverity.MEDIUM
    default_suggestions: tuple[str, ...] = ()

    def __init__(
        self,
        message: str,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category: ErrorCategory = category or self.default_category
        self.severity: ErrorSeverity = severity or self.default_severity
        self.suggestions: list[str] = (
            list(suggestions) if suggestions is not None else list(self.default_suggestions)
        )
        self.context: dict[str, Any] = dict(context or {})
        self.timestamp = time.time()


class ConfigurationError(SearchError):
    """SearchConfig holds weights, thresholds or limits outside their domain."""

    default_category = ErrorCategory.CONFIGURATION
    default_severity = ErrorSeverity.HIGH
    default_suggestions = (
        "Check field weights and thresholds",
        "Use default configuration",
    )


class RecordValidationError(SearchError):
    """A raw record that cannot enter the record store."""

    default_category = ErrorCategory.VALIDATION
    default_severity = ErrorSeverity.HIGH
    default_suggestions = (
        "Fix the record in the catalogue source",
        "Check the tier and study hours table",
    )

    def __init__(
        self,
        message: str,
        record_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        context = dict(context or {})
        if record_id is not None:
            context["record_id"] = record_id
        super().__init__(message, context=context)
        self.record_id = record_id


class CatalogueError(SearchError):
    """Catalogue document could not be read, decoded or understood."""

    default_category = ErrorCategory.CATALOGUE
    default_severity = ErrorSeverity.CRITICAL
    default_suggestions = (
        "Check the catalogue path",
        "Verify the file is valid JSON",
    )


@dataclass(slots=True)
class ErrorInfo:
    """One collected error."""

    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    exception_type: str
    record_id: str | None = None
    index: int | None = None
    context: dict[str, Any] = field(default_factory=dict)
    suggestions: list[str] = field(default_factory=list)
    timestamp: float = field(default_factory=time.time)

    def describe(self) -> str:
        text = f"[{self.record_id}] {self.message}" if self.record_id else self.message
        if self.index is not None:
            text += f" (entry {self.index})"
        return text


class ErrorCollector:
    """
    Gathers errors across a catalogue load.

    At most ``max_errors`` entries are kept; ``error_counts`` keeps counting
    past the limit.
    """

    def __init__(self, max_errors: int = 100) -> None:
        self.max_errors = max_errors
        self.errors: list[ErrorInfo] = []
        self.error_counts: Counter[ErrorCategory] = Counter()

    def add_error(
        self,
        exception: Exception,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        context: dict[str, Any] | None = None,
    ) -> ErrorInfo:
        if isinstance(exception, SearchError):
            info_context = {**exception.context, **(context or {})}
            info = ErrorInfo(
                category=exception.category,
                severity=exception.severity,
                message=exception.message,
                exception_type=type(exception).__name__,
                suggestions=list(exception.suggestions),
                context=info_context,
            )
        else:
            info_context = dict(context or {})
            info = ErrorInfo(
                category=category or ErrorCategory.UNKNOWN,
                severity=severity or ErrorSeverity.MEDIUM,
                message=str(exception),
                exception_type=type(exception).__name__,
                context=info_context,
            )
        info.record_id = info_context.get("record_id")
        info.index = info_context.get("index")

        if len(self.errors) < self.max_errors:
            self.errors.append(info)
        self.error_counts[info.category] += 1
        return info

    def get_errors_by_category(self, category: ErrorCategory) -> list[ErrorInfo]:
        return [e for e in self.errors if e.category == category]

    def get_errors_by_severity(self, severity: ErrorSeverity) -> list[ErrorInfo]:
        return [e for e in self.errors if e.severity == severity]

    def has_errors(self) -> bool:
        return bool(self.errors)

    def get_summary(self) -> dict[str, Any]:
        severities = Counter(e.severity for e in self.errors)
        return {
            "total_errors": len(self.errors),
            "by_category": {cat.value: n for cat, n in self.error_counts.items()},
            "by_severity": {sev.value: severities.get(sev, 0) for sev in ErrorSeverity},
        }

    def clear(self) -> None:
        self.errors.clear()
        self.error_counts.clear()


def create_error_report(collector: ErrorCollector) -> str:
    """Render collected errors as a plain-text report."""
    if not collector.errors:
        return "No errors found in the catalogue."

    summary = collector.get_summary()
    lines = [
        "Catalogue Error Report",
        "=" * 50,
        "",
        f"Total errors: {summary['total_errors']}",
        "",
        "Errors by category:",
    ]
    lines.extend(f"  {category}: {count}" for category, count in summary["by_category"].items())
    lines.extend(["", "Details:"])
    lines.extend(f"  - {error.describe()}" for error in collector.errors)
    return "\n".join(lines)

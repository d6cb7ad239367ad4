"""
Tests for the error hierarchy and error collection.
"""

from facetsearch.utils.error_handling import (
    CatalogueError,
    ConfigurationError,
    ErrorCategory,
    ErrorCollector,
    ErrorSeverity,
    RecordValidationError,
    SearchError,
    create_error_report,
)


class TestErrorSeverityAndCategory:
    def test_values(self):
        assert ErrorSeverity.CRITICAL == "critical"
        assert ErrorCategory.VALIDATION == "validation"
        assert isinstance(ErrorCategory.CATALOGUE, str)


class TestExceptions:
    def test_search_error_defaults(self):
        error = SearchError("boom")
        assert str(error) == "boom"
        assert error.category == ErrorCategory.UNKNOWN
        assert error.severity == ErrorSeverity.MEDIUM
        assert error.suggestions == []
        assert error.context == {}

    def test_configuration_error(self):
        error = ConfigurationError("bad weight", context={"field": "name"})
        assert isinstance(error, SearchError)
        assert error.category == ErrorCategory.CONFIGURATION
        assert error.context == {"field": "name"}
        assert error.suggestions

    def test_record_validation_error(self):
        error = RecordValidationError("bad tier", record_id="xx", context={"index": 3})
        assert error.record_id == "xx"
        assert error.context == {"index": 3, "record_id": "xx"}
        assert error.category == ErrorCategory.VALIDATION

    def test_catalogue_error_is_critical(self):
        assert CatalogueError("unreadable").severity == ErrorSeverity.CRITICAL


class TestErrorCollector:
    def test_collects_search_errors(self):
        collector = ErrorCollector()
        collector.add_error(RecordValidationError("bad tier", record_id="xx"))
        collector.add_error(CatalogueError("unreadable"))
        assert collector.has_errors()
        assert collector.errors[0].record_id == "xx"
        assert collector.errors[0].exception_type == "RecordValidationError"
        assert len(collector.get_errors_by_category(ErrorCategory.VALIDATION)) == 1
        assert len(collector.get_errors_by_severity(ErrorSeverity.CRITICAL)) == 1

    def test_plain_exception_defaults(self):
        collector = ErrorCollector()
        collector.add_error(ValueError("odd"), context={"record_id": "yy"})
        info = collector.errors[0]
        assert info.category == ErrorCategory.UNKNOWN
        assert info.severity == ErrorSeverity.MEDIUM
        assert info.record_id == "yy"

    def test_max_errors_still_counts(self):
        collector = ErrorCollector(max_errors=1)
        collector.add_error(RecordValidationError("a"))
        collector.add_error(RecordValidationError("b"))
        assert len(collector.errors) == 1
        assert collector.error_counts[ErrorCategory.VALIDATION] == 2

    def test_summary_and_clear(self):
        collector = ErrorCollector()
        collector.add_error(RecordValidationError("a", record_id="x"))
        summary = collector.get_summary()
        assert summary["total_errors"] == 1
        assert summary["by_category"] == {"validation": 1}
        assert summary["by_severity"]["high"] == 1
        collector.clear()
        assert not collector.has_errors()


class TestErrorReport:
    def test_empty_report(self):
        assert create_error_report(ErrorCollector()) == "No errors found in the catalogue."

    def test_report_details(self):
        collector = ErrorCollector()
        collector.add_error(RecordValidationError("Invalid tier 9", record_id="bad"))
        report = create_error_report(collector)
        assert report.startswith("Catalogue Error Report")
        assert "Total errors: 1" in report
        assert "  validation: 1" in report
        assert "  - [bad] Invalid tier 9" in report

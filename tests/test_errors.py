"""Tests for the error taxonomy and the reporting context manager."""

import pytest

from tuido.errors import (
    CommandUnrecognized,
    ExportFailure,
    InputRejected,
    PersistenceFailure,
    TuidoError,
    report_errors,
)


class TestReportErrors:
    def test_domain_error_reported(self):
        messages = []
        with report_errors(messages.append):
            raise PersistenceFailure("Error saving to /x")
        assert messages == ["Error saving to /x"]

    def test_no_error_no_report(self):
        messages = []
        with report_errors(messages.append):
            pass
        assert messages == []

    def test_other_exceptions_propagate(self):
        messages = []
        with pytest.raises(KeyError):
            with report_errors(messages.append):
                raise KeyError("boom")
        assert messages == []

    @pytest.mark.parametrize(
        "cls", [InputRejected, PersistenceFailure, ExportFailure, CommandUnrecognized]
    )
    def test_hierarchy(self, cls):
        assert issubclass(cls, TuidoError)

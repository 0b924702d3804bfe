"""Tests for the designopt exception hierarchy."""

from __future__ import annotations

import pytest

from designopt.foundation.exceptions import (
    CatalogError,
    ConfigurationError,
    DesignOptError,
    EvaluationError,
    InvalidParameterError,
    ObjectiveError,
    OptimizationError,
    UnsupportedMethodError,
)


class TestDesignOptError:
    def test_basic_error(self):
        err = DesignOptError("Something went wrong")
        assert "Something went wrong" in str(err)
        assert err.message == "Something went wrong"
        assert err.suggestion is None
        assert err.details == {}

    def test_error_with_suggestion(self):
        err = DesignOptError("Something went wrong", suggestion="Try this instead")
        assert "Suggestion: Try this instead" in str(err)


class TestConfigurationErrors:
    def test_catalog_error_records_variable(self):
        err = CatalogError("bad", "beamWidth")
        assert err.details == {"variable": "beamWidth"}
        assert err.suggestion

    def test_invalid_parameter_error_names_field(self):
        err = InvalidParameterError("population_size", 0, "an integer >= 1")
        assert "population_size" in str(err)
        assert err.details["value"] == 0

    def test_unsupported_method_lists_available(self):
        err = UnsupportedMethodError("method", "spea2", ["nsga2"])
        assert "spea2" in str(err)
        assert "nsga2" in str(err)

    @pytest.mark.parametrize("cls", [CatalogError, ObjectiveError, InvalidParameterError, UnsupportedMethodError])
    def test_hierarchy(self, cls):
        assert issubclass(cls, ConfigurationError)
        assert issubclass(cls, DesignOptError)


def test_evaluation_error_is_runtime_error():
    err = EvaluationError("missing", "cost")
    assert isinstance(err, OptimizationError)
    assert err.details == {"objective": "cost"}

"""
designopt exception hierarchy.

Provides user-friendly exceptions with helpful error messages and suggestions.
All designopt-specific exceptions inherit from DesignOptError for easy catching.

Example:
    try:
        result = await optimize_single_objective(catalog, evaluator)
    except DesignOptError as e:
        logger.error("Optimization failed: %s", e.message)
        logger.error("Suggestion: %s", e.suggestion)
"""

from __future__ import annotations

from typing import Any


class DesignOptError(Exception):
    """
    Base exception for all designopt errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(DesignOptError):
    """Raised when configuration is invalid or incomplete."""

    pass


class CatalogError(ConfigurationError):
    """Raised when the design variable catalog is empty or inconsistent."""

    def __init__(self, message: str, variable: str | None = None) -> None:
        suggestion = "Declare each variable once with a valid kind and consistent bounds, step or options"
        super().__init__(message, suggestion, {"variable": variable})


class ObjectiveError(ConfigurationError):
    """Raised when the objective set is empty or inconsistent."""

    def __init__(self, message: str, objective: str | None = None) -> None:
        suggestion = "Declare at least one objective with a unique name, a direction and a weight in [0, 1]"
        super().__init__(message, suggestion, {"objective": objective})


class InvalidParameterError(ConfigurationError):
    """Raised when a numeric run parameter is out of range."""

    def __init__(self, field: str, value: Any, expected: str) -> None:
        message = f"Invalid value for '{field}': {value!r}."
        suggestion = f"'{field}' must be {expected}"
        super().__init__(message, suggestion, {"field": field, "value": value})


class UnsupportedMethodError(ConfigurationError):
    """Raised when a multi-objective method or diversity strategy is not available."""

    def __init__(self, kind: str, name: str, available: list[str]) -> None:
        message = f"Unsupported {kind} '{name}'."
        suggestion = f"Available {kind} values: {', '.join(available)}"
        super().__init__(message, suggestion, {"kind": kind, "name": name, "available": available})


# =============================================================================
# Runtime Errors
# =============================================================================


class OptimizationError(DesignOptError):
    """Raised when optimization fails during execution."""

    pass


class EvaluationError(OptimizationError):
    """Raised when an evaluator result cannot be turned into objective values."""

    def __init__(self, message: str, objective: str | None = None) -> None:
        suggestion = "Check that the evaluator returns a finite number for every active objective"
        super().__init__(message, suggestion, {"objective": objective})


__all__ = [
    "DesignOptError",
    "ConfigurationError",
    "CatalogError",
    "ObjectiveError",
    "InvalidParameterError",
    "UnsupportedMethodError",
    "OptimizationError",
    "EvaluationError",
]

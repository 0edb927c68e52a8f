"""
Custom Error Types for the Ventilation Calculation System

Critical errors stop a calculation; non-critical errors are logged and the
calculation carries on. A degenerate (unachievable) result is not an error.
"""

import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class VentilationCalculationError(Exception):
    """Base exception for all ventilation calculation errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class CriticalError(VentilationCalculationError):
    """
    Critical errors that should stop processing.

    Examples:
    - Inputs failed validation
    - Saved calculation file is malformed
    - Invalid configuration
    """
    pass


class NonCriticalError(VentilationCalculationError):
    """
    Non-critical errors that can be logged but shouldn't stop processing.

    Examples:
    - Optional project information could not be read
    """
    pass


class ConfigurationError(CriticalError):
    """
    Configuration errors that prevent proper operation.

    Examples:
    - PORT is not an integer
    """
    pass


class ValidationError(CriticalError):
    """
    Input validation errors.

    Carries every offending field so a caller can highlight all of them at
    once. The calculation never runs past a validation failure.
    """

    def __init__(self, issues: List[Dict[str, str]], details: Optional[Dict[str, Any]] = None):
        """
        Args:
            issues: One {'field': ..., 'message': ...} entry per problem
            details: Additional context
        """
        self.issues = list(issues)
        self.fields = []
        for issue in self.issues:
            if issue["field"] not in self.fields:
                self.fields.append(issue["field"])
        message = "Validation failed: " + "; ".join(
            f"{issue['field']}: {issue['message']}" for issue in self.issues
        )
        super().__init__(message, details)


class SavedCalculationError(CriticalError):
    """
    A saved calculation record could not be read.

    Examples:
    - Not valid JSON
    - Missing 'inputs' section
    - Unsupported record version
    """
    pass


def log_error_with_context(error: VentilationCalculationError, context: Dict[str, Any]):
    """
    Log error with additional context information.

    Args:
        error: Error to log
        context: Additional context (project name, source file, etc.)
    """
    log_data = {
        'error_type': type(error).__name__,
        'error_message': error.message,
        'details': error.details,
        'context': context
    }

    if isinstance(error, CriticalError):
        logger.error(f"CRITICAL ERROR: {error.message}", extra=log_data)
    else:
        logger.warning(f"Non-critical error: {error.message}", extra=log_data)

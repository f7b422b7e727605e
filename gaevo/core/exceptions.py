"""
Custom exceptions for the gaevo genetic algorithm engine.

This module defines a hierarchy of exceptions raised when the engine is driven
with inputs that break its preconditions. None of them are retried internally.
"""

from typing import Optional, Any


class GAEvoException(Exception):
    """Base exception for errors."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(GAEvoException):
    """Raised when there are issues with configuration settings."""
    pass


class ValidationError(GAEvoException):
    """Raised when data or parameters fail validation."""
    pass


class EmptyPopulationError(ValidationError):
    """Raised when an operation needs candidates and none are available."""
    pass


class InvalidGenomeError(ValidationError):
    """Raised when a genome is not a permutation of the city indices."""
    pass


class DegenerateFitnessError(GAEvoException):
    """Raised when fitness cannot be computed or proportionally sampled."""
    pass

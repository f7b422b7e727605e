"""
Utility functions for gaevo.
"""

from .validators import (
    validate_permutation,
    validate_population,
    validate_fraction,
    validate_targets,
)

__all__ = [
    "validate_permutation",
    "validate_population",
    "validate_fraction",
    "validate_targets",
]

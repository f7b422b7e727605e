"""
Command Line Interface for gaevo.
"""

from .tsp import tsp_command

__all__ = [
    'tsp_command',
]

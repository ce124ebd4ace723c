"""
Utility modules for the PSO engine.

This package provides the seeded uniform-deviate source and the JSON
iteration trace writer.
"""

from .random_source import UniformSource
from .iteration_logger import IterationLogger

__all__ = [
    "UniformSource",
    "IterationLogger",
]

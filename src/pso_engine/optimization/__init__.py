"""
Optimization module for the PSO engine.

This module contains the manager that runs the particle swarm loop, together
with its pluggable strategies (topology, inertia schedule) and the parallel
batch evaluator.
"""

from .manager import Manager, ManagerState
from .config import ManagerConfig, IterationHistory
from .inertia import InertiaScaling, FixedInertiaScaling, LinearInertiaScaling
from .topology import Topology, RingTopology, GlobalTopology, create_topology
from .batch_evaluator import BatchEvaluator, BatchConfig, BatchStats, create_batch_evaluator

__all__ = [
    "Manager",
    "ManagerState",
    "ManagerConfig",
    "IterationHistory",
    "InertiaScaling",
    "FixedInertiaScaling",
    "LinearInertiaScaling",
    "Topology",
    "RingTopology",
    "GlobalTopology",
    "create_topology",
    "BatchEvaluator",
    "BatchConfig",
    "BatchStats",
    "create_batch_evaluator",
]

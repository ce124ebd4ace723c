"""
pso-engine: Particle Swarm Optimization over a normalized search space.
"""

__version__ = "0.1.0"

from .core import Particle, ParticleState, Swarm, WORST_POSSIBLE_FITNESS, worst_possible_fitness
from .optimization import (
    Manager,
    ManagerConfig,
    FixedInertiaScaling,
    LinearInertiaScaling,
    RingTopology,
    GlobalTopology,
    BatchEvaluator,
    create_batch_evaluator,
)
from .utils import UniformSource

__all__ = [
    "Particle",
    "ParticleState",
    "Swarm",
    "WORST_POSSIBLE_FITNESS",
    "worst_possible_fitness",
    "Manager",
    "ManagerConfig",
    "FixedInertiaScaling",
    "LinearInertiaScaling",
    "RingTopology",
    "GlobalTopology",
    "BatchEvaluator",
    "create_batch_evaluator",
    "UniformSource",
]

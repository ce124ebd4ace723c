"""
Core data structures for the PSO engine: value types, particles and the swarm.
"""

from .types import (
    Vector,
    Position,
    Velocity,
    Positions,
    Fitness,
    Fitnesses,
    Weight,
    ParticleId,
    WORST_POSSIBLE_FITNESS,
    worst_possible_fitness,
    is_within_bounds,
)
from .particle import Particle, ParticleState
from .swarm import Swarm

__all__ = [
    "Vector",
    "Position",
    "Velocity",
    "Positions",
    "Fitness",
    "Fitnesses",
    "Weight",
    "ParticleId",
    "WORST_POSSIBLE_FITNESS",
    "worst_possible_fitness",
    "is_within_bounds",
    "Particle",
    "ParticleState",
    "Swarm",
]

"""
Basic value types for the PSO engine.

Positions and velocities are plain float vectors in the algorithm's native,
normalized coordinate system where every dimension spans [-1, 1].
"""

import sys
from typing import List, Sequence

Vector = List[float]
Position = Vector
Velocity = Vector
Positions = List[Position]

Fitness = float
Fitnesses = List[Fitness]

Weight = float
ParticleId = int

# Largest representable float; marks a fitness as worst possible / invalid
WORST_POSSIBLE_FITNESS: Fitness = sys.float_info.max

LOWER_BOUND = -1.0
UPPER_BOUND = 1.0


def worst_possible_fitness() -> Fitness:
    """Return the sentinel fitness used for invalid or out-of-bounds positions."""
    return WORST_POSSIBLE_FITNESS


def is_within_bounds(position: Sequence[float]) -> bool:
    """
    Check whether every coordinate lies inside the canonical [-1, 1] box.

    Args:
        position: Position to check

    Returns:
        True if all coordinates are within bounds (inclusive)
    """
    return all(LOWER_BOUND <= x <= UPPER_BOUND for x in position)

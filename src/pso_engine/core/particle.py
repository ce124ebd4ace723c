"""
Particle data structure for the PSO engine.

This module defines the Particle class, which carries a particle's current and
personal-best states and applies the canonical PSO update equations:

    v[d] = w * v[d] + c1 * u1 * (best[d] - x[d]) + c2 * u2 * (social[d] - x[d])
    x[d] = x[d] + v[d]
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, TYPE_CHECKING

from .types import (
    Fitness,
    ParticleId,
    Position,
    Velocity,
    WORST_POSSIBLE_FITNESS,
    LOWER_BOUND,
    UPPER_BOUND,
    is_within_bounds,
)

if TYPE_CHECKING:
    from ..optimization.manager import Manager


@dataclass
class ParticleState:
    """
    Position, velocity and fitness of a particle at one point in time.

    Used both for a particle's current state and for its personal best.
    """

    position: Position
    velocity: Velocity
    fitness: Fitness = WORST_POSSIBLE_FITNESS

    def copy(self) -> "ParticleState":
        """Return a deep copy so that best and current never share vectors."""
        return ParticleState(list(self.position), list(self.velocity), self.fitness)

    def to_dict(self) -> Dict[str, Any]:
        """Convert state to a dictionary for serialization."""
        return {
            "position": list(self.position),
            "velocity": list(self.velocity),
            "fitness": self.fitness,
        }


class Particle:
    """
    A single member of the swarm.

    The particle keeps a non-owning reference to its Manager, which supplies
    the inertia/cognitive/social weights, uniform deviates, the social best
    and the constraint settings.

    Attributes:
        _manager: Owning manager (back-reference, never shared ownership)
        _id: Stable id, equal to the particle's index in the swarm
        _current: Current state, mutated every iteration
        _best: Personal best state, replaced only on strict improvement
    """

    State = ParticleState

    def __init__(self, manager: "Manager", initial_state: ParticleState, particle_id: ParticleId):
        """
        Initialize a Particle.

        Args:
            manager: Manager that owns this particle
            initial_state: Starting position/velocity (fitness defaults to worst possible)
            particle_id: Unique id within the manager
        """
        self._manager = manager
        self._id = particle_id
        self._current = initial_state.copy()
        self._best = initial_state.copy()

    @property
    def id(self) -> ParticleId:
        """Get the particle id."""
        return self._id

    @property
    def current(self) -> ParticleState:
        """Get the current state."""
        return self._current

    @property
    def best(self) -> ParticleState:
        """Get the personal best state."""
        return self._best

    @property
    def position(self) -> Position:
        """Get the current position."""
        return self._current.position

    @property
    def num_dimensions(self) -> int:
        return len(self._current.position)

    def iterate(self) -> None:
        """Advance the particle by one step: velocity, position, then constraints."""
        self.evolve_velocity()
        self.evolve_position()
        self.apply_position_and_velocity_constraint()

    def evolve_velocity(self) -> None:
        """
        Apply the velocity update equation to every dimension.

        Two fresh uniform(0, 1) deviates are drawn per dimension, cognitive
        first, then social.
        """
        manager = self._manager
        social_best = manager.social_best(self)

        w = manager.inertia_weight
        c1 = manager.cognitive_weight
        c2 = manager.social_weight

        x = self._current.position
        v = self._current.velocity
        best = self._best.position

        for d in range(len(v)):
            u1 = manager.uniform(0.0, 1.0)
            u2 = manager.uniform(0.0, 1.0)

            v_inertia = w * v[d]
            v_cognitive = c1 * u1 * (best[d] - x[d])
            v_social = c2 * u2 * (social_best[d] - x[d])

            v[d] = v_inertia + v_cognitive + v_social

        self.apply_velocity_constraint()

    def evolve_position(self) -> None:
        """Move the particle along its velocity."""
        x = self._current.position
        v = self._current.velocity
        for d in range(len(x)):
            x[d] = x[d] + v[d]

        self.apply_position_constraint()

    def apply_velocity_constraint(self) -> None:
        """Clamp each velocity component to +/- the manager's speed cap, if enabled."""
        if not self._manager.is_enabled_max_speed_per_dimension:
            return

        cap = self._manager.max_speed_per_dimension
        v = self._current.velocity
        for d in range(len(v)):
            if v[d] > cap:
                v[d] = cap
            elif v[d] < -cap:
                v[d] = -cap

    def apply_position_constraint(self) -> None:
        """
        Bound the position according to the manager's boundary policy.

        The "soft" policy leaves the position untouched; out-of-bounds
        positions are penalized later in update_fitness. The "clamp" policy
        clips each coordinate into [-1, 1].
        """
        if self._manager.boundary_policy != "clamp":
            return

        x = self._current.position
        for d in range(len(x)):
            x[d] = min(max(x[d], LOWER_BOUND), UPPER_BOUND)

    def apply_position_and_velocity_constraint(self) -> None:
        """Zero velocity components that push into a wall under the "clamp" policy."""
        if self._manager.boundary_policy != "clamp":
            return

        x = self._current.position
        v = self._current.velocity
        for d in range(len(x)):
            if (x[d] == UPPER_BOUND and v[d] > 0.0) or (x[d] == LOWER_BOUND and v[d] < 0.0):
                v[d] = 0.0

    def update_fitness(self, fitness: Fitness) -> None:
        """
        Set the fitness of the current position and update the personal best.

        Positions outside the canonical bounds and NaN fitnesses are forced to
        the worst possible fitness regardless of the value passed in.

        Args:
            fitness: Raw fitness returned by the objective function
        """
        fitness = float(fitness)
        if math.isnan(fitness) or not is_within_bounds(self._current.position):
            fitness = WORST_POSSIBLE_FITNESS

        self._current.fitness = fitness
        self._update_best()

    def _update_best(self) -> None:
        # Strict improvement only; ties keep the first-found best
        if self._current.fitness < self._best.fitness:
            self._best = self._current.copy()

    def to_dict(self) -> Dict[str, Any]:
        """Convert particle to a dictionary for logging."""
        return {
            "id": self._id,
            "current": self._current.to_dict(),
            "best": self._best.to_dict(),
        }

    def __repr__(self) -> str:
        """String representation of the particle."""
        return (
            f"Particle(id={self._id}, "
            f"fitness={self._current.fitness:.6g}, "
            f"best_fitness={self._best.fitness:.6g})"
        )


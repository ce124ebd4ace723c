"""
Swarm management for the PSO engine.

This module defines the Swarm class, a dense id-indexed container of particles
(particle id == list index) with best-state lookup and summary statistics.
"""

from typing import Any, Dict, Iterator, List, Optional
import numpy as np

from .particle import Particle
from .types import ParticleId, Position, WORST_POSSIBLE_FITNESS


class Swarm:
    """
    Owns the particles of one Manager.

    Particles are never shared outside the swarm's manager; the swarm hands
    out read access by id and rebuilds itself on reset.

    Attributes:
        particles: Particles, indexed by id
    """

    def __init__(self, particles: Optional[List[Particle]] = None):
        """
        Initialize a Swarm.

        Args:
            particles: Initial particles (empty if None); ids must match indices
        """
        self.particles = particles if particles is not None else []

    @property
    def size(self) -> int:
        """Get the current swarm size."""
        return len(self.particles)

    def is_empty(self) -> bool:
        """Check if the swarm is empty."""
        return len(self.particles) == 0

    def add(self, particle: Particle) -> None:
        """
        Append a particle to the swarm.

        Args:
            particle: Particle whose id equals the current swarm size
        """
        if particle.id != len(self.particles):
            raise ValueError(
                f"Particle id {particle.id} does not match next swarm index {len(self.particles)}"
            )
        self.particles.append(particle)

    def clear(self) -> None:
        """Destroy all particles."""
        self.particles = []

    def get(self, particle_id: ParticleId) -> Particle:
        """
        Get a particle by id.

        Args:
            particle_id: Id of the particle

        Returns:
            The particle

        Raises:
            IndexError: If the id is outside [0, size)
        """
        if not 0 <= particle_id < len(self.particles):
            raise IndexError(
                f"Particle id {particle_id} out of range for swarm of size {len(self.particles)}"
            )
        return self.particles[particle_id]

    def best_particle(self) -> Optional[Particle]:
        """
        Find the particle whose personal best fitness is lowest.

        Linear scan with strict less-than, so the lowest id wins ties.

        Returns:
            Best particle, or None for an empty swarm
        """
        if not self.particles:
            return None

        best = self.particles[0]
        for particle in self.particles[1:]:
            if particle.best.fitness < best.best.fitness:
                best = particle
        return best

    def positions(self) -> List[Position]:
        """Copies of all current positions, ordered by particle id."""
        return [list(p.position) for p in self.particles]

    def statistics(self) -> Dict[str, Any]:
        """
        Compute swarm statistics over valid (non-sentinel) fitnesses.

        Returns:
            Dictionary containing swarm statistics
        """
        if not self.particles:
            return {
                "size": 0,
                "valid": 0,
                "out_of_bounds": 0,
                "avg_fitness": None,
                "best_fitness": None,
                "worst_fitness": None,
                "best_personal_fitness": None,
            }

        current = [p.current.fitness for p in self.particles]
        valid = [f for f in current if f != WORST_POSSIBLE_FITNESS]
        best = self.best_particle()

        return {
            "size": len(self.particles),
            "valid": len(valid),
            "out_of_bounds": len(current) - len(valid),
            "avg_fitness": float(np.mean(valid)) if valid else None,
            "best_fitness": float(np.min(valid)) if valid else None,
            "worst_fitness": float(np.max(valid)) if valid else None,
            "best_personal_fitness": best.best.fitness,
        }

    def __repr__(self) -> str:
        """String representation of the swarm."""
        best = self.best_particle()
        best_str = f"{best.best.fitness:.6g}" if best is not None else "None"
        return f"Swarm(size={self.size}, best_fitness={best_str})"

    def __len__(self) -> int:
        """Get the swarm size."""
        return len(self.particles)

    def __iter__(self) -> Iterator[Particle]:
        """Iterate over particles in id order."""
        return iter(self.particles)

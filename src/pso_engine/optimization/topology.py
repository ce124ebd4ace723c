"""
Particle communication topologies.

A topology decides, for every particle, which peers' personal bests are
visible to it and exposes the best of them as the particle's social best.
Topologies never own particles; they look them up on the manager by id.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, TYPE_CHECKING

from ..core.particle import Particle
from ..core.types import ParticleId, Position

if TYPE_CHECKING:
    from .manager import Manager

logger = logging.getLogger(__name__)

TOPOLOGIES = ("ring", "global")


class Topology(ABC):
    """
    Interface to particle communication topologies.

    `update()` is called once per iteration before any particle moves, so a
    strategy can precompute neighborhood bests in bulk. `social_best()` is
    called once per particle per iteration while particles evolve.
    """

    def __init__(self, manager: "Manager"):
        self._manager = manager

    @property
    def manager(self) -> "Manager":
        return self._manager

    @abstractmethod
    def update(self) -> None:
        """Refresh any cached neighborhood state from the particles' bests."""

    @abstractmethod
    def neighbor_ids(self, particle_id: ParticleId) -> List[ParticleId]:
        """Return the ids visible to the given particle (including itself)."""

    def social_best(self, asker: Particle) -> Position:
        """
        Get the best personal-best position among the asker's neighbors.

        Args:
            asker: Particle asking for its social best

        Returns:
            Best position of the neighbor with the lowest best fitness
        """
        best_id = self.best_neighbor_id(self.neighbor_ids(asker.id))
        return self._manager.particle(best_id).best.position

    def best_neighbor_id(self, neighbors: List[ParticleId]) -> ParticleId:
        """Linear scan with strict less-than; the first minimum wins ties."""
        best_id = neighbors[0]
        best_fitness = self._manager.particle(best_id).best.fitness
        for pid in neighbors[1:]:
            fitness = self._manager.particle(pid).best.fitness
            if fitness < best_fitness:
                best_id = pid
                best_fitness = fitness
        return best_id


class RingTopology(Topology):
    """
    Ring neighborhood over the particle ids.

    The neighborhood of particle `i` is the `num_neighbors` consecutive ids
    starting at `i - offset`, walking forward and wrapping around the swarm.
    The defaults (2, 0) give the forward window {i, i + 1}; setting
    num_neighbors=3, offset=1 gives the symmetric {i - 1, i, i + 1}.
    Social bests are resolved lazily on every query.
    """

    def __init__(self, manager: "Manager", num_neighbors: int = 2, offset: int = 0):
        """
        Initialize the ring.

        Args:
            manager: Manager that owns the particles
            num_neighbors: Window width (>= 1)
            offset: How many ids before `i` the window starts (>= 0)
        """
        super().__init__(manager)
        if num_neighbors < 1:
            raise ValueError("num_neighbors must be at least 1")
        if offset < 0:
            raise ValueError("offset must be non-negative")
        self._num_neighbors = num_neighbors
        self._offset = offset

    @property
    def num_neighbors(self) -> int:
        return self._num_neighbors

    @property
    def offset(self) -> int:
        return self._offset

    def update(self) -> None:
        pass

    def wrapped_id(self, index: int) -> ParticleId:
        """
        Map any integer index onto a valid particle id.

        Args:
            index: Possibly out-of-range index (negative or >= swarm size)

        Returns:
            index modulo the swarm size
        """
        return index % self._manager.num_particles

    def neighbor_ids(self, particle_id: ParticleId) -> List[ParticleId]:
        start = particle_id - self._offset
        return [self.wrapped_id(start + i) for i in range(self._num_neighbors)]

    def __repr__(self) -> str:
        return f"RingTopology(num_neighbors={self._num_neighbors}, offset={self._offset})"


class GlobalTopology(Topology):
    """
    Fully connected (gbest) topology: every particle sees the whole swarm.

    The swarm-wide best is located once per iteration in update(), which
    keeps each social_best() query O(1).
    """

    def __init__(self, manager: "Manager"):
        super().__init__(manager)
        self._best_id: Optional[ParticleId] = None

    def update(self) -> None:
        self._best_id = self.best_neighbor_id(list(range(self._manager.num_particles)))

    def neighbor_ids(self, particle_id: ParticleId) -> List[ParticleId]:
        return list(range(self._manager.num_particles))

    def social_best(self, asker: Particle) -> Position:
        if self._best_id is None:
            self.update()
        return self._manager.particle(self._best_id).best.position

    def __repr__(self) -> str:
        return f"GlobalTopology(best_id={self._best_id})"


def create_topology(
    manager: "Manager",
    name: str = "ring",
    num_neighbors: int = 2,
    offset: int = 0
) -> Topology:
    """
    Build a topology by name.

    Args:
        manager: Manager that owns the particles
        name: "ring" or "global"
        num_neighbors: Ring window width
        offset: Ring window start offset

    Returns:
        Topology instance
    """
    name = name.lower()
    if name == "ring":
        return RingTopology(manager, num_neighbors=num_neighbors, offset=offset)
    if name == "global":
        return GlobalTopology(manager)
    raise ValueError(f"Unknown topology: {name}")

"""
Unit tests for particle communication topologies.
"""

import pytest

from pso_engine.optimization.config import ManagerConfig
from pso_engine.optimization.manager import Manager
from pso_engine.optimization.topology import (
    GlobalTopology,
    RingTopology,
    create_topology,
)


def make_manager(num_particles=5, fitnesses=None, **config_overrides):
    """Build a small manager and assign known personal-best fitnesses."""
    config = ManagerConfig(**config_overrides)
    manager = Manager(
        3,
        2,
        num_particles,
        10,
        config=config,
        objective=lambda positions: [0.0] * len(positions),
    )
    for pid, fitness in enumerate(fitnesses or []):
        manager.particle(pid).update_fitness(fitness)
    return manager


class TestRingTopology:
    """Test cases for RingTopology."""

    def test_default_forward_window(self):
        """Test that the default window is {i, i + 1}."""
        manager = make_manager()
        ring = RingTopology(manager)

        assert ring.neighbor_ids(0) == [0, 1]
        assert ring.neighbor_ids(2) == [2, 3]

    def test_last_particle_wraps_to_first(self):
        """Test wraparound at the end of the swarm."""
        manager = make_manager()
        ring = RingTopology(manager)

        assert ring.neighbor_ids(4) == [4, 0]

    def test_symmetric_window_wraps_backwards(self):
        """Test a {i - 1, i, i + 1} window at the start of the swarm."""
        manager = make_manager()
        ring = RingTopology(manager, num_neighbors=3, offset=1)

        assert ring.neighbor_ids(0) == [4, 0, 1]
        assert ring.neighbor_ids(4) == [3, 4, 0]

    @pytest.mark.parametrize("index,expected", [(-1, 4), (5, 0), (7, 2), (-6, 4), (3, 3)])
    def test_wrapped_id(self, index, expected):
        """Test that any integer maps into [0, num_particles)."""
        ring = RingTopology(make_manager())

        assert ring.wrapped_id(index) == expected

    def test_single_particle_is_its_own_neighbor(self):
        """Test a swarm of one."""
        manager = make_manager(num_particles=1)
        ring = RingTopology(manager)

        assert ring.neighbor_ids(0) == [0, 0]
        assert ring.social_best(manager.particle(0)) == manager.particle(0).best.position

    def test_social_best_picks_lowest_fitness(self):
        """Test that the neighbor with the lowest best fitness wins."""
        manager = make_manager(fitnesses=[5.0, 4.0, 3.0, 2.0, 1.0])
        ring = RingTopology(manager)

        assert ring.social_best(manager.particle(0)) == manager.particle(1).best.position
        # Particle 4 sees itself and particle 0; itself is better
        assert ring.social_best(manager.particle(4)) == manager.particle(4).best.position

    def test_social_best_tie_goes_to_first_in_window(self):
        """Test that ties keep the first neighbor visited."""
        manager = make_manager(fitnesses=[1.0, 1.0, 1.0, 1.0, 1.0])
        ring = RingTopology(manager, num_neighbors=3, offset=1)

        assert ring.best_neighbor_id(ring.neighbor_ids(0)) == 4

    def test_social_best_is_resolved_lazily(self):
        """Test that best changes are visible without calling update()."""
        manager = make_manager(fitnesses=[5.0, 4.0, 3.0, 2.0, 1.0])
        ring = RingTopology(manager)

        manager.particle(0).current.position[:] = [0.0, 0.0]
        manager.particle(0).update_fitness(0.5)

        assert ring.social_best(manager.particle(0)) == [0.0, 0.0]

    @pytest.mark.parametrize("num_neighbors,offset", [(0, 0), (2, -1)])
    def test_invalid_window(self, num_neighbors, offset):
        """Test window validation."""
        with pytest.raises(ValueError):
            RingTopology(make_manager(), num_neighbors=num_neighbors, offset=offset)


class TestGlobalTopology:
    """Test cases for GlobalTopology."""

    def test_everyone_sees_swarm_best(self):
        """Test that every particle gets the swarm-wide best."""
        manager = make_manager(fitnesses=[5.0, 4.0, 0.5, 2.0, 1.0])
        topology = GlobalTopology(manager)
        topology.update()

        for pid in range(5):
            assert topology.social_best(manager.particle(pid)) == manager.particle(2).best.position

    def test_best_is_cached_until_update(self):
        """Test that the best id is only refreshed by update()."""
        manager = make_manager(fitnesses=[5.0, 4.0, 0.5, 2.0, 1.0])
        topology = GlobalTopology(manager)
        topology.update()

        manager.particle(3).update_fitness(0.1)
        assert topology.social_best(manager.particle(0)) == manager.particle(2).best.position

        topology.update()
        assert topology.social_best(manager.particle(0)) == manager.particle(3).best.position

    def test_neighbor_ids(self):
        """Test that the neighborhood is the whole swarm."""
        topology = GlobalTopology(make_manager())

        assert topology.neighbor_ids(3) == [0, 1, 2, 3, 4]


class TestCreateTopology:
    """Test cases for the topology factory."""

    def test_create_ring(self):
        """Test building a ring by name."""
        topology = create_topology(make_manager(), "ring", num_neighbors=3, offset=1)

        assert isinstance(topology, RingTopology)
        assert topology.num_neighbors == 3
        assert topology.offset == 1

    def test_create_global_case_insensitive(self):
        """Test building a global topology by name."""
        assert isinstance(create_topology(make_manager(), "Global"), GlobalTopology)

    def test_unknown_topology(self):
        """Test that unknown names are rejected."""
        with pytest.raises(ValueError, match="Unknown topology"):
            create_topology(make_manager(), "star")

    def test_manager_uses_configured_topology(self):
        """Test that the manager builds the topology from its config."""
        manager = make_manager(topology="global")

        assert isinstance(manager.topology, GlobalTopology)

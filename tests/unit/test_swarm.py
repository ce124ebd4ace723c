"""
Unit tests for Swarm class.
"""

import pytest

from pso_engine.core.particle import Particle, ParticleState
from pso_engine.core.swarm import Swarm
from pso_engine.core.types import WORST_POSSIBLE_FITNESS


class TestSwarm:
    """Test cases for Swarm class."""

    def test_swarm_creation(self):
        """Test creating an empty swarm."""
        swarm = Swarm()
        assert swarm.size == 0
        assert swarm.is_empty()
        assert swarm.best_particle() is None

    def test_swarm_with_particles(self, sample_swarm):
        """Test a populated swarm."""
        assert sample_swarm.size == 5
        assert not sample_swarm.is_empty()

    def test_add_requires_matching_id(self, mock_manager):
        """Test that particle ids must equal their index."""
        swarm = Swarm()

        with pytest.raises(ValueError, match="does not match next swarm index"):
            swarm.add(Particle(mock_manager, ParticleState([0.0], [0.0]), 3))

    def test_get_by_id(self, sample_swarm):
        """Test id lookup."""
        assert sample_swarm.get(2).id == 2

    @pytest.mark.parametrize("bad_id", [-1, 5, 100])
    def test_get_out_of_range(self, sample_swarm, bad_id):
        """Test that bad ids raise instead of returning a default particle."""
        with pytest.raises(IndexError):
            sample_swarm.get(bad_id)

    def test_best_particle(self, sample_swarm):
        """Test locating the lowest best fitness."""
        best = sample_swarm.best_particle()

        assert best.id == 4
        assert best.best.fitness == 1.0

    def test_best_particle_first_on_ties(self, mock_manager):
        """Test that the lowest id wins a tie."""
        swarm = Swarm()
        for i, fitness in enumerate([3.0, 1.0, 1.0, 2.0]):
            particle = Particle(mock_manager, ParticleState([0.0], [0.0]), i)
            particle.update_fitness(fitness)
            swarm.add(particle)

        assert swarm.best_particle().id == 1

    def test_positions_are_copies_in_id_order(self, sample_swarm):
        """Test that the batch of positions is ordered and detached."""
        positions = sample_swarm.positions()

        assert [p[0] for p in positions] == [pytest.approx(0.1 * i) for i in range(5)]

        positions[0][0] = 0.99
        assert sample_swarm.get(0).position[0] == 0.0

    def test_clear(self, sample_swarm):
        """Test destroying all particles."""
        sample_swarm.clear()

        assert len(sample_swarm) == 0

    def test_statistics(self, sample_swarm):
        """Test swarm statistics."""
        stats = sample_swarm.statistics()

        assert stats["size"] == 5
        assert stats["valid"] == 5
        assert stats["out_of_bounds"] == 0
        assert stats["avg_fitness"] == pytest.approx(3.0)
        assert stats["best_fitness"] == 1.0
        assert stats["worst_fitness"] == 5.0
        assert stats["best_personal_fitness"] == 1.0

    def test_statistics_exclude_out_of_bounds(self, mock_manager):
        """Test that sentinel fitnesses are counted separately."""
        swarm = Swarm()
        inside = Particle(mock_manager, ParticleState([0.0], [0.0]), 0)
        inside.update_fitness(2.0)
        outside = Particle(mock_manager, ParticleState([1.5], [0.0]), 1)
        outside.update_fitness(0.0)
        swarm.add(inside)
        swarm.add(outside)

        stats = swarm.statistics()

        assert stats["valid"] == 1
        assert stats["out_of_bounds"] == 1
        assert stats["best_fitness"] == 2.0
        assert outside.current.fitness == WORST_POSSIBLE_FITNESS

    def test_statistics_empty(self):
        """Test statistics for an empty swarm."""
        stats = Swarm().statistics()

        assert stats["size"] == 0
        assert stats["avg_fitness"] is None
        assert stats["best_personal_fitness"] is None

    def test_len_and_iteration(self, sample_swarm):
        """Test __len__ and __iter__."""
        assert len(sample_swarm) == 5
        assert [p.id for p in sample_swarm] == [0, 1, 2, 3, 4]

    def test_repr(self, sample_swarm):
        """Test string representation."""
        repr_str = repr(sample_swarm)

        assert "Swarm" in repr_str
        assert "size=5" in repr_str

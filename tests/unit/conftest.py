"""
Fixtures for unit tests.
"""

import pytest
from unittest.mock import MagicMock

from pso_engine.core.particle import Particle, ParticleState
from pso_engine.core.swarm import Swarm


@pytest.fixture
def mock_manager():
    """Create a manager stand-in with fixed weights and no constraints."""
    manager = MagicMock()
    manager.inertia_weight = 0.5
    manager.cognitive_weight = 0.0
    manager.social_weight = 0.0
    manager.uniform.return_value = 0.5
    manager.social_best.return_value = [0.0, 0.0]
    manager.is_enabled_max_speed_per_dimension = False
    manager.max_speed_per_dimension = 1.0
    manager.boundary_policy = "soft"
    return manager


@pytest.fixture
def sample_particle(mock_manager):
    """Create a 2-D particle in the middle of the search space."""
    return Particle(mock_manager, ParticleState([0.2, -0.4], [0.1, 0.3]), 0)


@pytest.fixture
def sample_swarm(mock_manager):
    """Create a swarm of 5 particles with best fitnesses 5, 4, 3, 2, 1."""
    swarm = Swarm()
    for i in range(5):
        particle = Particle(mock_manager, ParticleState([0.1 * i, 0.0], [0.0, 0.0]), i)
        particle.update_fitness(5.0 - i)
        swarm.add(particle)
    return swarm

"""
Unit tests for the JSON iteration logger.
"""

import json

import pytest

from pso_engine.core.particle import Particle, ParticleState
from pso_engine.utils.iteration_logger import IterationLogger


@pytest.fixture
def particles():
    particles = []
    for i in range(3):
        particle = Particle(None, ParticleState([0.1 * i], [0.0]), i)
        particle.update_fitness(float(i))
        particles.append(particle)
    return particles


class TestIterationLogger:
    """Test suite for IterationLogger."""

    def test_creates_run_directory(self, tmp_path):
        logger = IterationLogger(tmp_path, "abc")

        assert logger.output_dir == tmp_path / "run_abc"
        assert logger.output_dir.is_dir()

    def test_log_initial_swarm(self, tmp_path, particles):
        """Test the initial swarm file."""
        logger = IterationLogger(tmp_path, "abc")

        logger.log_initial_swarm(particles)

        with open(tmp_path / "run_abc" / "trial_0_initial.json") as f:
            data = json.load(f)

        assert data["phase"] == "initial_swarm"
        assert data["iteration"] == 0
        assert len(data["particles"]) == 3
        assert data["particles"][2]["id"] == 2

    def test_log_iteration(self, tmp_path, particles):
        """Test the per-iteration file."""
        logger = IterationLogger(tmp_path, "abc")
        stats = {"size": 3, "best_personal_fitness": 0.0}

        logger.log_iteration(particles, 4, 0.7, stats, trial=2)

        with open(tmp_path / "run_abc" / "trial_2_iteration_4.json") as f:
            data = json.load(f)

        assert data["trial"] == 2
        assert data["iteration"] == 4
        assert data["inertia_weight"] == 0.7
        assert data["statistics"] == stats

    def test_log_final_best(self, tmp_path, particles):
        """Test the final best file."""
        logger = IterationLogger(tmp_path, "abc")

        logger.log_final_best(particles[0], 10)

        with open(tmp_path / "run_abc" / "trial_0_final_best.json") as f:
            data = json.load(f)

        assert data["particle_id"] == 0
        assert data["final_iteration"] == 10
        assert data["fitness"] == 0.0
        assert data["position"] == [0.0]

    def test_write_failure_is_logged(self, tmp_path, particles, caplog):
        """Test that I/O errors do not abort the run."""
        logger = IterationLogger(tmp_path, "abc")
        logger.output_dir = tmp_path / "missing"

        logger.log_final_best(particles[0], 1)

        assert "Failed to save trial_0_final_best.json" in caplog.text

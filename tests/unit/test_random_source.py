"""
Unit tests for UniformSource class.
"""

import numpy as np

from pso_engine.utils.random_source import UniformSource


class TestUniformSource:
    """Test cases for UniformSource class."""

    def test_matches_numpy_generator(self):
        """Test that deviates follow numpy's default_rng stream."""
        source = UniformSource(123)
        rng = np.random.default_rng(123)

        drawn = [source.uniform(-1.0, 1.0) for _ in range(5)]
        expected = [float(rng.uniform(-1.0, 1.0)) for _ in range(5)]

        assert drawn == expected

    def test_same_seed_same_sequence(self):
        """Test reproducibility across instances."""
        a = UniformSource(7)
        b = UniformSource(7)

        assert [a.uniform(0, 1) for _ in range(10)] == [b.uniform(0, 1) for _ in range(10)]

    def test_returns_python_float_within_bounds(self):
        """Test the type and range of deviates."""
        source = UniformSource(0)

        for _ in range(100):
            value = source.uniform(0.0, 1.0)
            assert isinstance(value, float)
            assert 0.0 <= value < 1.0

    def test_default_bounds(self):
        """Test that the default range is [-1, 1)."""
        source = UniformSource(0)

        values = [source() for _ in range(100)]

        assert all(-1.0 <= v < 1.0 for v in values)
        assert any(v < 0.0 for v in values)

    def test_draw_counter(self):
        """Test counting consumed deviates."""
        source = UniformSource(1)

        for _ in range(6):
            source.uniform()

        assert source.draws == 6

    def test_reseed_restarts_stream(self):
        """Test that reseeding replays the sequence."""
        source = UniformSource(5)
        first = [source.uniform() for _ in range(3)]

        source.reseed()

        assert source.draws == 0
        assert [source.uniform() for _ in range(3)] == first

    def test_reseed_with_new_seed(self):
        """Test switching to another seed."""
        source = UniformSource(5)

        source.reseed(9)

        assert source.seed == 9
        assert source.uniform() == UniformSource(9).uniform()

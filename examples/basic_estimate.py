#!/usr/bin/env python3
"""
Basic example of using the PSO Manager.

This script demonstrates how to:
1. Run the minimal 1-D, 2-particle, 2-iteration swarm
2. Configure a larger run with a linear inertia schedule
3. Evaluate positions in parallel with a BatchEvaluator
4. Repeat independent trials with reset()
"""

import logging
from pathlib import Path

import numpy as np

from pso_engine.optimization.manager import Manager
from pso_engine.optimization.config import ManagerConfig
from pso_engine.optimization.batch_evaluator import create_batch_evaluator

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def sphere(position):
    """Shifted sphere with its minimum at 0.25 in every dimension."""
    x = np.asarray(position, dtype=float) - 0.25
    return float(np.dot(x, x))


def sphere_batch(positions):
    return [sphere(p) for p in positions]


def minimal_swarm():
    """Example: the smallest possible swarm."""

    logger.info("=" * 60)
    logger.info("EXAMPLE 1: Minimal swarm")
    logger.info("=" * 60)

    manager = Manager(
        seed=1,
        num_dimensions=1,
        num_particles=2,
        num_iterations=2,
        objective=sphere_batch
    )
    manager.estimate()

    logger.info(f"Estimate: {manager.get_estimate()} (fitness {manager.get_fitness():.6g})")


def linear_inertia_swarm(evaluator):
    """Example: linear inertia, velocity cap and parallel evaluation."""

    logger.info("=" * 60)
    logger.info("EXAMPLE 2: Linear inertia with parallel evaluation")
    logger.info("=" * 60)

    config_path = Path(__file__).parent.parent / "config" / "default.yaml"
    config = ManagerConfig.from_yaml(config_path) if config_path.exists() else ManagerConfig()

    manager = Manager(
        42,
        5,
        30,
        200,
        0.9,
        0.4,
        1.5,
        1.5,
        config=config,
        objective=evaluator,
    )
    manager.max_speed_per_dimension = 0.5
    manager.enable_max_speed_per_dimension()

    best = manager.estimate()

    logger.info(f"Estimate: {np.round(best, 4).tolist()} (fitness {manager.get_fitness():.3e})")
    logger.info(f"Evaluations: {evaluator.stats.evaluations}, "
                f"time: {evaluator.stats.total_time:.2f}s")

    return manager


def repeated_trials(manager: Manager, n_trials: int = 3):
    """Example: independent trials on the same manager."""

    logger.info("=" * 60)
    logger.info("EXAMPLE 3: Repeated trials")
    logger.info("=" * 60)

    fitnesses = []
    for trial in range(n_trials):
        manager.reset()
        manager.estimate()
        fitnesses.append(manager.get_fitness())
        logger.info(f"Trial {trial + 1}: fitness {fitnesses[-1]:.3e}")

    logger.info(f"Mean fitness over {n_trials} trials: {np.mean(fitnesses):.3e}")


def main():
    minimal_swarm()

    # One thread pool serves every batch of both examples
    with create_batch_evaluator(sphere, max_workers=4) as evaluator:
        manager = linear_inertia_swarm(evaluator)
        repeated_trials(manager)


if __name__ == "__main__":
    main()

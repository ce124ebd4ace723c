"""
PSO manager.

This module implements the manager that owns the swarm, the topology, the
inertia schedule and the uniform-deviate source, and runs the iteration loop
with a single batched fitness evaluation per iteration.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..core.particle import Particle, ParticleState
from ..core.swarm import Swarm
from ..core.types import Fitness, ParticleId, Position, Positions, Velocity, Weight
from ..utils.random_source import UniformSource
from .config import (
    ManagerConfig,
    IterationHistory,
    DEFAULT_COGNITIVE_WEIGHT,
    DEFAULT_SOCIAL_WEIGHT,
)
from .inertia import (
    InertiaScaling,
    FixedInertiaScaling,
    LinearInertiaScaling,
    DEFAULT_INERTIA_WEIGHT,
)
from .topology import Topology, create_topology

logger = logging.getLogger(__name__)

ObjectiveFunction = Callable[[Positions], Sequence[Fitness]]


class ManagerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


class Manager:
    """
    Particle swarm manager.

    Orchestrates the optimization of one objective over the normalized
    [-1, 1]^N search space. Each iteration:

    1. refreshes the topology,
    2. moves every particle (velocity, position, constraints),
    3. evaluates all current positions in one batch,
    4. feeds the fitnesses back to the particles in order,
    5. advances the iteration counter.

    Because every particle moves before any fitness is fed back, social-best
    lookups always see the personal bests left by the previous iteration.

    The objective is supplied either as the `objective` argument or by
    overriding `evaluate_function` in a subclass.

    Example usage:
        ```python
        def sphere(positions):
            return [sum(x * x for x in p) for p in positions]

        manager = Manager(seed=42, num_dimensions=2, num_particles=20,
                          num_iterations=100, objective=sphere)
        best_position = manager.estimate()
        best_fitness = manager.get_fitness()
        ```
    """

    def __init__(
        self,
        seed: Optional[int],
        num_dimensions: int,
        num_particles: int,
        num_iterations: int,
        inertia_start: Optional[Weight] = None,
        inertia_end: Optional[Weight] = None,
        cognitive: Optional[Weight] = None,
        social: Optional[Weight] = None,
        *,
        config: Optional[ManagerConfig] = None,
        objective: Optional[ObjectiveFunction] = None,
        rng: Optional[UniformSource] = None,
        output_dir: Optional[Path] = None,
        run_id: Optional[str] = None
    ):
        """
        Initialize the manager and create the swarm.

        Passing all of (inertia_start, inertia_end, cognitive, social) selects
        the linear inertia schedule with those weights. Otherwise the weights
        and schedule come from `config` (standard constriction weights by
        default).

        Args:
            seed: Seed for the uniform-deviate source
            num_dimensions: Search-space dimensionality (>= 1)
            num_particles: Swarm size (>= 1)
            num_iterations: Iteration budget (>= 0)
            inertia_start: Linear schedule start weight
            inertia_end: Linear schedule end weight
            cognitive: Cognitive weight for the linear mode
            social: Social weight for the linear mode
            config: Manager configuration (defaults to ManagerConfig())
            objective: Batch objective function (optional if subclassing)
            rng: Injected uniform-deviate source (defaults to UniformSource(seed))
            output_dir: Output directory for the JSON iteration trace (optional)
            run_id: Run id for the JSON iteration trace (optional)
        """
        if num_dimensions < 1:
            raise ValueError("num_dimensions must be at least 1")
        if num_particles < 1:
            raise ValueError("num_particles must be at least 1")
        if num_iterations < 0:
            raise ValueError("num_iterations must be non-negative")

        linear_args = (inertia_start, inertia_end, cognitive, social)
        if any(a is not None for a in linear_args) and not all(a is not None for a in linear_args):
            raise ValueError(
                "inertia_start, inertia_end, cognitive and social must be given together"
            )

        self.config = config if config is not None else ManagerConfig()
        self._seed = seed
        self._num_dimensions = num_dimensions
        self._num_particles = num_particles
        self._num_iterations = num_iterations
        self._objective = objective

        # State tracking
        self._iteration: int = 0
        self._trial: int = 0
        self._state = ManagerState.IDLE
        self.history: List[IterationHistory] = []

        self._rng = rng if rng is not None else UniformSource(seed)

        self._max_speed_per_dimension = self.config.max_speed_per_dimension
        self._max_speed_enabled = self.config.enable_max_speed

        if all(a is not None for a in linear_args):
            self._cognitive_weight = cognitive
            self._social_weight = social
            self._inertia: InertiaScaling = LinearInertiaScaling(self, inertia_start, inertia_end)
        elif self.config.is_linear:
            self._cognitive_weight = self.config.cognitive_weight
            self._social_weight = self.config.social_weight
            self._inertia = LinearInertiaScaling(
                self, self.config.inertia_start, self.config.inertia_end
            )
        else:
            self._cognitive_weight = self.config.cognitive_weight
            self._social_weight = self.config.social_weight
            self._inertia = FixedInertiaScaling(self.config.inertia_weight)

        self._topology: Topology = create_topology(
            self,
            self.config.topology,
            num_neighbors=self.config.ring_neighbors,
            offset=self.config.ring_offset,
        )

        # Iteration logger (optional, for detailed JSON traces)
        self.iteration_logger = None
        if output_dir and run_id:
            from ..utils.iteration_logger import IterationLogger
            self.iteration_logger = IterationLogger(output_dir, run_id)

        # Configure logging
        logging.getLogger().setLevel(getattr(logging, self.config.log_level))

        self._swarm = Swarm()
        self._create_particles(num_particles)

        logger.info(
            f"Initialized Manager with {num_particles} particles, {num_dimensions} dimensions, "
            f"{num_iterations} iterations ({self._inertia!r}, {self._topology!r})"
        )

    # ------------------------------------------------------------------
    # Query surface
    # ------------------------------------------------------------------

    @property
    def num_particles(self) -> int:
        return self._num_particles

    @property
    def num_iterations(self) -> int:
        return self._num_iterations

    @property
    def num_dimensions(self) -> int:
        return self._num_dimensions

    @property
    def iteration(self) -> int:
        """Number of completed iterations since construction or the last reset."""
        return self._iteration

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @property
    def state(self) -> ManagerState:
        return self._state

    @property
    def topology(self) -> Topology:
        return self._topology

    @property
    def inertia_scaling(self) -> InertiaScaling:
        return self._inertia

    def particle(self, particle_id: ParticleId) -> Particle:
        """
        Get read access to a particle by id.

        Raises:
            IndexError: If the id is outside [0, num_particles)
        """
        return self._swarm.get(particle_id)

    def get_estimate(self) -> Position:
        """Best position found so far (copy)."""
        return list(self._swarm.best_particle().best.position)

    def get_fitness(self) -> Fitness:
        """Fitness of the best position found so far."""
        return self._swarm.best_particle().best.fitness

    def statistics(self):
        """Current swarm statistics (see Swarm.statistics)."""
        return self._swarm.statistics()

    # ------------------------------------------------------------------
    # Weights
    # ------------------------------------------------------------------

    @property
    def inertia_weight(self) -> Weight:
        """Inertia weight for the current iteration."""
        return self._inertia.weight()

    @property
    def cognitive_weight(self) -> Weight:
        return self._cognitive_weight

    @cognitive_weight.setter
    def cognitive_weight(self, new_weight: Weight) -> None:
        self._cognitive_weight = new_weight

    @property
    def social_weight(self) -> Weight:
        return self._social_weight

    @social_weight.setter
    def social_weight(self, new_weight: Weight) -> None:
        self._social_weight = new_weight

    def load_standard_weights(self) -> None:
        """Switch to fixed inertia with the standard constriction weights."""
        self._inertia = FixedInertiaScaling(DEFAULT_INERTIA_WEIGHT)
        self._cognitive_weight = DEFAULT_COGNITIVE_WEIGHT
        self._social_weight = DEFAULT_SOCIAL_WEIGHT
        logger.debug("Loaded standard PSO weights")

    # ------------------------------------------------------------------
    # Constraints
    # ------------------------------------------------------------------

    @property
    def max_speed_per_dimension(self) -> float:
        return self._max_speed_per_dimension

    @max_speed_per_dimension.setter
    def max_speed_per_dimension(self, new_speed: float) -> None:
        if new_speed <= 0.0:
            raise ValueError("max_speed_per_dimension must be positive")
        self._max_speed_per_dimension = new_speed

    def enable_max_speed_per_dimension(self) -> None:
        self._max_speed_enabled = True

    def disable_max_speed_per_dimension(self) -> None:
        self._max_speed_enabled = False

    @property
    def is_enabled_max_speed_per_dimension(self) -> bool:
        return self._max_speed_enabled

    @property
    def boundary_policy(self) -> str:
        return self.config.boundary_policy

    # ------------------------------------------------------------------
    # Interface to particles
    # ------------------------------------------------------------------

    def social_best(self, asker: Particle) -> Position:
        """Social best position for the given particle, as seen by the topology."""
        return self._topology.social_best(asker)

    def uniform(self, low: float = -1.0, high: float = 1.0) -> float:
        """Draw the next deviate from the shared uniform source."""
        return self._rng.uniform(low, high)

    def random_position(self) -> Position:
        return [self.uniform() for _ in range(self._num_dimensions)]

    def random_velocity(self) -> Velocity:
        return [self.uniform() for _ in range(self._num_dimensions)]

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def estimate(self) -> Position:
        """
        Run iterations until the budget is exhausted.

        There is no early exit; the full budget always runs.

        Returns:
            Best position found
        """
        logger.info(f"Starting estimate: {self._num_iterations - self._iteration} iterations remaining")

        self._state = ManagerState.RUNNING
        while self.keep_looping():
            self.iterate()
        self._state = ManagerState.DONE

        best = self._swarm.best_particle()
        logger.info(f"Estimate complete after {self._iteration} iterations. "
                    f"Best fitness: {best.best.fitness:.6g}")

        if self.iteration_logger:
            self.iteration_logger.log_final_best(best, self._iteration, self._trial)

        return list(best.best.position)

    def keep_looping(self) -> bool:
        return self._iteration < self._num_iterations

    def iterate(self) -> None:
        """Run one full iteration: move every particle, then evaluate the batch."""
        self._topology.update()

        # Weight actually used by the particles this iteration
        weight = self.inertia_weight

        for particle in self._swarm:
            particle.iterate()

        self.update_particle_fitnesses()

        self._iteration += 1
        self._log_iteration_stats(weight)

    def update_particle_fitnesses(self) -> None:
        """
        Evaluate all current positions in one batch and feed the results back.

        Raises:
            ValueError: If the objective returns a different number of fitnesses
        """
        positions = self._swarm.positions()
        fitnesses = list(self.evaluate_function(positions))

        if len(fitnesses) != len(positions):
            raise ValueError(
                f"Objective returned {len(fitnesses)} fitnesses for {len(positions)} positions"
            )

        for particle, fitness in zip(self._swarm, fitnesses):
            particle.update_fitness(fitness)

    def evaluate_function(self, positions: Positions) -> Sequence[Fitness]:
        """
        Evaluate a batch of positions.

        Called exactly once per iteration with every particle's position, in
        particle id order. Must return the fitnesses in the same order.

        Args:
            positions: Current positions, one per particle

        Returns:
            Fitness per position (lower is better)
        """
        if self._objective is None:
            raise NotImplementedError(
                "No objective given; pass objective= or override evaluate_function()"
            )
        return self._objective(positions)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Discard the swarm and start a new trial with the same configuration.

        Without a seed the deviate stream continues, so the new swarm is an
        independent draw. With a seed the stream restarts from it, and the
        manager behaves exactly like a freshly constructed one with that seed.

        An injected source is kept across resets. Reseeding it requires a
        `reseed(seed)` method.

        Args:
            seed: Optional seed to restart the uniform source from

        Raises:
            ValueError: If a seed is given and the source cannot be reseeded
        """
        if seed is not None:
            reseed = getattr(self._rng, "reseed", None)
            if not callable(reseed):
                raise ValueError(
                    f"Uniform source {type(self._rng).__name__} has no reseed(); "
                    f"call reset() without a seed"
                )
            reseed(seed)
            self._seed = seed

        self._destroy_particles()
        self._iteration = 0
        self._trial += 1
        self._state = ManagerState.IDLE
        self.history = []

        self._create_particles(self._num_particles)

        logger.info(f"Manager reset (trial {self._trial}, seed={self._seed})")

    def _gen_unique_id(self) -> ParticleId:
        return self._swarm.size

    def _create_particles(self, num_particles: int) -> None:
        """Create the swarm; each particle draws its position, then its velocity."""
        for _ in range(num_particles):
            position = self.random_position()
            velocity = self.random_velocity()
            particle = Particle(self, ParticleState(position, velocity), self._gen_unique_id())
            self._swarm.add(particle)

        logger.debug(f"Created {num_particles} particles")

        if self.iteration_logger:
            self.iteration_logger.log_initial_swarm(self._swarm.particles, self._trial)

    def _destroy_particles(self) -> None:
        self._swarm.clear()

    def _log_iteration_stats(self, weight: Weight) -> None:
        """
        Record and log statistics for the iteration that just finished.

        Args:
            weight: Inertia weight used during the iteration
        """
        if not self.config.log_iteration_stats and not self.iteration_logger:
            return

        stats = self._swarm.statistics()

        if self.config.log_iteration_stats:
            self.history.append(IterationHistory(
                iteration=self._iteration,
                swarm_size=stats["size"],
                inertia_weight=weight,
                avg_fitness=stats["avg_fitness"],
                best_fitness=stats["best_fitness"],
                worst_fitness=stats["worst_fitness"],
                out_of_bounds=stats["out_of_bounds"],
                best_personal_fitness=stats["best_personal_fitness"],
            ))

            logger.debug(
                f"Iteration {self._iteration}/{self._num_iterations}: "
                f"w={weight:.4f}, best={stats['best_personal_fitness']:.6g}, "
                f"out_of_bounds={stats['out_of_bounds']}"
            )

        if self.iteration_logger:
            self.iteration_logger.log_iteration(
                self._swarm.particles, self._iteration, weight, stats, self._trial
            )

    def __repr__(self) -> str:
        return (
            f"Manager(particles={self._num_particles}, dimensions={self._num_dimensions}, "
            f"iteration={self._iteration}/{self._num_iterations}, state={self._state.value})"
        )

"""
Parallel batch evaluation of objective functions.

The manager evaluates all positions of an iteration in one batched call.
BatchEvaluator turns a per-position objective into such a batch callable and
spreads the positions over a thread or process pool, returning fitnesses in
input order.
"""

import logging
import pickle
import time
from concurrent.futures import BrokenExecutor, Executor, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..core.types import Fitness, Position, Positions, WORST_POSSIBLE_FITNESS

logger = logging.getLogger(__name__)


@dataclass
class BatchConfig:
    """Configuration for batch evaluation."""
    max_workers: int = 4
    use_processes: bool = False  # Processes need a picklable objective

    def __post_init__(self):
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")


@dataclass
class BatchStats:
    """Running statistics of a batch evaluator."""
    batches: int = 0
    evaluations: int = 0
    failures: int = 0
    total_time: float = 0.0

    def get_failure_rate(self) -> float:
        """Get the failure rate as a percentage."""
        if self.evaluations == 0:
            return 0.0
        return (self.failures / self.evaluations) * 100.0


class BatchEvaluator:
    """
    Order-preserving parallel evaluator.

    The objective must be a pure function of one position. A position whose
    evaluation raises is logged and assigned the worst possible fitness, so
    one bad candidate never aborts an iteration. A broken pool is not a
    candidate failure and propagates.

    The pool is created on the first batch and reused until close(); the
    evaluator can be used as a context manager.
    """

    def __init__(self, objective: Callable[[Position], Fitness], config: Optional[BatchConfig] = None):
        """
        Initialize the batch evaluator.

        Args:
            objective: Function mapping one position to its fitness
            config: Batch configuration

        Raises:
            ValueError: If a process pool is requested for an objective that cannot be pickled
        """
        self.objective = objective
        self.config = config if config is not None else BatchConfig()
        self.stats = BatchStats()
        self._executor: Optional[Executor] = None

        if self.config.use_processes:
            # Worker processes receive the objective by pickling
            try:
                pickle.dumps(objective)
            except (pickle.PicklingError, AttributeError, TypeError) as e:
                raise ValueError(f"Objective cannot be sent to worker processes: {e}") from e

        logger.info(
            f"BatchEvaluator using {self.config.max_workers} "
            f"{'processes' if self.config.use_processes else 'threads'}"
        )

    def __call__(self, positions: Positions) -> List[Fitness]:
        return self.evaluate(positions)

    def __enter__(self) -> "BatchEvaluator":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def evaluate(self, positions: Positions) -> List[Fitness]:
        """
        Evaluate a batch of positions.

        Args:
            positions: Positions to evaluate

        Returns:
            Fitness per position, in input order

        Raises:
            BrokenExecutor: If the worker pool died
        """
        start_time = time.time()

        if not positions:
            return []

        executor = self._get_executor()

        # Futures are kept in submission order, not completion order
        futures = [executor.submit(self.objective, position) for position in positions]

        fitnesses = []
        for idx, future in enumerate(futures):
            try:
                fitnesses.append(float(future.result()))
            except BrokenExecutor:
                self.close()
                raise
            except Exception as e:
                logger.error(f"Evaluation of position {idx} failed: {e}")
                self.stats.failures += 1
                fitnesses.append(WORST_POSSIBLE_FITNESS)

        self.stats.batches += 1
        self.stats.evaluations += len(positions)
        self.stats.total_time += time.time() - start_time

        logger.debug(f"Evaluated batch of {len(positions)} positions in {time.time() - start_time:.3f}s")

        return fitnesses

    def close(self) -> None:
        """Shut down the worker pool. A later batch starts a new one."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
            logger.debug("BatchEvaluator pool shut down")

    @property
    def is_open(self) -> bool:
        return self._executor is not None

    def _get_executor(self) -> Executor:
        if self._executor is None:
            if self.config.use_processes:
                self._executor = ProcessPoolExecutor(max_workers=self.config.max_workers)
            else:
                self._executor = ThreadPoolExecutor(max_workers=self.config.max_workers)
        return self._executor


def create_batch_evaluator(
    objective: Callable[[Position], Fitness],
    max_workers: int = 4,
    use_processes: bool = False
) -> BatchEvaluator:
    """
    Convenience function to create a batch evaluator.

    Args:
        objective: Function mapping one position to its fitness
        max_workers: Pool size
        use_processes: Use a process pool instead of a thread pool

    Returns:
        Configured BatchEvaluator instance
    """
    config = BatchConfig(
        max_workers=max_workers,
        use_processes=use_processes
    )

    return BatchEvaluator(objective=objective, config=config)

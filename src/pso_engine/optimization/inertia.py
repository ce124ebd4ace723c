"""
Inertia weight schedules.

The inertia weight scales the velocity a particle carries over from the
previous iteration. Schedules only read the manager's iteration counter and
iteration budget; they hold no particle data.
"""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..core.types import Weight

if TYPE_CHECKING:
    from .manager import Manager

logger = logging.getLogger(__name__)

DEFAULT_INERTIA_WEIGHT: Weight = 0.72984


class InertiaScaling(ABC):
    """Interface to all inertia scaling strategies."""

    @abstractmethod
    def weight(self) -> Weight:
        """Return the inertia weight for the manager's current iteration."""


class FixedInertiaScaling(InertiaScaling):
    """Constant inertia weight."""

    def __init__(self, fixed_weight: Weight = DEFAULT_INERTIA_WEIGHT):
        self.fixed_weight = fixed_weight

    def weight(self) -> Weight:
        return self.fixed_weight

    def __repr__(self) -> str:
        return f"FixedInertiaScaling(weight={self.fixed_weight})"


class LinearInertiaScaling(InertiaScaling):
    """
    Linearly annealed inertia weight.

    weight = slope * iteration + start, with slope = (end - start) / budget,
    so the weight moves in a straight line from `start` at iteration 0
    towards `end` at the final iteration. The iteration counter is read from
    the manager on every call.
    """

    def __init__(self, manager: "Manager", start: Weight, end: Weight):
        """
        Initialize the schedule.

        Args:
            manager: Manager providing the iteration counter and budget
            start: Weight at iteration 0
            end: Weight reached at the end of the budget
        """
        self._manager = manager
        self.start = start
        self.end = end

        budget = manager.num_iterations
        # A zero budget never iterates; keep the weight at `start`
        self.slope = (end - start) / float(budget) if budget > 0 else 0.0

        logger.debug(f"LinearInertiaScaling from {start} to {end} over {budget} iterations")

    def weight(self) -> Weight:
        return self.slope * self._manager.iteration + self.start

    def __repr__(self) -> str:
        return f"LinearInertiaScaling(start={self.start}, end={self.end}, slope={self.slope})"

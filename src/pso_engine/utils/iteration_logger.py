"""
Iteration logger for tracing a PSO run in detail.

This module records the swarm at every stage of an estimate:
- Initial swarm
- Each iteration (positions, velocities, fitnesses, bests)
- Final best estimate

Logs are organized by run id and iteration for easy analysis.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List
from datetime import datetime

from ..core.particle import Particle


logger = logging.getLogger(__name__)


class IterationLogger:
    """
    Detailed JSON trace writer for a single manager run.

    One file is written per phase under `output_dir/run_<run_id>/`.
    """

    def __init__(self, output_dir: Path, run_id: str):
        """
        Initialize the iteration logger.

        Args:
            output_dir: Base output directory
            run_id: Run identifier (used for the subdirectory name)
        """
        self.output_dir = Path(output_dir) / f"run_{run_id}"
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.run_id = run_id

        logger.info(f"IterationLogger initialized for run {run_id} at {self.output_dir}")

    def log_initial_swarm(self, particles: List[Particle], trial: int = 0):
        """
        Log the freshly created swarm.

        Args:
            particles: Particles in id order
            trial: Trial number (incremented by each manager reset)
        """
        data = {
            "run_id": self.run_id,
            "trial": trial,
            "iteration": 0,
            "phase": "initial_swarm",
            "timestamp": datetime.now().isoformat(),
            "particles": [p.to_dict() for p in particles],
        }

        self._save_json(f"trial_{trial}_initial.json", data)
        logger.debug(f"Logged initial swarm for trial {trial}: {len(particles)} particles")

    def log_iteration(
        self,
        particles: List[Particle],
        iteration: int,
        inertia_weight: float,
        statistics: Dict[str, Any],
        trial: int = 0
    ):
        """
        Log the swarm after an iteration has been evaluated.

        Args:
            particles: Particles in id order
            iteration: Number of completed iterations
            inertia_weight: Inertia weight used in this iteration
            statistics: Swarm statistics for this iteration
            trial: Trial number
        """
        data = {
            "run_id": self.run_id,
            "trial": trial,
            "iteration": iteration,
            "phase": "iteration",
            "timestamp": datetime.now().isoformat(),
            "inertia_weight": inertia_weight,
            "particles": [p.to_dict() for p in particles],
            "statistics": statistics,
        }

        self._save_json(f"trial_{trial}_iteration_{iteration}.json", data)

    def log_final_best(self, particle: Particle, iteration: int, trial: int = 0):
        """
        Log the final best estimate.

        Args:
            particle: Particle holding the best personal best
            iteration: Final iteration count
            trial: Trial number
        """
        data = {
            "run_id": self.run_id,
            "trial": trial,
            "final_iteration": iteration,
            "phase": "final_best",
            "timestamp": datetime.now().isoformat(),
            "particle_id": particle.id,
            "position": list(particle.best.position),
            "fitness": particle.best.fitness,
        }

        self._save_json(f"trial_{trial}_final_best.json", data)
        logger.info(f"Logged final best for trial {trial} with fitness {particle.best.fitness:.6g}")

    def _save_json(self, filename: str, data: Dict):
        """
        Save data to a JSON file.

        Args:
            filename: Name of the file
            data: Data to save
        """
        filepath = self.output_dir / filename

        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Failed to save {filename}: {e}")

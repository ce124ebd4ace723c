"""
Configuration and data classes for the PSO manager.
"""

import logging
import os
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional, Union
from pathlib import Path
from datetime import datetime

import yaml

from .inertia import DEFAULT_INERTIA_WEIGHT
from .topology import TOPOLOGIES

logger = logging.getLogger(__name__)

DEFAULT_COGNITIVE_WEIGHT = 1.496172
DEFAULT_SOCIAL_WEIGHT = 1.496172

BOUNDARY_POLICIES = ("soft", "clamp")


def parse_bool(value: Union[str, bool, int]) -> bool:
    """
    Parse a boolean flag that may come from an environment variable.

    Args:
        value: Flag as bool, int, or string like "true", "1", "yes", "off"

    Returns:
        Parsed boolean

    Examples:
        >>> parse_bool("yes")
        True
        >>> parse_bool("0")
        False
    """
    if isinstance(value, bool):
        return value

    if isinstance(value, int):
        return value != 0

    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in ("1", "true", "yes", "on"):
            return True
        if normalized in ("0", "false", "no", "off", ""):
            return False

    logger.warning(f"Invalid boolean flag: {value!r}, falling back to False")
    return False


@dataclass
class ManagerConfig:
    """
    Configuration for the PSO manager.

    Holds the update-equation weights, the velocity cap, the topology and
    boundary settings, and the logging switches. Setting both `inertia_start`
    and `inertia_end` selects the linearly annealed inertia schedule;
    otherwise the fixed `inertia_weight` is used.
    """

    # Update-equation weights
    inertia_weight: float = DEFAULT_INERTIA_WEIGHT
    cognitive_weight: float = DEFAULT_COGNITIVE_WEIGHT
    social_weight: float = DEFAULT_SOCIAL_WEIGHT

    # Linear inertia schedule
    inertia_start: Optional[float] = None
    inertia_end: Optional[float] = None

    # Velocity constraint
    max_speed_per_dimension: float = 1.0
    enable_max_speed: bool = False

    # Topology
    topology: str = "ring"
    ring_neighbors: int = 2
    ring_offset: int = 0

    # Position constraint
    boundary_policy: str = "soft"

    # Logging
    log_level: str = "INFO"
    log_iteration_stats: bool = True

    def __post_init__(self):
        """Validate configuration after initialization."""
        if (self.inertia_start is None) != (self.inertia_end is None):
            raise ValueError("inertia_start and inertia_end must be set together")
        if self.max_speed_per_dimension <= 0.0:
            raise ValueError("max_speed_per_dimension must be positive")

        self.topology = self.topology.lower()
        if self.topology not in TOPOLOGIES:
            raise ValueError(f"topology must be one of {TOPOLOGIES}, got {self.topology!r}")
        if self.ring_neighbors < 1:
            raise ValueError("ring_neighbors must be at least 1")
        if self.ring_offset < 0:
            raise ValueError("ring_offset must be non-negative")

        self.boundary_policy = self.boundary_policy.lower()
        if self.boundary_policy not in BOUNDARY_POLICIES:
            raise ValueError(
                f"boundary_policy must be one of {BOUNDARY_POLICIES}, got {self.boundary_policy!r}"
            )

        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log_level: {self.log_level}")

        if self.inertia_weight >= 1.0 and not self.is_linear:
            logger.warning(
                f"inertia_weight = {self.inertia_weight} >= 1.0, velocities will not contract"
            )

    @property
    def is_linear(self) -> bool:
        """Whether the linear inertia schedule is selected."""
        return self.inertia_start is not None and self.inertia_end is not None

    @classmethod
    def from_yaml(cls, config_path: Path) -> "ManagerConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            ManagerConfig instance
        """
        with open(config_path) as f:
            config = yaml.safe_load(f) or {}

        # Extract nested parameters if present
        pso_config = config.get("pso", config)

        if "enable_max_speed" in pso_config:
            pso_config["enable_max_speed"] = parse_bool(pso_config["enable_max_speed"])

        return cls(**pso_config)

    @classmethod
    def from_env(cls) -> "ManagerConfig":
        """
        Load configuration from environment variables.

        Reads the following environment variables:
        - PSO_INERTIA_WEIGHT: inertia_weight
        - PSO_COGNITIVE_WEIGHT: cognitive_weight
        - PSO_SOCIAL_WEIGHT: social_weight
        - PSO_MAX_SPEED: max_speed_per_dimension
        - PSO_ENABLE_MAX_SPEED: enable_max_speed (true/false)
        - PSO_TOPOLOGY: topology
        - PSO_INERTIA_START / PSO_INERTIA_END: linear schedule (unset for fixed)
        - PSO_RING_NEIGHBORS: ring_neighbors
        - PSO_RING_OFFSET: ring_offset
        - PSO_BOUNDARY_POLICY: boundary_policy
        - PSO_LOG_ITERATION_STATS: log_iteration_stats (true/false)
        - LOG_LEVEL: log_level

        Returns:
            ManagerConfig instance
        """
        inertia_start = os.getenv("PSO_INERTIA_START")
        inertia_end = os.getenv("PSO_INERTIA_END")

        return cls(
            inertia_weight=float(os.getenv("PSO_INERTIA_WEIGHT", str(DEFAULT_INERTIA_WEIGHT))),
            cognitive_weight=float(os.getenv("PSO_COGNITIVE_WEIGHT", str(DEFAULT_COGNITIVE_WEIGHT))),
            social_weight=float(os.getenv("PSO_SOCIAL_WEIGHT", str(DEFAULT_SOCIAL_WEIGHT))),
            inertia_start=float(inertia_start) if inertia_start else None,
            inertia_end=float(inertia_end) if inertia_end else None,
            max_speed_per_dimension=float(os.getenv("PSO_MAX_SPEED", "1.0")),
            enable_max_speed=parse_bool(os.getenv("PSO_ENABLE_MAX_SPEED", "false")),
            topology=os.getenv("PSO_TOPOLOGY", "ring"),
            ring_neighbors=int(os.getenv("PSO_RING_NEIGHBORS", "2")),
            ring_offset=int(os.getenv("PSO_RING_OFFSET", "0")),
            boundary_policy=os.getenv("PSO_BOUNDARY_POLICY", "soft"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_iteration_stats=parse_bool(os.getenv("PSO_LOG_ITERATION_STATS", "true")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    def to_yaml(self, save_path: Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            save_path: Path where to save the configuration
        """
        with open(save_path, 'w') as f:
            yaml.dump({"pso": self.to_dict()}, f, default_flow_style=False)

        logger.info(f"Saved configuration to {save_path}")


@dataclass
class IterationHistory:
    """
    Statistics for a single iteration of the swarm.

    Tracks key metrics to monitor convergence.
    """

    iteration: int
    swarm_size: int
    inertia_weight: float
    avg_fitness: Optional[float]
    best_fitness: Optional[float]
    worst_fitness: Optional[float]
    out_of_bounds: int
    best_personal_fitness: float
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IterationHistory":
        """Create instance from dictionary."""
        return cls(**data)

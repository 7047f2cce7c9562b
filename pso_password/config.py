"""
pso_password/config.py

Swarm configuration: defaults, validation, and YAML loading.

Configuration is checked once, before any swarm state exists.
A bad configuration never reaches the engine.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging
import numbers

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "configs" / "default.yaml"


class ConfigurationError(ValueError):
    """Raised when swarm parameters cannot produce a valid run."""


@dataclass
class SwarmConfig:
    """Configuration for a password swarm run."""
    length: int = 16                    # Characters per candidate string
    num_particles: int = 10             # Swarm size
    max_iterations: int = 100           # Update rounds
    inertia_weight: float = 0.5         # Starting inertia, decays linearly to 0
    personal_best_weight: float = 2.0   # Cognitive pull (c1)
    global_best_weight: float = 2.0     # Social pull (c2)
    seed: Optional[int] = None          # None = OS entropy

    # Propagate the selected particle's current string instead of its personal best
    propagate_current: bool = False
    # Let the final character take part in character-class detection
    classify_last_char: bool = False

    def validate(self) -> "SwarmConfig":
        """Raise ConfigurationError if the run cannot start. Returns self."""
        for name in ("length", "num_particles", "max_iterations"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        for name in ("inertia_weight", "personal_best_weight", "global_best_weight"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ConfigurationError(f"{name} must be a number, got {value!r}")
        if self.seed is not None and (
            isinstance(self.seed, bool)
            or not isinstance(self.seed, numbers.Integral)
            or self.seed < 0
        ):
            raise ConfigurationError(f"seed must be a non-negative integer or null, got {self.seed!r}")

        if self.num_particles <= 0:
            raise ConfigurationError(
                f"num_particles must be positive, got {self.num_particles}"
            )
        if self.length < 0:
            raise ConfigurationError(f"length must be non-negative, got {self.length}")
        if self.max_iterations < 0:
            raise ConfigurationError(
                f"max_iterations must be non-negative, got {self.max_iterations}"
            )
        for name in ("inertia_weight", "personal_best_weight", "global_best_weight"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must be non-negative")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SwarmConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {unknown}")
        return cls(**data)


def load_config(path: Optional[Union[str, Path]] = None) -> SwarmConfig:
    """
    Load a SwarmConfig from a YAML file.

    Missing keys keep their defaults. With no path, the packaged
    default.yaml is used.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH

    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Cannot parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a mapping in {path}, got {type(data).__name__}")

    logger.debug(f"Loaded configuration from {path}: {data}")
    return SwarmConfig.from_dict(data).validate()

"""
Configuration management for the Monty Hall simulator.

Run presets and JSON loading utilities.

Config file format:
{
    "version": "1.0",
    "n_trials": 100000,
    "seed": 42,
    "n_workers": 1,
    "method": "vectorized",
    "decimals": 2,
    "confidence": 0.95
}
"""

import json
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional

from .types import InvalidArgumentError


CONFIG_VERSION = "1.0"

RUN_METHODS = ("loop", "vectorized")


@dataclass
class SimulationConfig:
    """
    Parameters for one simulation run.

    Attributes:
        n_trials: Number of games to play (>= 0)
        seed: Random seed; None draws fresh entropy
        n_workers: Worker threads for the loop method
        method: "loop" or "vectorized"
        decimals: Decimal places for the displayed proportions table
        confidence: Confidence level for diagnostics intervals
    """
    n_trials: int = 100
    seed: Optional[int] = None
    n_workers: int = 1
    method: str = "loop"
    decimals: int = 2
    confidence: float = 0.95

    def __post_init__(self) -> None:
        if isinstance(self.n_trials, bool) or not isinstance(self.n_trials, int) or self.n_trials < 0:
            raise InvalidArgumentError(
                f"SimulationConfig.n_trials must be a non-negative integer, got {self.n_trials!r}"
            )
        if isinstance(self.n_workers, bool) or not isinstance(self.n_workers, int) or self.n_workers < 1:
            raise InvalidArgumentError(
                f"SimulationConfig.n_workers must be a positive integer, got {self.n_workers!r}"
            )
        if self.method not in RUN_METHODS:
            raise InvalidArgumentError(
                f"SimulationConfig.method must be one of {RUN_METHODS}, got '{self.method}'"
            )
        if self.method == "vectorized" and self.n_workers > 1:
            raise InvalidArgumentError(
                "SimulationConfig.n_workers must be 1 for the vectorized method"
            )
        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, int) or self.seed < 0
        ):
            raise InvalidArgumentError(
                f"SimulationConfig.seed must be None or a non-negative integer, got {self.seed!r}"
            )
        if isinstance(self.decimals, bool) or not isinstance(self.decimals, int) or self.decimals < 0:
            raise InvalidArgumentError(
                f"SimulationConfig.decimals must be a non-negative integer, got {self.decimals!r}"
            )
        if (isinstance(self.confidence, bool)
                or not isinstance(self.confidence, (int, float))
                or not 0.0 < self.confidence < 1.0):
            raise InvalidArgumentError(
                f"SimulationConfig.confidence must be a number in (0, 1), got {self.confidence!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['version'] = CONFIG_VERSION
        return data


# =============================================================================
# Run Presets
# =============================================================================

RUN_PRESETS: Dict[str, SimulationConfig] = {
    # Same default trial count as the classroom exercise
    'quick': SimulationConfig(n_trials=100),

    'classroom': SimulationConfig(n_trials=10000, seed=42),

    # Large enough that both win rates land within 0.01 of theory
    'convergence': SimulationConfig(n_trials=100000, seed=42, method="vectorized"),
}


def get_preset(name: str) -> SimulationConfig:
    """Return a copy of a named preset."""
    if name not in RUN_PRESETS:
        raise InvalidArgumentError(
            f"Unknown preset '{name}'. Available: {', '.join(sorted(RUN_PRESETS))}"
        )
    return SimulationConfig(**asdict(RUN_PRESETS[name]))


# =============================================================================
# JSON Loading Utilities
# =============================================================================

def _validate_version(data: Dict[str, Any]) -> None:
    version = data.get('version', CONFIG_VERSION)
    if version != CONFIG_VERSION:
        raise InvalidArgumentError(
            f"Unsupported config version '{version}'. "
            f"Expected '{CONFIG_VERSION}'."
        )


def config_from_dict(data: Dict[str, Any]) -> SimulationConfig:
    """Build a config from a dict, filling missing keys with defaults."""
    _validate_version(data)
    defaults = SimulationConfig()
    return SimulationConfig(
        n_trials=data.get('n_trials', defaults.n_trials),
        seed=data.get('seed', defaults.seed),
        n_workers=data.get('n_workers', defaults.n_workers),
        method=data.get('method', defaults.method),
        decimals=data.get('decimals', defaults.decimals),
        confidence=data.get('confidence', defaults.confidence),
    )


def load_config_from_json(path: str) -> SimulationConfig:
    """Load a simulation config from JSON file (format in module docstring)."""
    with open(path, 'r') as f:
        data = json.load(f)
    return config_from_dict(data)


def save_config_to_json(config: SimulationConfig, path: str) -> None:
    """Save a simulation config to JSON file."""
    with open(path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)

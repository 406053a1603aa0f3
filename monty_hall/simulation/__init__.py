"""Monte Carlo simulation runners."""

from .runner import run_trials, split_trials
from .vectorized import simulate_trials_vectorized

__all__ = ["run_trials", "split_trials", "simulate_trials_vectorized"]

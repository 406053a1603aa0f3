"""
Monty Hall simulator.

Plays the three-door game many times and compares the stay and switch
strategies.
"""

from .types import (
    Door,
    Label,
    Outcome,
    Strategy,
    GameLayout,
    TrialResult,
    AggregateResults,
    TrialArrays,
    MontyHallError,
    InvalidArgumentError,
    InvariantViolationError,
)
from .game import (
    create_layout,
    select_initial_door,
    reveal_decoy_door,
    resolve_final_choice,
    determine_outcome,
    play_one_trial,
)
from .simulation import run_trials, simulate_trials_vectorized
from .metrics import summarize, ResultsSummary
from .diagnostics import compute_diagnostics

__version__ = "0.1.0"

__all__ = [
    "Door",
    "Label",
    "Outcome",
    "Strategy",
    "GameLayout",
    "TrialResult",
    "AggregateResults",
    "TrialArrays",
    "MontyHallError",
    "InvalidArgumentError",
    "InvariantViolationError",
    "create_layout",
    "select_initial_door",
    "reveal_decoy_door",
    "resolve_final_choice",
    "determine_outcome",
    "play_one_trial",
    "run_trials",
    "simulate_trials_vectorized",
    "summarize",
    "ResultsSummary",
    "compute_diagnostics",
]

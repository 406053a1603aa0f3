"""Single-game engine."""

from .engine import (
    create_layout,
    select_initial_door,
    reveal_decoy_door,
    resolve_final_choice,
    determine_outcome,
    play_one_trial,
)

__all__ = [
    "create_layout",
    "select_initial_door",
    "reveal_decoy_door",
    "resolve_final_choice",
    "determine_outcome",
    "play_one_trial",
]

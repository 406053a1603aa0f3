"""
Vectorized Monte Carlo batch.

Plays the same game as game.engine, with the same host rule, for a whole
batch of trials at once using numpy arrays.
"""

import numpy as np
from typing import Optional
import logging

from ..types import TrialArrays, N_DOORS

logger = logging.getLogger(__name__)

# Doors are 1, 2, 3, so the third door of any pair is DOOR_SUM - a - b
DOOR_SUM = 6


def simulate_trials_vectorized(
    n_trials: int,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None
) -> TrialArrays:
    """
    Simulate n_trials games in one batch.

    Placing the prize uniformly is the same distribution as shuffling
    {decoy, decoy, prize}, so only the prize door is drawn.

    Args:
        n_trials: Number of games (validated by the caller)
        seed: Random seed (accepts int or SeedSequence); ignored if rng is given
        rng: Optional Generator to draw from

    Returns:
        TrialArrays with one element per trial
    """
    if rng is None:
        rng = np.random.default_rng(seed)

    prize = rng.integers(1, N_DOORS + 1, size=n_trials).astype(np.int8)
    first_pick = rng.integers(1, N_DOORS + 1, size=n_trials).astype(np.int8)
    coin = rng.integers(0, 2, size=n_trials)

    # Player holds the prize: host opens the lower or higher of the two
    # other doors with equal probability
    lower_other = np.where(first_pick == 1, 2, 1)
    upper_other = np.where(first_pick == 3, 2, 3)
    free_reveal = np.where(coin == 0, lower_other, upper_other)

    # Player holds a decoy: host is forced to the remaining decoy
    forced_reveal = DOOR_SUM - first_pick - prize

    holds_prize = first_pick == prize
    revealed = np.where(holds_prize, free_reveal, forced_reveal).astype(np.int8)
    switched_to = (DOOR_SUM - first_pick - revealed).astype(np.int8)

    logger.debug("Vectorized batch: %d trials", n_trials)

    return TrialArrays(
        prize_door=prize,
        initial_door=first_pick,
        revealed_door=revealed,
        stay_win=holds_prize,
        switch_win=switched_to == prize,
    )

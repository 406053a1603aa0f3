"""
Single-game engine for the three-door game.

Every random draw comes from a numpy Generator passed in by the caller, so a
seeded Generator replays the same games and parallel workers never share
random state.
"""

import numpy as np

from ..types import (
    ALL_DOORS,
    LABEL_POOL,
    Door,
    GameLayout,
    InvalidArgumentError,
    InvariantViolationError,
    Label,
    Outcome,
    TrialResult,
    coerce_door,
)


def create_layout(rng: np.random.Generator) -> GameLayout:
    """Shuffle one prize and two decoys behind the three doors."""
    order = rng.permutation(len(LABEL_POOL))
    return GameLayout(tuple(LABEL_POOL[i] for i in order))


def select_initial_door(rng: np.random.Generator) -> Door:
    """Player's first pick, uniform over the three doors."""
    return ALL_DOORS[int(rng.integers(len(ALL_DOORS)))]


def reveal_decoy_door(layout, player_choice, rng: np.random.Generator) -> Door:
    """
    Door the host opens after the player's first pick.

    The host never opens the player's door or the prize door. When the player
    is holding the prize, both decoys qualify and the host picks one at
    random; otherwise exactly one decoy is left and the host must open it.

    Args:
        layout: GameLayout (or sequence of Labels) for this game
        player_choice: Player's first pick
        rng: Generator used only when the host has a free choice

    Returns:
        The revealed decoy door

    Raises:
        InvalidArgumentError: malformed layout or door
        InvariantViolationError: forced branch left no single decoy
    """
    layout = GameLayout.from_labels(layout)
    player_choice = coerce_door(player_choice)
    decoys = layout.decoy_doors

    if layout.label_at(player_choice) is Label.PRIZE:
        return decoys[int(rng.integers(len(decoys)))]

    candidates = [d for d in decoys if d != player_choice]
    if len(candidates) != 1:
        raise InvariantViolationError(
            f"Expected one decoy besides door {int(player_choice)}, "
            f"found {len(candidates)}"
        )
    return candidates[0]


def resolve_final_choice(stay: bool, revealed_door, player_choice) -> Door:
    """
    Player's final door.

    Staying keeps player_choice. Switching moves to the only door that is
    neither the player's pick nor the revealed one.
    """
    revealed_door = coerce_door(revealed_door)
    player_choice = coerce_door(player_choice)

    if revealed_door == player_choice:
        raise InvalidArgumentError(
            f"Host cannot reveal the player's own door ({int(player_choice)})"
        )

    if stay:
        return player_choice

    remaining = [d for d in ALL_DOORS if d not in (revealed_door, player_choice)]
    if len(remaining) != 1:
        raise InvariantViolationError(
            f"Expected one door to switch to, found {len(remaining)}"
        )
    return remaining[0]


def determine_outcome(final_choice, layout) -> Outcome:
    """WIN if final_choice hides the prize, else LOSE."""
    layout = GameLayout.from_labels(layout)
    if layout.label_at(final_choice) is Label.PRIZE:
        return Outcome.WIN
    return Outcome.LOSE


def play_one_trial(rng: np.random.Generator) -> TrialResult:
    """
    Play one game and score both strategies against it.

    Stay and switch share the layout, first pick and revealed door; nothing
    is redrawn between them.
    """
    layout = create_layout(rng)
    first_pick = select_initial_door(rng)
    opened = reveal_decoy_door(layout, first_pick, rng)

    final_stay = resolve_final_choice(True, opened, first_pick)
    final_switch = resolve_final_choice(False, opened, first_pick)

    return TrialResult(
        layout=layout,
        initial_door=first_pick,
        revealed_door=opened,
        stay_outcome=determine_outcome(final_stay, layout),
        switch_outcome=determine_outcome(final_switch, layout),
    )

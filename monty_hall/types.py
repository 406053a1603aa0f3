"""
Core data structures for the Monty Hall simulator.

Doors, labels, outcomes and strategies are closed enumerations so an
out-of-range door or a misspelled outcome cannot be represented.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Tuple, Dict, Sequence

import numpy as np
import pandas as pd


N_DOORS = 3


# =============================================================================
# Errors
# =============================================================================

class MontyHallError(Exception):
    """Base class for simulator errors."""


class InvalidArgumentError(MontyHallError, ValueError):
    """A door, layout, trial count or config value is out of contract."""


class InvariantViolationError(MontyHallError, RuntimeError):
    """Host or switch resolution found zero or several candidate doors."""


# =============================================================================
# Enumerations
# =============================================================================

class Door(IntEnum):
    D1 = 1
    D2 = 2
    D3 = 3


class Label(Enum):
    PRIZE = "prize"
    DECOY = "decoy"


class Outcome(Enum):
    WIN = "WIN"
    LOSE = "LOSE"


class Strategy(Enum):
    STAY = "stay"
    SWITCH = "switch"


ALL_DOORS: Tuple[Door, ...] = tuple(Door)

# Multiset shuffled into each new layout
LABEL_POOL: Tuple[Label, ...] = (Label.DECOY, Label.DECOY, Label.PRIZE)


def coerce_door(value) -> Door:
    """Accept a Door or a plain int 1-3; reject everything else."""
    if isinstance(value, Door):
        return value
    # bool is an int subclass; True must not silently mean door 1
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidArgumentError(f"Door must be an int in 1..{N_DOORS}, got {value!r}")
    try:
        return Door(int(value))
    except ValueError:
        raise InvalidArgumentError(
            f"Door must be in 1..{N_DOORS}, got {value}"
        ) from None


# =============================================================================
# Game state
# =============================================================================

@dataclass(frozen=True)
class GameLayout:
    """
    Assignment of one prize and two decoys to the three doors.

    Attributes:
        labels: Label behind each door; labels[0] is behind D1
    """
    labels: Tuple[Label, ...]

    def __post_init__(self) -> None:
        if isinstance(self.labels, (str, bytes)) or not isinstance(self.labels, Sequence):
            raise InvalidArgumentError(f"Expected a sequence of labels, got {self.labels!r}")
        labels = tuple(self.labels)
        if len(labels) != N_DOORS:
            raise InvalidArgumentError(
                f"GameLayout needs exactly {N_DOORS} doors, got {len(labels)}"
            )
        for label in labels:
            if not isinstance(label, Label):
                raise InvalidArgumentError(f"Unknown door label {label!r}")
        n_prizes = sum(1 for label in labels if label is Label.PRIZE)
        if n_prizes != 1:
            raise InvalidArgumentError(
                f"GameLayout must hold exactly one prize, got {n_prizes}"
            )
        object.__setattr__(self, 'labels', labels)

    @classmethod
    def from_labels(cls, labels) -> 'GameLayout':
        """Return labels unchanged if already a layout, else validate a sequence."""
        if isinstance(labels, cls):
            return labels
        return cls(labels)

    def label_at(self, door: Door) -> Label:
        return self.labels[coerce_door(door) - 1]

    @property
    def prize_door(self) -> Door:
        return Door(self.labels.index(Label.PRIZE) + 1)

    @property
    def decoy_doors(self) -> Tuple[Door, ...]:
        return tuple(d for d in ALL_DOORS if self.labels[d - 1] is Label.DECOY)


@dataclass(frozen=True)
class TrialResult:
    """
    One playthrough scored for both strategies against the same draw.

    Attributes:
        layout: Prize/decoy placement for this trial
        initial_door: Player's first pick
        revealed_door: Decoy door opened by the host
        stay_outcome: Result of keeping the first pick
        switch_outcome: Result of moving to the remaining closed door
    """
    layout: GameLayout
    initial_door: Door
    revealed_door: Door
    stay_outcome: Outcome
    switch_outcome: Outcome

    def outcome(self, strategy: Strategy) -> Outcome:
        if strategy is Strategy.STAY:
            return self.stay_outcome
        return self.switch_outcome

    def records(self) -> List[Tuple[Strategy, Outcome]]:
        return [
            (Strategy.STAY, self.stay_outcome),
            (Strategy.SWITCH, self.switch_outcome),
        ]


@dataclass
class AggregateResults:
    """
    Ordered collection of trial results from a run.

    Partial collections from parallel workers are combined with merge().
    """
    trials: List[TrialResult] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.trials)

    def __iter__(self):
        return iter(self.trials)

    def append(self, trial: TrialResult) -> None:
        self.trials.append(trial)

    def merge(self, other: 'AggregateResults') -> 'AggregateResults':
        """Append another collection's trials after this one's, in place."""
        self.trials.extend(other.trials)
        return self

    def win_counts(self) -> Dict[Strategy, int]:
        counts = {strategy: 0 for strategy in Strategy}
        for trial in self.trials:
            for strategy, outcome in trial.records():
                if outcome is Outcome.WIN:
                    counts[strategy] += 1
        return counts

    def to_frame(self) -> pd.DataFrame:
        """
        Long-form table with two rows per trial (stay, then switch).

        Columns: trial (0-based), strategy ('stay'/'switch'), outcome ('WIN'/'LOSE').
        """
        rows = [
            {'trial': i, 'strategy': strategy.value, 'outcome': outcome.value}
            for i, trial in enumerate(self.trials)
            for strategy, outcome in trial.records()
        ]
        return pd.DataFrame(rows, columns=['trial', 'strategy', 'outcome'])


@dataclass
class TrialArrays:
    """
    Vectorized trial representation for large batches.

    Use this instead of AggregateResults in hot paths; one element per trial.
    """
    prize_door: np.ndarray     # [n_trials] int8, doors 1-3
    initial_door: np.ndarray   # [n_trials] int8
    revealed_door: np.ndarray  # [n_trials] int8
    stay_win: np.ndarray       # [n_trials] bool
    switch_win: np.ndarray     # [n_trials] bool

    def __len__(self) -> int:
        return len(self.prize_door)

    @classmethod
    def from_results(cls, results: AggregateResults) -> 'TrialArrays':
        """Convert a list-based collection to array representation."""
        trials = results.trials
        return cls(
            prize_door=np.array([t.layout.prize_door for t in trials], dtype=np.int8),
            initial_door=np.array([t.initial_door for t in trials], dtype=np.int8),
            revealed_door=np.array([t.revealed_door for t in trials], dtype=np.int8),
            stay_win=np.array([t.stay_outcome is Outcome.WIN for t in trials], dtype=bool),
            switch_win=np.array([t.switch_outcome is Outcome.WIN for t in trials], dtype=bool),
        )

    def to_results(self) -> AggregateResults:
        """Expand arrays back into TrialResult records, in trial order."""
        results = AggregateResults()
        for prize, first, opened, stay_win, switch_win in zip(
            self.prize_door, self.initial_door, self.revealed_door,
            self.stay_win, self.switch_win
        ):
            labels = tuple(
                Label.PRIZE if d == prize else Label.DECOY for d in ALL_DOORS
            )
            results.append(TrialResult(
                layout=GameLayout(labels),
                initial_door=Door(int(first)),
                revealed_door=Door(int(opened)),
                stay_outcome=Outcome.WIN if stay_win else Outcome.LOSE,
                switch_outcome=Outcome.WIN if switch_win else Outcome.LOSE,
            ))
        return results

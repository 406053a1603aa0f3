"""
Contingency table of strategy x outcome.

Proportions are kept at full precision; rounding happens only in
ResultsSummary.rounded() for display.
"""

import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Dict
import logging

from ..types import AggregateResults, Outcome, Strategy

logger = logging.getLogger(__name__)

STRATEGY_ROWS = [s.value for s in Strategy]
OUTCOME_COLUMNS = [o.value for o in (Outcome.WIN, Outcome.LOSE)]

DISPLAY_DECIMALS = 2


@dataclass
class ResultsSummary:
    """
    Counts and row proportions for a run.

    Attributes:
        counts: DataFrame indexed by strategy ('stay', 'switch') with
                columns 'WIN' and 'LOSE' holding raw counts
        n_trials: Number of trials summarized
    """
    counts: pd.DataFrame
    n_trials: int

    @property
    def proportions(self) -> pd.DataFrame:
        """Row-normalized proportions; each row sums to 1.0 (NaN if no trials)."""
        totals = self.counts.sum(axis=1).astype(np.float64)
        return self.counts.astype(np.float64).div(totals.replace(0, np.nan), axis=0)

    def rounded(self, decimals: int = DISPLAY_DECIMALS) -> pd.DataFrame:
        return self.proportions.round(decimals)

    def win_rate(self, strategy: Strategy) -> float:
        return float(self.proportions.loc[strategy.value, Outcome.WIN.value])

    def to_dict(self) -> Dict:
        """Convert to serializable dict."""
        return {
            'n_trials': self.n_trials,
            'counts': {
                row: {col: int(self.counts.loc[row, col]) for col in OUTCOME_COLUMNS}
                for row in STRATEGY_ROWS
            },
            'proportions': {
                row: {col: float(self.proportions.loc[row, col]) for col in OUTCOME_COLUMNS}
                for row in STRATEGY_ROWS
            },
        }


def summarize(results: AggregateResults) -> ResultsSummary:
    """
    Tabulate a run into counts by strategy and outcome.

    All four cells are always present, even when a strategy never won or
    never lost (or when there are no trials at all).
    """
    frame = results.to_frame()

    if frame.empty:
        counts = pd.DataFrame(0, index=STRATEGY_ROWS, columns=OUTCOME_COLUMNS)
    else:
        counts = pd.crosstab(frame['strategy'], frame['outcome'])
        counts = counts.reindex(index=STRATEGY_ROWS, columns=OUTCOME_COLUMNS, fill_value=0)

    counts = counts.astype(np.int64)
    counts.index.name = 'strategy'
    counts.columns.name = 'outcome'

    logger.debug("Summarized %d trials", len(results))

    return ResultsSummary(counts=counts, n_trials=len(results))

"""
Run diagnostics.

Confidence intervals on each strategy's win rate, comparison against the
theoretical rates, and a chi-square test that the outcome depends on the
strategy.
"""

import numpy as np
from scipy import stats
from typing import Dict
import logging

from .types import Strategy, Outcome, InvalidArgumentError
from .metrics.summary import ResultsSummary

logger = logging.getLogger(__name__)


THEORETICAL_WIN_RATE: Dict[Strategy, float] = {
    Strategy.STAY: 1.0 / 3.0,
    Strategy.SWITCH: 2.0 / 3.0,
}


def compute_diagnostics(summary: ResultsSummary, confidence: float = 0.95) -> Dict:
    """
    Compute per-strategy and overall diagnostics for a summarized run.

    Args:
        summary: Output of summarize()
        confidence: Confidence level for the Wilson intervals

    Returns:
        Dict with:
            n_trials
            confidence
            strategies: {'stay'|'switch': {wins, win_rate, ci_low, ci_high,
                         theoretical, deviation, theory_in_ci}}
            switch_to_stay_ratio: switch win rate / stay win rate (NaN if stay never won)
            chi2, chi2_p_value: independence test of strategy x outcome
    """
    if not 0.0 < confidence < 1.0:
        raise InvalidArgumentError(f"confidence must be in (0, 1), got {confidence}")

    n = summary.n_trials
    diag = {
        'n_trials': n,
        'confidence': confidence,
        'strategies': {},
        'switch_to_stay_ratio': float('nan'),
        'chi2': float('nan'),
        'chi2_p_value': float('nan'),
    }

    if n == 0:
        logger.warning("No trials to diagnose")
        for strategy in Strategy:
            diag['strategies'][strategy.value] = _empty_strategy_entry(strategy)
        return diag

    for strategy in Strategy:
        wins = int(summary.counts.loc[strategy.value, Outcome.WIN.value])
        ci = stats.binomtest(wins, n).proportion_ci(
            confidence_level=confidence, method='wilson'
        )
        rate = wins / n
        theory = THEORETICAL_WIN_RATE[strategy]
        diag['strategies'][strategy.value] = {
            'wins': wins,
            'win_rate': rate,
            'ci_low': float(ci.low),
            'ci_high': float(ci.high),
            'theoretical': theory,
            'deviation': abs(rate - theory),
            'theory_in_ci': bool(ci.low <= theory <= ci.high),
        }

    stay_rate = diag['strategies'][Strategy.STAY.value]['win_rate']
    switch_rate = diag['strategies'][Strategy.SWITCH.value]['win_rate']
    if stay_rate > 0:
        diag['switch_to_stay_ratio'] = switch_rate / stay_rate

    # Every trial contributes one WIN and one LOSE, so no marginal is zero
    chi2, p_value, _, _ = stats.chi2_contingency(summary.counts.to_numpy())
    diag['chi2'] = float(chi2)
    diag['chi2_p_value'] = float(p_value)

    return diag


def _empty_strategy_entry(strategy: Strategy) -> Dict:
    return {
        'wins': 0,
        'win_rate': float('nan'),
        'ci_low': float('nan'),
        'ci_high': float('nan'),
        'theoretical': THEORETICAL_WIN_RATE[strategy],
        'deviation': float('nan'),
        'theory_in_ci': False,
    }


def format_diagnostics(diag: Dict) -> str:
    """Format diagnostics dict as a human-readable string."""
    pct = int(round(diag['confidence'] * 100))
    lines = [
        "=" * 60,
        "DIAGNOSTICS",
        "=" * 60,
        f"Trials: {diag['n_trials']}",
    ]

    for name, entry in diag['strategies'].items():
        lines.append(f"\n  {name}:")
        lines.append(f"    Win rate:     {entry['win_rate']:.4f}")
        lines.append(f"    {pct}% CI:       [{entry['ci_low']:.4f}, {entry['ci_high']:.4f}]")
        lines.append(f"    Theoretical:  {entry['theoretical']:.4f}")
        flag = "yes" if entry['theory_in_ci'] else "NO"
        lines.append(f"    Theory in CI: {flag}")

    ratio = diag['switch_to_stay_ratio']
    if not np.isnan(ratio):
        lines.append(f"\n  Switch/stay win ratio: {ratio:.3f}")
    if not np.isnan(diag['chi2']):
        lines.append(
            f"  Chi-square: {diag['chi2']:.2f} (p = {diag['chi2_p_value']:.3g})"
        )

    return "\n".join(lines)

"""
Summary and diagnostics tests.
"""
import numpy as np
import pytest

from monty_hall.types import (
    AggregateResults,
    Door,
    GameLayout,
    InvalidArgumentError,
    Label,
    Outcome,
    Strategy,
    TrialResult,
)
from monty_hall.simulation import run_trials
from monty_hall.metrics import summarize
from monty_hall.diagnostics import compute_diagnostics, format_diagnostics

P, D = Label.PRIZE, Label.DECOY


def _trial(stay_wins: bool) -> TrialResult:
    layout = GameLayout((P, D, D))
    if stay_wins:
        return TrialResult(layout, Door.D1, Door.D2, Outcome.WIN, Outcome.LOSE)
    return TrialResult(layout, Door.D2, Door.D3, Outcome.LOSE, Outcome.WIN)


@pytest.fixture
def small_results():
    # 1 stay win, 3 switch wins
    return AggregateResults([_trial(True), _trial(False), _trial(False), _trial(False)])


class TestSummarize:

    def test_counts(self, small_results):
        counts = summarize(small_results).counts
        assert list(counts.index) == ['stay', 'switch']
        assert list(counts.columns) == ['WIN', 'LOSE']
        assert counts.loc['stay', 'WIN'] == 1
        assert counts.loc['stay', 'LOSE'] == 3
        assert counts.loc['switch', 'WIN'] == 3
        assert counts.loc['switch', 'LOSE'] == 1

    def test_full_precision_proportions(self):
        results = AggregateResults([_trial(True), _trial(False), _trial(False)])
        summary = summarize(results)
        assert summary.proportions.loc['stay', 'WIN'] == pytest.approx(1 / 3)
        assert summary.proportions.loc['switch', 'WIN'] == pytest.approx(2 / 3)
        assert summary.rounded().loc['stay', 'WIN'] == pytest.approx(0.33)
        assert summary.rounded(3).loc['switch', 'WIN'] == pytest.approx(0.667)

    def test_rows_sum_to_one(self):
        summary = summarize(run_trials(777, seed=10))
        np.testing.assert_allclose(summary.proportions.sum(axis=1).to_numpy(), 1.0)

    def test_missing_cells_filled_with_zero(self):
        summary = summarize(AggregateResults([_trial(True)]))
        assert summary.counts.loc['stay', 'LOSE'] == 0
        assert summary.counts.loc['switch', 'WIN'] == 0
        assert summary.win_rate(Strategy.STAY) == 1.0

    def test_empty_results(self):
        summary = summarize(AggregateResults())
        assert summary.n_trials == 0
        assert int(summary.counts.to_numpy().sum()) == 0
        assert summary.proportions.isna().all().all()

    def test_to_dict(self, small_results):
        data = summarize(small_results).to_dict()
        assert data['n_trials'] == 4
        assert data['counts']['switch']['WIN'] == 3
        assert data['proportions']['stay']['WIN'] == pytest.approx(0.25)


class TestAggregateResults:

    def test_frame_has_two_rows_per_trial(self, small_results):
        frame = small_results.to_frame()
        assert len(frame) == 8
        assert list(frame.columns) == ['trial', 'strategy', 'outcome']
        assert list(frame['strategy'][:2]) == ['stay', 'switch']

    def test_win_counts(self, small_results):
        assert small_results.win_counts() == {Strategy.STAY: 1, Strategy.SWITCH: 3}

    def test_merge_keeps_order(self):
        a = AggregateResults([_trial(True)])
        b = AggregateResults([_trial(False)])
        a.merge(b)
        assert [t.stay_outcome for t in a] == [Outcome.WIN, Outcome.LOSE]


class TestDiagnostics:

    def test_large_run_matches_theory(self):
        summary = summarize(run_trials(100000, seed=42, method="vectorized"))
        diag = compute_diagnostics(summary)

        stay = diag['strategies']['stay']
        switch = diag['strategies']['switch']
        assert stay['ci_low'] < stay['win_rate'] < stay['ci_high']
        assert stay['deviation'] < 0.02
        assert switch['deviation'] < 0.02
        assert diag['switch_to_stay_ratio'] == pytest.approx(2.0, abs=0.15)
        assert diag['chi2_p_value'] < 1e-6

    def test_empty_summary(self):
        diag = compute_diagnostics(summarize(AggregateResults()))
        assert diag['n_trials'] == 0
        assert np.isnan(diag['strategies']['stay']['win_rate'])
        assert np.isnan(diag['chi2'])

    def test_rejects_bad_confidence(self, small_results):
        with pytest.raises(InvalidArgumentError):
            compute_diagnostics(summarize(small_results), confidence=1.5)

    def test_format(self, small_results):
        text = format_diagnostics(compute_diagnostics(summarize(small_results)))
        assert "DIAGNOSTICS" in text
        assert "stay" in text
        assert "switch" in text
        assert "Chi-square" in text

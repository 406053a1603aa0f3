"""
Main simulation pipeline.

Runs the trials described by a SimulationConfig, tabulates them and
computes diagnostics in one call.
"""

import time
import logging
from typing import Dict, Any

from .config import SimulationConfig
from .simulation import run_trials
from .metrics import summarize
from .diagnostics import compute_diagnostics

logger = logging.getLogger(__name__)


def run_simulation(config: SimulationConfig, verbose: bool = False) -> Dict[str, Any]:
    """
    Run a full simulation.

    Args:
        config: Run parameters
        verbose: Print progress

    Returns:
        Dict with:
            results: AggregateResults
            summary: ResultsSummary
            diagnostics: Dict from compute_diagnostics()
            metadata: run parameters and elapsed time
    """
    start = time.time()

    if verbose:
        print(f"Playing {config.n_trials} games ({config.method}, workers={config.n_workers})...")

    results = run_trials(
        config.n_trials,
        seed=config.seed,
        n_workers=config.n_workers,
        method=config.method,
    )
    summary = summarize(results)
    diagnostics = compute_diagnostics(summary, confidence=config.confidence)

    elapsed = time.time() - start
    logger.info("Simulation finished: %d trials in %.2fs", len(results), elapsed)

    return {
        'results': results,
        'summary': summary,
        'diagnostics': diagnostics,
        'metadata': {
            'n_trials': config.n_trials,
            'seed': config.seed,
            'n_workers': config.n_workers,
            'method': config.method,
            'elapsed_seconds': elapsed,
        },
    }

"""
Monte Carlo runner.

Repeats the single-game engine n times and collects every trial. Trials can
be split across worker threads; each worker draws from its own Generator
spawned from one SeedSequence, and partial results are merged in chunk
order so a given (seed, n_workers) pair always reproduces the same run.
"""

import numpy as np
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Literal, Union
import logging

from ..types import AggregateResults, InvalidArgumentError
from ..game.engine import play_one_trial
from .vectorized import simulate_trials_vectorized

logger = logging.getLogger(__name__)


RunMethod = Literal["loop", "vectorized"]

SeedLike = Union[int, np.random.SeedSequence, None]

PROGRESS_EVERY = 10000


def run_trials(
    n_trials: int,
    seed: SeedLike = None,
    n_workers: int = 1,
    method: RunMethod = "loop",
    rng: Optional[np.random.Generator] = None
) -> AggregateResults:
    """
    Play n_trials independent games and collect the results in order.

    Args:
        n_trials: Number of games; 0 returns an empty collection
        seed: Random seed (accepts int or SeedSequence)
        n_workers: Worker threads for the loop method (1 = sequential)
        method: "loop" (engine per trial) or "vectorized" (numpy batch)
        rng: Optional Generator for a sequential run; overrides seed

    Returns:
        AggregateResults holding exactly n_trials TrialResults

    Raises:
        InvalidArgumentError: negative or non-integer n_trials, n_workers < 1,
            unknown method, or n_workers > 1 combined with rng or the
            vectorized method
    """
    n_trials = _validate_trial_count(n_trials)

    if isinstance(n_workers, bool) or not isinstance(n_workers, (int, np.integer)) or n_workers < 1:
        raise InvalidArgumentError(f"n_workers must be a positive integer, got {n_workers!r}")
    if method not in ("loop", "vectorized"):
        raise InvalidArgumentError(f"Unknown run method '{method}'")
    if rng is not None and n_workers > 1:
        raise InvalidArgumentError("An explicit rng cannot be shared across workers; pass a seed")
    if method == "vectorized" and n_workers > 1:
        raise InvalidArgumentError("The vectorized method runs in one batch; use n_workers=1")

    if n_trials == 0:
        logger.info("Zero trials requested, returning empty results")
        return AggregateResults()

    if method == "vectorized":
        logger.info("Running %d trials (vectorized)", n_trials)
        return simulate_trials_vectorized(n_trials, seed=seed, rng=rng).to_results()

    if n_workers == 1:
        if rng is None:
            rng = np.random.default_rng(seed)
        logger.info("Running %d trials", n_trials)
        return _run_chunk(n_trials, rng)

    return _run_parallel(n_trials, seed, int(n_workers))


def _validate_trial_count(n_trials) -> int:
    if isinstance(n_trials, bool) or not isinstance(n_trials, (int, np.integer)):
        raise InvalidArgumentError(f"n_trials must be an integer, got {n_trials!r}")
    if n_trials < 0:
        raise InvalidArgumentError(f"n_trials must be >= 0, got {n_trials}")
    return int(n_trials)


def _run_chunk(n_trials: int, rng: np.random.Generator) -> AggregateResults:
    results = AggregateResults()
    for i in range(n_trials):
        results.append(play_one_trial(rng))
        if (i + 1) % PROGRESS_EVERY == 0:
            logger.info("Trials: %d/%d", i + 1, n_trials)
    return results


def split_trials(n_trials: int, n_workers: int) -> List[int]:
    """Near-equal chunk sizes summing to n_trials, empty chunks dropped."""
    base, remainder = divmod(n_trials, n_workers)
    sizes = [base + (1 if i < remainder else 0) for i in range(n_workers)]
    return [s for s in sizes if s > 0]


def _run_parallel(n_trials: int, seed: SeedLike, n_workers: int) -> AggregateResults:
    sizes = split_trials(n_trials, n_workers)
    if isinstance(seed, np.random.SeedSequence):
        root = seed
    else:
        root = np.random.SeedSequence(seed)
    child_seeds = root.spawn(len(sizes))
    rngs = [np.random.default_rng(s) for s in child_seeds]

    logger.info("Running %d trials across %d workers", n_trials, len(sizes))

    with ThreadPoolExecutor(max_workers=len(sizes)) as executor:
        futures = [
            executor.submit(_run_chunk, size, worker_rng)
            for size, worker_rng in zip(sizes, rngs)
        ]
        # result() re-raises any worker error; chunk order keeps runs reproducible
        partials = [future.result() for future in futures]

    merged = AggregateResults()
    for partial in partials:
        merged.merge(partial)
    return merged

"""Random playouts for the lookahead bots.

Each playout works on its own clone, so batches can be handed to a process
pool; ``run_batch`` falls back to a plain loop for a single worker.
"""
from __future__ import annotations

import random
from concurrent.futures import ProcessPoolExecutor
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from ..board import MoveRequest
from ..types import Player
from .base import signed_total

if TYPE_CHECKING:
    from ..referee import RefereeState

Job = Tuple["RefereeState", Optional[MoveRequest], Player, int]


def playout(state: "RefereeState", request: Optional[MoveRequest], own: Player, seed: int) -> int:
    """Apply ``request`` (if any) to a clone, finish randomly, score from ``own``'s seat."""
    from ..arena import Match

    sim = state.clone()
    if request is not None:
        sim.process_move(request)
    result = Match.play_random_from_state(sim, random.Random(seed))
    return signed_total(result.player_scores, own)


def _run_job(job: Job) -> int:
    return playout(*job)


def run_batch(jobs: Sequence[Job], workers: int = 1) -> List[int]:
    if workers <= 1 or len(jobs) <= 1:
        return [_run_job(job) for job in jobs]
    with ProcessPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(_run_job, jobs))


__all__ = ["playout", "run_batch"]

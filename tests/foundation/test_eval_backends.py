from __future__ import annotations

import asyncio
import time

import pytest

from designopt.foundation.candidate import Candidate
from designopt.foundation.eval import (
    ExecutorEvalBackend,
    GatherEvalBackend,
    SerialEvalBackend,
    resolve_eval_backend,
)
from designopt.foundation.exceptions import UnsupportedMethodError


def _candidates(n: int) -> list[Candidate]:
    return [Candidate(genes={"x": float(i)}) for i in range(n)]


def test_gather_backend_runs_evaluations_concurrently():
    in_flight = 0
    peak = 0

    async def evaluator(candidate):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return candidate.genes["x"] * 2

    outcomes = asyncio.run(GatherEvalBackend().evaluate(_candidates(5), evaluator))
    assert [o.value for o in outcomes] == [0.0, 2.0, 4.0, 6.0, 8.0]
    assert peak == 5


def test_gather_backend_respects_max_concurrency():
    in_flight = 0
    peak = 0

    async def evaluator(candidate):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.005)
        in_flight -= 1
        return 1.0

    asyncio.run(GatherEvalBackend(max_concurrency=2).evaluate(_candidates(6), evaluator))
    assert peak == 2


def test_exceptions_become_outcomes_in_order():
    def evaluator(candidate):
        if candidate.genes["x"] == 1.0:
            raise RuntimeError("solver diverged")
        return 1.0

    outcomes = asyncio.run(GatherEvalBackend().evaluate(_candidates(3), evaluator))
    assert [o.ok for o in outcomes] == [True, False, True]
    assert isinstance(outcomes[1].error, RuntimeError)


def test_evaluator_receives_a_snapshot():
    def evaluator(candidate):
        candidate.genes["x"] = 99.0
        return 0.0

    cands = _candidates(2)
    asyncio.run(GatherEvalBackend().evaluate(cands, evaluator))
    assert [c.genes["x"] for c in cands] == [0.0, 1.0]


def test_serial_backend_matches_gather():
    def evaluator(candidate):
        return candidate.genes["x"] + 1

    serial = asyncio.run(SerialEvalBackend().evaluate(_candidates(4), evaluator))
    gathered = asyncio.run(GatherEvalBackend().evaluate(_candidates(4), evaluator))
    assert [o.value for o in serial] == [o.value for o in gathered]


def test_executor_backend_runs_sync_evaluators():
    def evaluator(candidate):
        time.sleep(0.001)
        return candidate.genes["x"] ** 2

    outcomes = asyncio.run(ExecutorEvalBackend(n_workers=2).evaluate(_candidates(4), evaluator))
    assert [o.value for o in outcomes] == [0.0, 1.0, 4.0, 9.0]


def test_executor_backend_rejects_coroutines():
    async def evaluator(candidate):
        return 0.0

    with pytest.raises(TypeError):
        asyncio.run(ExecutorEvalBackend(n_workers=1).evaluate(_candidates(1), evaluator))


def test_resolve_eval_backend():
    assert isinstance(resolve_eval_backend(None), GatherEvalBackend)
    assert isinstance(resolve_eval_backend("serial"), SerialEvalBackend)
    assert isinstance(resolve_eval_backend("executor", n_workers=1), ExecutorEvalBackend)
    with pytest.raises(UnsupportedMethodError):
        resolve_eval_backend("dask")

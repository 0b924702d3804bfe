from __future__ import annotations

import asyncio
import inspect
import os
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Optional, Sequence

from designopt.foundation.candidate import Candidate
from designopt.foundation.exceptions import UnsupportedMethodError
from . import EvaluationBackend, EvaluationOutcome, Evaluator, call_evaluator


def _collect(results: Sequence[object]) -> list[EvaluationOutcome]:
    outcomes: list[EvaluationOutcome] = []
    for res in results:
        if isinstance(res, Exception):
            outcomes.append(EvaluationOutcome(error=res))
        elif isinstance(res, BaseException):
            raise res
        else:
            outcomes.append(EvaluationOutcome(value=res))
    return outcomes


class GatherEvalBackend(EvaluationBackend):
    """
    Concurrent evaluation on the running event loop (default).

    Every candidate of the batch is scheduled at once and awaited with
    ``asyncio.gather``; ``max_concurrency`` optionally caps in-flight calls.
    Each evaluator call receives its own snapshot of the candidate.
    """

    def __init__(self, max_concurrency: Optional[int] = None):
        if max_concurrency is not None and max_concurrency <= 0:
            raise ValueError("max_concurrency must be positive.")
        self.max_concurrency = max_concurrency

    async def evaluate(self, candidates: Sequence[Candidate], evaluator: Evaluator) -> list[EvaluationOutcome]:
        if not candidates:
            return []
        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None

        async def _one(candidate: Candidate):
            if semaphore is None:
                return await call_evaluator(evaluator, candidate.clone())
            async with semaphore:
                return await call_evaluator(evaluator, candidate.clone())

        results = await asyncio.gather(*(_one(c) for c in candidates), return_exceptions=True)
        return _collect(results)


class SerialEvalBackend(EvaluationBackend):
    """One evaluation at a time, for evaluators that cannot run concurrently."""

    async def evaluate(self, candidates: Sequence[Candidate], evaluator: Evaluator) -> list[EvaluationOutcome]:
        outcomes: list[EvaluationOutcome] = []
        for candidate in candidates:
            try:
                value = await call_evaluator(evaluator, candidate.clone())
            except Exception as exc:
                outcomes.append(EvaluationOutcome(error=exc))
            else:
                outcomes.append(EvaluationOutcome(value=value))
        return outcomes


class ExecutorEvalBackend(EvaluationBackend):
    """
    Runs synchronous evaluators in a ``concurrent.futures`` executor.

    Notes:
        - Defaults to a thread pool sized to the CPU count.
        - A process pool works when the evaluator and candidates are picklable.
    """

    def __init__(self, executor: Optional[Executor] = None, n_workers: Optional[int] = None):
        self.n_workers = max(1, n_workers or os.cpu_count() or 1)
        self._executor = executor

    async def evaluate(self, candidates: Sequence[Candidate], evaluator: Evaluator) -> list[EvaluationOutcome]:
        if not candidates:
            return []
        if inspect.iscoroutinefunction(evaluator):
            raise TypeError("ExecutorEvalBackend expects a synchronous evaluator; use GatherEvalBackend for coroutines.")
        loop = asyncio.get_running_loop()
        owned = self._executor is None
        executor = self._executor or ThreadPoolExecutor(max_workers=self.n_workers)
        try:
            futures = [loop.run_in_executor(executor, evaluator, c.clone()) for c in candidates]
            results = await asyncio.gather(*futures, return_exceptions=True)
        finally:
            if owned:
                executor.shutdown(wait=False)
        return _collect(results)


def resolve_eval_backend(
    name: str | None,
    *,
    max_concurrency: Optional[int] = None,
    n_workers: Optional[int] = None,
) -> EvaluationBackend:
    key = (name or "gather").lower()
    if key == "serial":
        return SerialEvalBackend()
    if key in {"executor", "threads"}:
        return ExecutorEvalBackend(n_workers=n_workers)
    if key != "gather":
        raise UnsupportedMethodError("evaluation backend", str(name), ["gather", "serial", "executor"])
    return GatherEvalBackend(max_concurrency=max_concurrency)


__all__ = ["GatherEvalBackend", "SerialEvalBackend", "ExecutorEvalBackend", "resolve_eval_backend"]

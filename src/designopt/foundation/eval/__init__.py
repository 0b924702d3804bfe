from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Sequence

from designopt.foundation.candidate import Candidate

Evaluator = Callable[[Candidate], "Awaitable[Any] | Any"]


@dataclass
class EvaluationOutcome:
    """Raw evaluator output (or the exception it raised) for one candidate."""

    value: Any = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def call_evaluator(evaluator: Evaluator, candidate: Candidate) -> Any:
    """Call a sync or async evaluator and await the result when needed."""
    result = evaluator(candidate)
    if inspect.isawaitable(result):
        result = await result
    return result


class EvaluationBackend(ABC):
    """
    Evaluates one generation as a batch.

    Implementations return one outcome per candidate, in input order, only
    after every evaluation of the batch has finished.
    """

    @abstractmethod
    async def evaluate(self, candidates: Sequence[Candidate], evaluator: Evaluator) -> list[EvaluationOutcome]:
        raise NotImplementedError


from .backends import (  # noqa: E402
    ExecutorEvalBackend,
    GatherEvalBackend,
    SerialEvalBackend,
    resolve_eval_backend,
)

__all__ = [
    "Evaluator",
    "EvaluationOutcome",
    "EvaluationBackend",
    "call_evaluator",
    "GatherEvalBackend",
    "SerialEvalBackend",
    "ExecutorEvalBackend",
    "resolve_eval_backend",
]

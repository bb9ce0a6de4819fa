"""Dispatch/polling loop.

State machine with a single failure rule:

    idle -> invoking -> rendering -> (invoking ... | terminated)
    invoking -> terminated            (any failure, then re-raise)

`poll` only repeats calls that succeeded. There is no delay, no backoff and
no retry of failures; an always-succeeding polling loop runs until the
process is stopped from outside.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Optional, Sequence

from loguru import logger

from core.domain.models import (
    ClassifiedFailure,
    FailureKind,
    InvocationOutcome,
    LoopState,
    Success,
    UnclassifiedFailure,
)

FailureClassifier = Callable[[BaseException], Optional[FailureKind]]
OutcomeHandler = Callable[[InvocationOutcome], None]


def classify_failure(exc: BaseException, classify: FailureClassifier | None) -> InvocationOutcome:
    kind = classify(exc) if classify is not None else None
    if kind is None:
        return UnclassifiedFailure(error_type=type(exc).__name__, message=str(exc))
    return ClassifiedFailure(kind=kind, error_type=type(exc).__name__, message=str(exc))


async def settle(result: Any) -> Any:
    """Await `result` when the target returned an awaitable."""

    if inspect.isawaitable(result):
        return await result
    return result


class PollingLoop:
    """Invoke `target(*args)` once, or repeatedly while `poll` holds and calls succeed."""

    def __init__(
        self,
        target: Callable[..., Any],
        args: Sequence[Any],
        *,
        poll: bool = False,
        classify: FailureClassifier | None = None,
        on_outcome: OutcomeHandler | None = None,
    ) -> None:
        self._target = target
        self._args = tuple(args)
        self._poll = poll
        self._classify = classify
        self._on_outcome = on_outcome
        self.state = LoopState.IDLE
        self.iterations = 0
        self.renders = 0
        self.failure: InvocationOutcome | None = None

    async def run(self) -> None:
        if self.state is not LoopState.IDLE:
            raise RuntimeError("PollingLoop.run() can only be called once")

        while True:
            self.state = LoopState.INVOKING
            self.iterations += 1
            logger.debug("iteration {}", self.iterations)
            try:
                value = await settle(self._target(*self._args))
            except Exception as exc:
                self.state = LoopState.TERMINATED
                self.failure = classify_failure(exc, self._classify)
                self._emit(self.failure)
                raise

            self.state = LoopState.RENDERING
            self._emit(Success(value=value))
            self.renders += 1

            if not self._poll:
                self.state = LoopState.TERMINATED
                return

    def _emit(self, outcome: InvocationOutcome) -> None:
        if self._on_outcome is not None:
            self._on_outcome(outcome)

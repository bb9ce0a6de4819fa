"""Call orchestration.

This module strings the core steps together for one CLI invocation:
argument coercion, optional header bootstrap, optional market preload,
method resolution and the dispatch/polling loop. Printing stays in the UI
layer: everything user-facing goes through `PipelineHooks`, which keeps the
pipeline reusable from tests and other entry-points.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from loguru import logger

from core.domain.models import DispatchMode, InvocationOutcome, Resolution, Success
from core.errors import PropertyAbsentError
from core.interfaces.challenge import ChallengeSolver
from core.services.arguments import bind_arguments, coerce_arguments, format_arguments
from core.services.bootstrap import apply_challenge_headers
from core.services.polling import FailureClassifier, PollingLoop, settle
from core.services.resolver import client_label, resolve_method


@dataclass
class CallRequest:
    """Parameters that control one invocation."""

    method_name: str
    params: Sequence[str] = ()
    poll: bool = False
    load_markets: bool = False


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (banner, results, failures)."""

    call_started: Callable[[str], None] | None = None
    outcome: Callable[[InvocationOutcome], None] | None = None


@dataclass
class CallResult:
    """Output of a pipeline invocation that did not raise."""

    resolution: Resolution
    args: list[Any] = field(default_factory=list)
    iterations: int = 0
    renders: int = 0


async def run_call(
    client: object,
    request: CallRequest,
    *,
    solver: ChallengeSolver | None = None,
    classify: FailureClassifier | None = None,
    hooks: PipelineHooks | None = None,
) -> CallResult:
    """Run one logical call against `client`.

    Raises `ArgumentParseError` before any I/O when a parameter is malformed,
    `PropertyAbsentError` when the method does not exist, and re-raises the
    client's own exception when an invocation fails.
    """

    hooks = hooks or PipelineHooks()
    args = coerce_arguments(request.params)

    if solver is not None:
        await apply_challenge_headers(client, solver)

    if request.load_markets:
        logger.debug("preloading markets")
        await settle(client.load_markets())  # type: ignore[attr-defined]

    resolution = resolve_method(client, request.method_name)
    label = client_label(client)

    if resolution.mode is DispatchMode.ABSENT:
        raise PropertyAbsentError(label, request.method_name)

    if resolution.mode is DispatchMode.DATA:
        if hooks.outcome:
            hooks.outcome(Success(value=resolution.target))
        return CallResult(resolution=resolution, args=args, renders=1)

    call_args = bind_arguments(resolution.target, args)
    if hooks.call_started:
        hooks.call_started(f"{label}.{request.method_name} ({format_arguments(args)})")

    loop = PollingLoop(
        resolution.target,
        call_args,
        poll=request.poll,
        classify=classify,
        on_outcome=hooks.outcome,
    )
    await loop.run()
    return CallResult(
        resolution=resolution,
        args=call_args,
        iterations=loop.iterations,
        renders=loop.renders,
    )

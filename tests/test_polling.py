import ccxt.async_support as ccxt
import pytest

from adapters.exchange_factory import classify_ccxt_error
from core.domain.models import (
    ClassifiedFailure,
    FailureKind,
    LoopState,
    Success,
    UnclassifiedFailure,
)
from core.services.polling import PollingLoop, classify_failure


class Flaky:
    """Succeeds `successes` times, then raises `error` on every later call."""

    def __init__(self, successes: int, error: Exception | None = None) -> None:
        self.successes = successes
        self.error = error
        self.calls: list[tuple] = []

    async def __call__(self, *args):
        self.calls.append(args)
        if len(self.calls) > self.successes and self.error is not None:
            raise self.error
        return {"n": len(self.calls)}


@pytest.mark.asyncio
async def test_single_iteration_without_poll() -> None:
    target = Flaky(successes=10)
    outcomes = []
    loop = PollingLoop(target, ["BTC/USD", 5], on_outcome=outcomes.append)

    await loop.run()

    assert target.calls == [("BTC/USD", 5)]
    assert loop.iterations == 1
    assert loop.renders == 1
    assert loop.state is LoopState.TERMINATED
    assert outcomes == [Success(value={"n": 1})]


@pytest.mark.asyncio
async def test_failure_without_poll_is_reported_once_and_reraised() -> None:
    error = ccxt.BadSymbol("fakex does not have market symbol FOO/BAR")
    target = Flaky(successes=0, error=error)
    outcomes = []
    loop = PollingLoop(target, [], classify=classify_ccxt_error, on_outcome=outcomes.append)

    with pytest.raises(ccxt.BadSymbol) as excinfo:
        await loop.run()

    assert excinfo.value is error
    assert len(target.calls) == 1
    assert loop.renders == 0
    assert outcomes == [
        ClassifiedFailure(
            kind=FailureKind.EXCHANGE_ERROR,
            error_type="BadSymbol",
            message="fakex does not have market symbol FOO/BAR",
        )
    ]
    assert loop.failure == outcomes[0]


@pytest.mark.asyncio
async def test_poll_repeats_successes_until_first_failure() -> None:
    target = Flaky(successes=3, error=ccxt.RequestTimeout("timed out"))
    outcomes = []
    loop = PollingLoop(target, [], poll=True, classify=classify_ccxt_error, on_outcome=outcomes.append)

    with pytest.raises(ccxt.RequestTimeout):
        await loop.run()

    assert loop.iterations == 4
    assert loop.renders == loop.iterations - 1
    assert [type(o) for o in outcomes] == [Success, Success, Success, ClassifiedFailure]
    assert outcomes[-1].kind is FailureKind.NETWORK_ERROR
    assert loop.state is LoopState.TERMINATED


@pytest.mark.asyncio
async def test_unclassified_failure_still_terminates() -> None:
    target = Flaky(successes=1, error=KeyError("boom"))
    outcomes = []
    loop = PollingLoop(target, [], poll=True, classify=classify_ccxt_error, on_outcome=outcomes.append)

    with pytest.raises(KeyError):
        await loop.run()

    assert loop.iterations == 2
    assert isinstance(outcomes[-1], UnclassifiedFailure)
    assert outcomes[-1].error_type == "KeyError"


@pytest.mark.asyncio
async def test_sync_targets_are_supported() -> None:
    loop = PollingLoop(lambda a, b: a + b, [2, 3], on_outcome=None)
    await loop.run()
    assert loop.renders == 1


@pytest.mark.asyncio
async def test_loop_runs_only_once() -> None:
    loop = PollingLoop(Flaky(successes=1), [])
    await loop.run()
    with pytest.raises(RuntimeError):
        await loop.run()


def test_classify_failure_without_classifier() -> None:
    outcome = classify_failure(ValueError("bad"), None)
    assert outcome == UnclassifiedFailure(error_type="ValueError", message="bad")

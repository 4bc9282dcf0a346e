"""Unit tests for the background simulation runner."""

import threading
from concurrent.futures import CancelledError

import pytest

from options_analytics.simulation.runner import SimulationRunner
from options_analytics.utils.exceptions import ResourceLimitError, ValidationError
from options_analytics.utils.types import SimulationRequest, SimulationResult

TIMEOUT = 10


class GatedSimulate:
    """Stand-in simulation that blocks until released and records what ran."""

    def __init__(self):
        self.release = threading.Event()
        self.started = threading.Event()
        self.calls = []

    def __call__(self, request):
        self.calls.append(request.seed)
        self.started.set()
        assert self.release.wait(TIMEOUT)
        return request.seed


@pytest.fixture
def gated():
    gate = GatedSimulate()
    yield gate
    gate.release.set()


def _request(params, seed):
    return SimulationRequest(params, "call", n_paths=100, steps=2, seed=seed)


def test_runs_real_simulation(small_request):
    with SimulationRunner() as runner:
        result = runner.submit(small_request).result(timeout=TIMEOUT)

    assert isinstance(result, SimulationResult)
    assert result.terminal_prices.shape == (1000,)


def test_invalid_policy_raises():
    with pytest.raises(ValidationError, match="policy"):
        SimulationRunner(policy="fastest")


def test_invalid_request_raises_in_caller(half_year_params):
    with SimulationRunner() as runner:
        with pytest.raises(ValidationError):
            runner.submit(SimulationRequest(half_year_params, "call", n_paths=1, steps=1))
        with pytest.raises(ResourceLimitError):
            runner.submit(SimulationRequest(half_year_params, "call", n_paths=10_000_000, steps=1))


def test_worker_exception_propagates(small_request):
    def failing(request):
        raise RuntimeError("boom")

    with SimulationRunner(simulate_fn=failing) as runner:
        future = runner.submit(small_request)
        with pytest.raises(RuntimeError, match="boom"):
            future.result(timeout=TIMEOUT)


def test_latest_policy_supersedes_pending(half_year_params, gated):
    runner = SimulationRunner(policy="latest", simulate_fn=gated)
    try:
        running = runner.submit(_request(half_year_params, 1))
        assert gated.started.wait(TIMEOUT)
        pending = runner.submit(_request(half_year_params, 2))
        latest = runner.submit(_request(half_year_params, 3))

        gated.release.set()

        assert latest.result(timeout=TIMEOUT) == 3
        assert running.cancelled()
        assert pending.cancelled()
        with pytest.raises(CancelledError):
            pending.result(timeout=TIMEOUT)
        # The pending request never reached the worker
        assert 2 not in gated.calls
    finally:
        runner.shutdown()


def test_queue_policy_delivers_everything_in_order(half_year_params, gated):
    runner = SimulationRunner(policy="queue", simulate_fn=gated)
    try:
        futures = [runner.submit(_request(half_year_params, seed)) for seed in (1, 2, 3)]
        gated.release.set()

        assert [f.result(timeout=TIMEOUT) for f in futures] == [1, 2, 3]
        assert gated.calls == [1, 2, 3]
    finally:
        runner.shutdown()


def test_shutdown_cancels_pending(half_year_params, gated):
    runner = SimulationRunner(policy="queue", simulate_fn=gated)
    first = runner.submit(_request(half_year_params, 1))
    assert gated.started.wait(TIMEOUT)
    second = runner.submit(_request(half_year_params, 2))

    runner.shutdown(wait=False)
    gated.release.set()

    assert first.result(timeout=TIMEOUT) == 1
    with pytest.raises(CancelledError):
        second.result(timeout=TIMEOUT)

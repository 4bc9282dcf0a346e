"""
Background execution of Monte Carlo simulations.

Simulations cost O(N · steps) and run off the caller's thread in a
``concurrent.futures`` executor. Callers exchange only value types with the
runner: a :class:`SimulationRequest` goes in, and the returned future
resolves to exactly one :class:`SimulationResult`.

Two policies govern overlapping requests:

- ``"latest"``: last request wins. Submitting a request cancels the future
  of the outstanding one; if that computation already started, its result
  is discarded when it finishes.
- ``"queue"``: every request is delivered. With one worker they complete
  in submission order.

There is no way to interrupt a running computation other than shutting the
runner down.
"""

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from functools import partial
from typing import Callable, Optional

from options_analytics.simulation.monte_carlo import simulate
from options_analytics.utils.exceptions import ValidationError
from options_analytics.utils.types import SimulationRequest, SimulationResult
from options_analytics.utils.validation import validate_simulation_request

logger = logging.getLogger(__name__)

POLICIES = ("latest", "queue")


class SimulationRunner:
    """
    Submit simulations to a worker pool under an explicit overlap policy.

    Args:
        policy: "latest" (default) or "queue"
        max_workers: Worker count passed to the executor factory
        executor_factory: Any ``concurrent.futures`` executor class, e.g.
            ``ProcessPoolExecutor`` to run simulations in separate processes
        simulate_fn: Simulation function; must be picklable for process pools

    Example:
        >>> with SimulationRunner() as runner:
        ...     future = runner.submit(request)
        ...     result = future.result()
    """

    def __init__(
        self,
        policy: str = "latest",
        max_workers: int = 1,
        executor_factory: Callable[..., Executor] = ThreadPoolExecutor,
        simulate_fn: Callable[[SimulationRequest], SimulationResult] = simulate,
    ) -> None:
        if policy not in POLICIES:
            raise ValidationError(f"policy must be one of {POLICIES}, got '{policy}'")
        self.policy = policy
        self._simulate_fn = simulate_fn
        self._executor = executor_factory(max_workers=max_workers)
        self._lock = threading.RLock()
        self._outstanding: Optional[tuple[Future, Future]] = None

    def submit(self, request: SimulationRequest) -> Future:
        """
        Queue a simulation and return a future for its result.

        The request is validated in the caller's thread, so invalid input and
        resource-limit violations raise here instead of inside the worker.

        Raises:
            ValidationError: If the request is invalid
            ResourceLimitError: If the request exceeds the resource ceiling
        """
        validate_simulation_request(request)

        outer: Future = Future()
        with self._lock:
            if self.policy == "latest" and self._outstanding is not None:
                self._supersede(*self._outstanding)
            inner = self._executor.submit(self._simulate_fn, request)
            self._outstanding = (outer, inner)

        logger.debug("Submitted simulation N=%d steps=%d", request.n_paths, request.steps)
        inner.add_done_callback(partial(self._deliver, outer))
        return outer

    def _supersede(self, outer: Future, inner: Future) -> None:
        if outer.done():
            return
        outer.cancel()
        if inner.cancel():
            logger.debug("Cancelled pending simulation superseded by a newer request")
        else:
            logger.debug("Simulation superseded while running; its result will be discarded")

    def _deliver(self, outer: Future, inner: Future) -> None:
        with self._lock:
            if self._outstanding is not None and self._outstanding[0] is outer:
                self._outstanding = None
            if outer.cancelled():
                logger.debug("Discarding result of superseded simulation")
                return
            if inner.cancelled():
                outer.cancel()
                return
            exc = inner.exception()
            if exc is not None:
                outer.set_exception(exc)
            else:
                outer.set_result(inner.result())

    def shutdown(self, wait: bool = True, cancel_futures: bool = True) -> None:
        """Stop the worker pool; pending simulations are cancelled by default."""
        self._executor.shutdown(wait=wait, cancel_futures=cancel_futures)

    def __enter__(self) -> "SimulationRunner":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()

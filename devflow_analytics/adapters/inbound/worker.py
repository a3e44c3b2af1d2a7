"""
Analysis Worker Pool

Asynchronous message boundary in front of the RequestDispatcher.

Architecture:
- Each AnalysisWorker owns an asyncio.Queue inbox and a single-thread
  executor. Requests are handled one at a time in arrival order and each
  runs to completion off the event loop.
- Requests are deep-copied when posted, so a worker never shares mutable
  state with its caller.
- Each post carries a pool-issued ticket and responses are correlated by
  ticket, so a request id may be reused once its previous request is no
  longer awaited. A caller that stops waiting (timeout) does not cancel
  the computation; its late response is discarded when it arrives.
- The pool picks the least-busy worker. There is no priority reordering
  and no retry; errors are returned to the caller.

Usage:
    pool = AnalysisWorkerPool(lambda: RequestDispatcher(AnalysisService()), worker_count=2)
    await pool.start()
    report = await pool.analyze_complexity(nodes, connections)
    await pool.shutdown()
"""

from __future__ import annotations

import asyncio
import copy
import itertools
import logging
import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, List, Mapping, Optional

from .dispatcher import RequestDispatcher
from .messages import Operation, AnalysisResponse


class AnalysisRequestError(RuntimeError):
    """The worker answered a request with an error response."""

    def __init__(self, request_id: Optional[str], message: str) -> None:
        super().__init__(message)
        self.request_id = request_id


@dataclass
class WorkerStats:
    """Per-worker counters. ``busy`` is the explicit processing indicator."""
    worker_id: str
    busy: bool = False
    queued: int = 0
    completed_tasks: int = 0
    error_count: int = 0
    last_used: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class AnalysisWorker:
    """
    A single compute unit processing requests sequentially.

    Args:
        worker_id: Name used in logs and stats
        dispatcher: Handles each request message
        on_response: Called on the event loop with (worker_id, ticket, response message)
    """

    def __init__(
        self,
        worker_id: str,
        dispatcher: RequestDispatcher,
        on_response: Callable[[str, int, Dict[str, Any]], None],
    ) -> None:
        self.worker_id = worker_id
        self._dispatcher = dispatcher
        self._on_response = on_response
        self._inbox: Optional[asyncio.Queue] = None
        self._executor: Optional[ThreadPoolExecutor] = None
        self._task: Optional[asyncio.Task] = None
        self.stats = WorkerStats(worker_id=worker_id)
        self.logger = logging.getLogger(__name__)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def load(self) -> int:
        """Queued requests plus the one in progress."""
        queued = self._inbox.qsize() if self._inbox else 0
        return queued + (1 if self.stats.busy else 0)

    @property
    def idle(self) -> bool:
        return self.load == 0

    async def start(self) -> None:
        if self.running:
            return
        self._inbox = asyncio.Queue()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=self.worker_id)
        self._task = asyncio.create_task(self._run(), name=self.worker_id)
        self.logger.debug("Worker %s started", self.worker_id)

    def post(self, ticket: int, message: Mapping[str, Any]) -> None:
        """Enqueue a request under *ticket*. The message is copied, never shared."""
        if not self.running:
            raise RuntimeError(f"Worker {self.worker_id} is not running")
        self._inbox.put_nowait((ticket, copy.deepcopy(dict(message))))

    async def drain(self) -> None:
        """Wait until every posted request has been answered."""
        if self._inbox is not None:
            await self._inbox.join()

    async def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)
            self._task = None
        if self._executor is not None:
            # A computation already started keeps running to completion
            self._executor.shutdown(wait=False)
            self._executor = None
        self.logger.debug("Worker %s stopped", self.worker_id)

    def snapshot(self) -> WorkerStats:
        self.stats.queued = self._inbox.qsize() if self._inbox else 0
        return copy.copy(self.stats)

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        try:
            while True:
                ticket, message = await self._inbox.get()
                self.stats.busy = True
                try:
                    response = await loop.run_in_executor(self._executor, self._dispatcher.handle, message)
                except asyncio.CancelledError:
                    raise
                except Exception as exc:
                    self.logger.exception("Worker %s failed to process a request", self.worker_id)
                    response = AnalysisResponse.failure(message.get("id"), str(exc)).to_message()
                finally:
                    self.stats.busy = False
                    self.stats.last_used = time.time()
                    self._inbox.task_done()

                if response.get("type") == "success":
                    self.stats.completed_tasks += 1
                else:
                    self.stats.error_count += 1
                self._on_response(self.worker_id, ticket, response)
        except asyncio.CancelledError:
            pass


@dataclass
class PoolStats:
    """Aggregated pool counters."""
    total_workers: int
    idle_workers: int
    busy_workers: int
    queued_tasks: int
    active_tasks: int
    total_completed_tasks: int
    total_errors: int
    timeouts: int
    late_responses: int
    average_tasks_per_worker: float
    workers: List[Dict[str, Any]]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class AnalysisWorkerPool:
    """
    Pool of analysis workers with request/response correlation.

    Args:
        dispatcher_factory: Creates the dispatcher for each worker
        worker_count: Number of workers (at least 1)
        task_timeout: Default seconds to wait for a response, None waits forever
        shutdown_timeout: Seconds ``shutdown`` waits for in-flight requests
    """

    def __init__(
        self,
        dispatcher_factory: Callable[[], RequestDispatcher],
        worker_count: int = 1,
        task_timeout: Optional[float] = 30.0,
        shutdown_timeout: float = 10.0,
    ) -> None:
        if worker_count < 1:
            raise ValueError(f"worker_count must be at least 1, got {worker_count}")
        self._dispatcher_factory = dispatcher_factory
        self._worker_count = worker_count
        self.task_timeout = task_timeout
        self.shutdown_timeout = shutdown_timeout

        self._workers: List[AnalysisWorker] = []
        self._pending: Dict[int, asyncio.Future] = {}
        self._in_flight: Dict[str, int] = {}
        self._tickets = itertools.count(1)
        self._running = False
        self._timeouts = 0
        self._late_responses = 0
        self.logger = logging.getLogger(__name__)

    @property
    def running(self) -> bool:
        return self._running

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        if self._running:
            return
        self._workers = [
            AnalysisWorker(f"analysis-worker-{i}", self._dispatcher_factory(), self._on_response)
            for i in range(self._worker_count)
        ]
        for worker in self._workers:
            await worker.start()
        self._running = True
        self.logger.info("Analysis worker pool started with %d workers", len(self._workers))

    async def shutdown(self, timeout: Optional[float] = None) -> None:
        """Stop accepting requests, wait for in-flight work, then stop workers."""
        if not self._running:
            return
        self._running = False
        timeout = self.shutdown_timeout if timeout is None else timeout

        try:
            await asyncio.wait_for(
                asyncio.gather(*(w.drain() for w in self._workers)), timeout=timeout
            )
        except asyncio.TimeoutError:
            self.logger.warning("Shutdown timed out with %d requests in flight", len(self._pending))

        for worker in self._workers:
            await worker.stop()

        for request_id, ticket in self._in_flight.items():
            future = self._pending.get(ticket)
            if future is not None and not future.done():
                future.set_exception(RuntimeError(f"Worker pool shut down before {request_id} completed"))
        self._pending.clear()
        self._in_flight.clear()
        self.logger.info("Analysis worker pool stopped")

    async def __aenter__(self) -> "AnalysisWorkerPool":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.shutdown()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def request(
        self,
        message: Mapping[str, Any],
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Send a complete request envelope and await its response envelope.

        Raises:
            asyncio.TimeoutError: no response within *timeout* seconds
            RuntimeError: the pool is not running
            ValueError: the envelope has no string id, or the id is in flight
        """
        if not self._running:
            raise RuntimeError("Worker pool is not running")

        request_id = message.get("id")
        if not isinstance(request_id, str):
            raise ValueError("Request id must be a string")
        if request_id in self._in_flight:
            raise ValueError(f"Request {request_id} is already in flight")

        ticket = next(self._tickets)
        future = asyncio.get_running_loop().create_future()
        self._pending[ticket] = future
        self._in_flight[request_id] = ticket
        worker = self._select_worker()
        worker.post(ticket, message)

        timeout = self.task_timeout if timeout is None else timeout
        try:
            return await asyncio.wait_for(future, timeout=timeout)
        except asyncio.TimeoutError:
            self._timeouts += 1
            self.logger.warning("Request %s timed out after %ss on %s", request_id, timeout, worker.worker_id)
            raise
        finally:
            self._pending.pop(ticket, None)
            if self._in_flight.get(request_id) == ticket:
                del self._in_flight[request_id]

    async def execute(
        self,
        operation: str,
        data: Dict[str, Any],
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Send *operation* with a generated request id; returns the response envelope."""
        message = {"id": f"task-{uuid.uuid4().hex}", "type": operation, "data": data}
        return await self.request(message, timeout=timeout)

    async def analyze_complexity(
        self,
        nodes: List[Dict[str, Any]],
        connections: List[Dict[str, Any]],
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        response = await self.execute(
            Operation.ANALYZE_COMPLEXITY.value,
            {"nodes": nodes, "connections": connections},
            timeout=timeout,
        )
        return self._unwrap(response)

    async def analyze_progress(
        self,
        nodes: List[Dict[str, Any]],
        timeline: List[Dict[str, Any]],
        time_range: Optional[Dict[str, int]] = None,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        data: Dict[str, Any] = {"nodes": nodes, "timeline": timeline}
        if time_range is not None:
            data["timeRange"] = time_range
        response = await self.execute(Operation.ANALYZE_PROGRESS.value, data, timeout=timeout)
        return self._unwrap(response)

    # ------------------------------------------------------------------
    # Monitoring
    # ------------------------------------------------------------------

    def get_stats(self) -> PoolStats:
        workers = [w.snapshot() for w in self._workers]
        completed = sum(w.completed_tasks for w in workers)
        busy = sum(1 for w in workers if w.busy)
        return PoolStats(
            total_workers=len(workers),
            idle_workers=len(workers) - busy,
            busy_workers=busy,
            queued_tasks=sum(w.queued for w in workers),
            active_tasks=len(self._pending),
            total_completed_tasks=completed,
            total_errors=sum(w.error_count for w in workers),
            timeouts=self._timeouts,
            late_responses=self._late_responses,
            average_tasks_per_worker=completed / len(workers) if workers else 0.0,
            workers=[w.to_dict() for w in workers],
        )

    async def health_check(self, timeout: Optional[float] = None) -> Dict[str, Any]:
        """Run an empty complexity analysis through the pool."""
        issues: List[str] = []
        try:
            await self.analyze_complexity([], [], timeout=timeout)
        except asyncio.TimeoutError:
            issues.append("Analysis pool unhealthy: health check timed out")
        except Exception as exc:
            issues.append(f"Analysis pool unhealthy: {exc}")
        return {"healthy": not issues, "issues": issues}

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _select_worker(self) -> AnalysisWorker:
        idle = [w for w in self._workers if w.idle]
        if idle:
            return min(idle, key=lambda w: w.stats.completed_tasks)
        return min(self._workers, key=lambda w: w.load)

    def _on_response(self, worker_id: str, ticket: int, response: Dict[str, Any]) -> None:
        future = self._pending.pop(ticket, None)
        if future is None or future.done():
            self._late_responses += 1
            self.logger.debug("Discarding late response %s from %s", response.get("id"), worker_id)
            return
        future.set_result(response)

    @staticmethod
    def _unwrap(response: Dict[str, Any]) -> Dict[str, Any]:
        if response.get("type") != "success":
            raise AnalysisRequestError(response.get("id"), response.get("error") or "Unknown error")
        return response["result"]

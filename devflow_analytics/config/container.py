"""
Dependency Injection Container

Wires the analysis service, the dispatcher and the worker pool.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from .settings import Settings, configure_logging

from devflow_analytics.application.ports import IAnalysisUseCase
from devflow_analytics.application.services import AnalysisService
from devflow_analytics.adapters.inbound import RequestDispatcher, AnalysisWorkerPool
from devflow_analytics.domain.services import current_time_ms


@dataclass
class Container:
    """
    Dependency injection container.

    Each worker gets its own dispatcher and analysis service, so no
    analysis object is shared between workers.
    """
    settings: Settings = field(default_factory=Settings)
    clock: Callable[[], int] = current_time_ms

    _pool: Optional[AnalysisWorkerPool] = field(default=None, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Container":
        """Create container from settings and apply its log level."""
        configure_logging(settings.log_level)
        return cls(settings=settings)

    def analysis_service(self) -> IAnalysisUseCase:
        return AnalysisService(clock=self.clock)

    def dispatcher(self) -> RequestDispatcher:
        return RequestDispatcher(self.analysis_service())

    def worker_pool(self) -> AnalysisWorkerPool:
        """Get the worker pool singleton (not started)."""
        if self._pool is None:
            self._pool = AnalysisWorkerPool(
                dispatcher_factory=self.dispatcher,
                worker_count=self.settings.worker_count,
                task_timeout=self.settings.task_timeout,
                shutdown_timeout=self.settings.shutdown_timeout,
            )
        return self._pool

    async def close(self) -> None:
        """Shut down the worker pool if one was created."""
        if self._pool is not None:
            await self._pool.shutdown()
            self._pool = None

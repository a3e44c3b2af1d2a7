"""
Inbound Adapters

Message boundary of the analysis engine: wire models, the request
dispatcher and the asynchronous worker pool hosting it.
"""

from .messages import (
    Operation,
    ResponseType,
    AnalysisRequest,
    AnalysisResponse,
    ComplexityPayload,
    ProgressPayload,
)
from .dispatcher import RequestDispatcher, format_validation_error
from .worker import (
    AnalysisWorker,
    AnalysisWorkerPool,
    AnalysisRequestError,
    WorkerStats,
    PoolStats,
)

__all__ = [
    # Messages
    "Operation",
    "ResponseType",
    "AnalysisRequest",
    "AnalysisResponse",
    "ComplexityPayload",
    "ProgressPayload",
    # Dispatch
    "RequestDispatcher",
    "format_validation_error",
    # Workers
    "AnalysisWorker",
    "AnalysisWorkerPool",
    "AnalysisRequestError",
    "WorkerStats",
    "PoolStats",
]

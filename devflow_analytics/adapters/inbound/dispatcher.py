"""
Request Dispatcher

Routes analysis requests to the analysis use case and converts every
outcome into a response envelope.

    analyze-complexity → IAnalysisUseCase.analyze_complexity
    analyze-progress   → IAnalysisUseCase.analyze_progress
    anything else      → error "Unknown analysis operation type: <type>"

``handle`` never raises: malformed envelopes, invalid payloads and failed
analyses all come back as error responses carrying the request id. No
retries are attempted.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping

from pydantic import ValidationError

from devflow_analytics.application.ports import IAnalysisUseCase
from .messages import (
    Operation,
    AnalysisRequest,
    AnalysisResponse,
    ComplexityPayload,
    ProgressPayload,
)


def format_validation_error(exc: ValidationError) -> str:
    """Render a pydantic error as one readable line."""
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ())) or "payload"
        parts.append(f"{location}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


class RequestDispatcher:
    """
    Stateless router from operation names to analysis handlers.

    Example:
        >>> dispatcher = RequestDispatcher(AnalysisService())
        >>> dispatcher.handle({"id": "1", "type": "analyze-complexity",
        ...                    "data": {"nodes": [], "connections": []}})["type"]
        'success'
    """

    def __init__(self, analysis: IAnalysisUseCase) -> None:
        self._analysis = analysis
        self._handlers: Dict[Operation, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
            Operation.ANALYZE_COMPLEXITY: self._analyze_complexity,
            Operation.ANALYZE_PROGRESS: self._analyze_progress,
        }
        self._logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def handle(self, message: Mapping[str, Any]) -> Dict[str, Any]:
        """Process one request message and return the response message."""
        return self.dispatch(message).to_message()

    def dispatch(self, message: Mapping[str, Any]) -> AnalysisResponse:
        raw_id = message.get("id") if isinstance(message, Mapping) else None
        request_id = raw_id if isinstance(raw_id, str) else None

        try:
            request = AnalysisRequest.model_validate(message)
        except ValidationError as exc:
            self._logger.warning("Rejected malformed request %s", request_id)
            return AnalysisResponse.failure(request_id, f"Invalid request: {format_validation_error(exc)}")

        try:
            operation = Operation(request.type)
        except ValueError:
            self._logger.warning("Request %s: unknown operation %r", request.id, request.type)
            return AnalysisResponse.failure(request.id, f"Unknown analysis operation type: {request.type}")

        self._logger.debug("Request %s: %s", request.id, operation.value)
        try:
            result = self._handlers[operation](request.data)
        except ValidationError as exc:
            return AnalysisResponse.failure(
                request.id,
                f"Invalid payload for '{operation.value}': {format_validation_error(exc)}",
            )
        except Exception as exc:
            self._logger.exception("Request %s (%s) failed", request.id, operation.value)
            return AnalysisResponse.failure(request.id, str(exc))

        return AnalysisResponse.success(request.id, result)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _analyze_complexity(self, data: Dict[str, Any]) -> Dict[str, Any]:
        payload = ComplexityPayload.model_validate(data)
        report = self._analysis.analyze_complexity(
            [n.to_domain() for n in payload.nodes],
            [c.to_domain() for c in payload.connections],
        )
        return report.to_dict()

    def _analyze_progress(self, data: Dict[str, Any]) -> Dict[str, Any]:
        payload = ProgressPayload.model_validate(data)
        report = self._analysis.analyze_progress(
            [n.to_domain() for n in payload.nodes],
            [e.to_domain() for e in payload.timeline],
            payload.time_range.to_domain() if payload.time_range else None,
        )
        return report.to_dict()

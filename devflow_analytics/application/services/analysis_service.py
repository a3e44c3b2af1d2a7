"""
Analysis Service

Application service implementing IAnalysisUseCase.

Complexity pipeline:
    1. Scoring           → node scores, connection weights, overall score
    2. Bottlenecks       → fan-in / fan-out / blocked / complex nodes
    3. Critical path     → longest dependency/sequence chain
    4. Recommendations   → derived from the three results above

Progress pipeline:
    ProgressAnalyzer over the node set, timeline and time window.

Failures inside a pipeline are re-raised as AnalysisError so the message
boundary can report which analysis failed.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from devflow_analytics.application.ports import IAnalysisUseCase
from devflow_analytics.domain.models import (
    Node,
    Connection,
    TimelineEvent,
    TimeRange,
    ComplexityReport,
    ProgressReport,
)
from devflow_analytics.domain.services import (
    ComplexityScorer,
    BottleneckDetector,
    CriticalPathSolver,
    ProgressAnalyzer,
    generate_recommendations,
    current_time_ms,
)


class AnalysisError(RuntimeError):
    """An analysis pipeline failed on otherwise valid input."""


class AnalysisService(IAnalysisUseCase):
    """
    Stateless analysis service.

    Every call builds its results from the given snapshot only; the
    service holds collaborators but no per-request state.
    """

    def __init__(self, clock: Callable[[], int] = current_time_ms) -> None:
        self._scorer = ComplexityScorer()
        self._detector = BottleneckDetector()
        self._path_solver = CriticalPathSolver()
        self._progress = ProgressAnalyzer(clock=clock)
        self._logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def analyze_complexity(
        self,
        nodes: Sequence[Node],
        connections: Sequence[Connection],
    ) -> ComplexityReport:
        self._logger.info(
            "Analyzing session complexity: %d nodes, %d connections",
            len(nodes), len(connections),
        )
        try:
            node_summary = self._scorer.summarize_nodes(nodes)
            conn_summary = self._scorer.summarize_connections(connections)
            overall = self._scorer.overall_complexity(node_summary, conn_summary)

            bottlenecks = self._detector.detect(nodes, connections)
            critical_path = self._path_solver.solve(nodes, connections)
        except Exception as exc:
            raise AnalysisError(f"Session complexity analysis failed: {exc}") from exc

        return ComplexityReport(
            node_complexity=node_summary,
            connection_complexity=conn_summary,
            overall_complexity=overall,
            bottlenecks=bottlenecks,
            critical_path=critical_path,
            recommendations=generate_recommendations(overall, bottlenecks, critical_path),
        )

    def analyze_progress(
        self,
        nodes: Sequence[Node],
        timeline: Sequence[TimelineEvent],
        time_range: Optional[TimeRange] = None,
    ) -> ProgressReport:
        self._logger.info(
            "Analyzing progress: %d nodes, %d timeline events", len(nodes), len(timeline)
        )
        try:
            return self._progress.analyze(nodes, timeline, time_range)
        except Exception as exc:
            raise AnalysisError(f"Progress analysis failed: {exc}") from exc

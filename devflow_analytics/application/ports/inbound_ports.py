"""
Analysis Use Case Port

Interface defining the contract for graph snapshot analysis.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from devflow_analytics.domain.models import (
    Node,
    Connection,
    TimelineEvent,
    TimeRange,
    ComplexityReport,
    ProgressReport,
)


class IAnalysisUseCase(ABC):
    """
    Inbound port for analysis use cases.

    Implementations are pure with respect to their inputs: the same
    snapshot always yields the same report, and no state is kept between
    calls.
    """

    @abstractmethod
    def analyze_complexity(
        self,
        nodes: Sequence[Node],
        connections: Sequence[Connection],
    ) -> ComplexityReport:
        """
        Score a graph snapshot.

        Args:
            nodes: Node set of the session
            connections: Typed connections between nodes

        Returns:
            Complexity report with bottlenecks, critical path and recommendations
        """
        pass

    @abstractmethod
    def analyze_progress(
        self,
        nodes: Sequence[Node],
        timeline: Sequence[TimelineEvent],
        time_range: Optional[TimeRange] = None,
    ) -> ProgressReport:
        """
        Summarize progress over a time window.

        Args:
            nodes: Node set of the session
            timeline: Session events (epoch-millisecond timestamps)
            time_range: Analysis window, trailing 7 days when omitted

        Returns:
            Progress report with velocity, trends and insights
        """
        pass

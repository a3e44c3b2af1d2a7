"""
Domain Models Package

Pure domain entities with no infrastructure dependencies.
Re-exports all domain models for convenient imports.
"""

from .enums import NodeType, NodeStatus, ConnectionType, EventType, BottleneckType, Severity
from .value_objects import (
    TimeRange, ComplexityRange, COMPLEXITY_RANGES,
    NODE_TYPE_COMPLEXITY, CONNECTION_TYPE_WEIGHTS, MS_PER_DAY,
)
from .entities import Node, NodeContent, Connection, TimelineEvent

# Analysis results
from .results import (
    NodeComplexitySummary, ConnectionComplexitySummary, Bottleneck,
    CriticalPathResult, Recommendation, ComplexityReport,
    ProgressSummary, VelocityPoint, BurndownPoint, ProgressTrends,
    Insight, ProgressReport,
)

__all__ = [
    # Enums
    "NodeType",
    "NodeStatus",
    "ConnectionType",
    "EventType",
    "BottleneckType",
    "Severity",
    # Value objects
    "TimeRange",
    "ComplexityRange",
    "COMPLEXITY_RANGES",
    "NODE_TYPE_COMPLEXITY",
    "CONNECTION_TYPE_WEIGHTS",
    "MS_PER_DAY",
    # Entities
    "Node",
    "NodeContent",
    "Connection",
    "TimelineEvent",
    # Results
    "NodeComplexitySummary",
    "ConnectionComplexitySummary",
    "Bottleneck",
    "CriticalPathResult",
    "Recommendation",
    "ComplexityReport",
    "ProgressSummary",
    "VelocityPoint",
    "BurndownPoint",
    "ProgressTrends",
    "Insight",
    "ProgressReport",
]

"""
Analysis Result Domain Models

Aggregates returned by the complexity and progress analyses. Attribute
names are snake_case; ``to_dict`` renders the camelCase shape expected on
the message boundary.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Any, Optional

from .entities import Node


# ---------------------------------------------------------------------------
# Complexity analysis
# ---------------------------------------------------------------------------

@dataclass
class NodeComplexitySummary:
    """Per-node scores and their aggregates."""
    scores: List[float] = field(default_factory=list)
    total_complexity: float = 0.0
    average_complexity: float = 0.0
    max_complexity: float = 0.0
    distribution: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scores": list(self.scores),
            "totalComplexity": self.total_complexity,
            "averageComplexity": self.average_complexity,
            "maxComplexity": self.max_complexity,
            "distribution": dict(self.distribution),
        }


@dataclass
class ConnectionComplexitySummary:
    """Weighted connection statistics."""
    total_connections: int = 0
    weighted_complexity: float = 0.0
    average_weight: float = 0.0
    density: float = 0.0
    type_distribution: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalConnections": self.total_connections,
            "weightedComplexity": self.weighted_complexity,
            "averageWeight": self.average_weight,
            "density": self.density,
            "typeDistribution": dict(self.type_distribution),
        }


@dataclass
class Bottleneck:
    """A node flagged as a structural risk by one detection rule."""
    node_id: str
    type: str           # convergence, divergence, blocked, complexity
    severity: str       # high, medium
    description: str
    impact: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodeId": self.node_id,
            "type": self.type,
            "severity": self.severity,
            "description": self.description,
            "impact": self.impact,
        }


@dataclass
class CriticalPathResult:
    """Longest weighted path through the dependency/sequence subgraph."""
    path: List[str] = field(default_factory=list)
    total_duration: float = 0.0
    nodes: List[Node] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": list(self.path),
            "totalDuration": self.total_duration,
            "nodes": [n.to_dict() for n in self.nodes],
        }


@dataclass
class Recommendation:
    type: str
    priority: str
    title: str
    description: str
    action: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "priority": self.priority,
            "title": self.title,
            "description": self.description,
            "action": self.action,
        }


@dataclass
class ComplexityReport:
    """
    Complete session complexity analysis.

    Combines node and connection scoring, bottleneck diagnostics, the
    critical path and the recommendations derived from them.
    """
    node_complexity: NodeComplexitySummary
    connection_complexity: ConnectionComplexitySummary
    overall_complexity: float
    bottlenecks: List[Bottleneck]
    critical_path: CriticalPathResult
    recommendations: List[Recommendation] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodeComplexity": self.node_complexity.to_dict(),
            "connectionComplexity": self.connection_complexity.to_dict(),
            "overallComplexity": self.overall_complexity,
            "bottlenecks": [b.to_dict() for b in self.bottlenecks],
            "criticalPath": self.critical_path.to_dict(),
            "recommendations": [r.to_dict() for r in self.recommendations],
        }


# ---------------------------------------------------------------------------
# Progress analysis
# ---------------------------------------------------------------------------

@dataclass
class ProgressSummary:
    total_nodes: int
    completed_nodes: int
    completion_percentage: float
    total_story_points: float
    completed_story_points: float
    velocity: float
    estimated_completion: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalNodes": self.total_nodes,
            "completedNodes": self.completed_nodes,
            "completionPercentage": self.completion_percentage,
            "totalStoryPoints": self.total_story_points,
            "completedStoryPoints": self.completed_story_points,
            "velocity": self.velocity,
            "estimatedCompletion": (
                self.estimated_completion.isoformat() if self.estimated_completion else None
            ),
        }


@dataclass
class VelocityPoint:
    date: str
    velocity: float
    completions: int

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date, "velocity": self.velocity, "completions": self.completions}


@dataclass
class BurndownPoint:
    date: int           # epoch milliseconds
    remaining: float

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date, "remaining": self.remaining}


@dataclass
class ProgressTrends:
    daily_completions: Dict[str, int] = field(default_factory=dict)
    velocity_trend: List[VelocityPoint] = field(default_factory=list)
    burndown_data: List[BurndownPoint] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dailyCompletions": dict(self.daily_completions),
            "velocityTrend": [p.to_dict() for p in self.velocity_trend],
            "burndownData": [p.to_dict() for p in self.burndown_data],
        }


@dataclass
class Insight:
    type: str           # velocity, blockers, activity
    severity: str       # warning, positive
    title: str
    description: str
    suggestion: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "severity": self.severity,
            "title": self.title,
            "description": self.description,
            "suggestion": self.suggestion,
        }


@dataclass
class ProgressReport:
    """Progress summary, completion trends and rule-based insights."""
    summary: ProgressSummary
    trends: ProgressTrends
    insights: List[Insight] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "trends": self.trends.to_dict(),
            "insights": [i.to_dict() for i in self.insights],
        }

"""
Recommendation rules for complexity reports.

    overall complexity > 7          → split complex nodes (high)
    each high-severity bottleneck   → review that node (high)
    critical path duration > 20     → parallelize or cut scope (medium)
"""

from __future__ import annotations

from typing import List

from devflow_analytics.domain.models import Bottleneck, CriticalPathResult, Recommendation, Severity

HIGH_COMPLEXITY_THRESHOLD = 7
LONG_PATH_THRESHOLD = 20


def generate_recommendations(
    overall_complexity: float,
    bottlenecks: List[Bottleneck],
    critical_path: CriticalPathResult,
) -> List[Recommendation]:
    recommendations: List[Recommendation] = []

    if overall_complexity > HIGH_COMPLEXITY_THRESHOLD:
        recommendations.append(Recommendation(
            type="complexity",
            priority="high",
            title="High Session Complexity",
            description="Consider breaking down complex nodes into smaller, manageable tasks",
            action="Split high-complexity nodes into subtasks",
        ))

    for bottleneck in bottlenecks:
        if bottleneck.severity != Severity.HIGH.value:
            continue
        recommendations.append(Recommendation(
            type="bottleneck",
            priority="high",
            title=f"{bottleneck.type} Bottleneck Detected",
            description=bottleneck.description,
            action=f"Review and optimize node {bottleneck.node_id}",
        ))

    if critical_path.total_duration > LONG_PATH_THRESHOLD:
        recommendations.append(Recommendation(
            type="timeline",
            priority="medium",
            title="Long Critical Path",
            description=f"Critical path duration is {critical_path.total_duration:g} units",
            action="Consider parallelizing tasks or reducing scope",
        ))

    return recommendations

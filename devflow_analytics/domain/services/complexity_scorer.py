"""
Complexity Scorer

Maps nodes and connections to numeric complexity weights and aggregates
them into session-level summaries.

Node score (range [1, 10]):
    1 + T(type) + 0.5·todos + 2·code_snippets + 0.3·references + story_points,
    clamped to MAX_COMPLEXITY. Absent fields contribute nothing.

Connection weight:
    Table lookup by connection type, 1 for unknown types.

Overall complexity:
    min(10, 0.6·mean_node_score + 0.4·density)

    density is 1 whenever at least one connection exists and 0 otherwise.

Usage:
    scorer = ComplexityScorer()
    nodes_summary = scorer.summarize_nodes(nodes)
    conn_summary = scorer.summarize_connections(connections)
    overall = scorer.overall_complexity(nodes_summary, conn_summary)
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Sequence

from devflow_analytics.domain.models import (
    Node,
    Connection,
    NodeComplexitySummary,
    ConnectionComplexitySummary,
)
from devflow_analytics.domain.models.value_objects import (
    BASE_COMPLEXITY,
    MAX_COMPLEXITY,
    NODE_TYPE_COMPLEXITY,
    DEFAULT_NODE_TYPE_COMPLEXITY,
    TODO_WEIGHT,
    CODE_SNIPPET_WEIGHT,
    REFERENCE_WEIGHT,
    CONNECTION_TYPE_WEIGHTS,
    DEFAULT_CONNECTION_WEIGHT,
    NODE_SCORE_WEIGHT,
    DENSITY_WEIGHT,
    COMPLEXITY_RANGES,
    ComplexityRange,
)


# ---------------------------------------------------------------------------
# Pure scoring functions
# ---------------------------------------------------------------------------

def score_node(node: Node) -> float:
    """Complexity score of a single node in [1, 10]."""
    score = BASE_COMPLEXITY
    score += NODE_TYPE_COMPLEXITY.get(node.type, DEFAULT_NODE_TYPE_COMPLEXITY)

    if node.content is not None:
        score += node.content.todos * TODO_WEIGHT
        score += node.content.code_snippets * CODE_SNIPPET_WEIGHT
        score += node.content.references * REFERENCE_WEIGHT

    if node.story_points:
        score += node.story_points

    return min(MAX_COMPLEXITY, score)


def weight_connection(connection: Connection) -> float:
    """Type weight of a single connection."""
    return CONNECTION_TYPE_WEIGHTS.get(connection.type, DEFAULT_CONNECTION_WEIGHT)


def bucket_scores(
    values: Iterable[float],
    ranges: Sequence[ComplexityRange] = COMPLEXITY_RANGES,
) -> Dict[str, int]:
    """Count values per labelled range. Every label is present, even at 0."""
    distribution = {r.label: 0 for r in ranges}
    for value in values:
        for r in ranges:
            if r.contains(value):
                distribution[r.label] += 1
                break
    return distribution


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

class ComplexityScorer:
    """Aggregates node scores and connection weights for a graph snapshot."""

    def summarize_nodes(self, nodes: Sequence[Node]) -> NodeComplexitySummary:
        scores: List[float] = [score_node(n) for n in nodes]
        return NodeComplexitySummary(
            scores=scores,
            total_complexity=sum(scores),
            average_complexity=_mean(scores),
            max_complexity=max(scores, default=0.0),
            distribution=bucket_scores(scores),
        )

    def summarize_connections(self, connections: Sequence[Connection]) -> ConnectionComplexitySummary:
        weights = [weight_connection(c) for c in connections]
        return ConnectionComplexitySummary(
            total_connections=len(connections),
            weighted_complexity=sum(weights),
            average_weight=_mean(weights),
            density=1.0 if connections else 0.0,
            type_distribution=dict(Counter(c.type for c in connections)),
        )

    def overall_complexity(
        self,
        nodes: NodeComplexitySummary,
        connections: ConnectionComplexitySummary,
    ) -> float:
        return min(
            MAX_COMPLEXITY,
            nodes.average_complexity * NODE_SCORE_WEIGHT + connections.density * DENSITY_WEIGHT,
        )

"""
Bottleneck Detector

Flags nodes that are structural risk points in the task graph.

Rules (each node may trigger several):
    CONVERGENCE — in-degree  > 3   (HIGH when > 5),  impact = 2 · in-degree
    DIVERGENCE  — out-degree > 4   (HIGH when > 6),  impact = 1.5 · out-degree
    BLOCKED     — status "blocked" (always HIGH),    impact = 5
    COMPLEXITY  — story points > 4 (always MEDIUM),  impact = story points

Degrees count every connection, parallel edges included. The result is
ordered by descending impact; equal impacts keep encounter order.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from devflow_analytics.domain.models import (
    Node,
    Connection,
    Bottleneck,
    BottleneckType,
    Severity,
)
from .graph_builder import build_connection_graph


class BottleneckDetector:
    """
    Detects fan-in, fan-out, blocked and overly complex nodes.

    Example:
        >>> detector = BottleneckDetector()
        >>> bottlenecks = detector.detect(nodes, connections)
        >>> high = [b for b in bottlenecks if b.severity == "high"]
    """

    CONVERGENCE_THRESHOLD = 3
    CONVERGENCE_HIGH = 5
    DIVERGENCE_THRESHOLD = 4
    DIVERGENCE_HIGH = 6
    COMPLEXITY_THRESHOLD = 4
    BLOCKED_IMPACT = 5

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def detect(self, nodes: Sequence[Node], connections: Sequence[Connection]) -> List[Bottleneck]:
        G = build_connection_graph(nodes, connections)

        bottlenecks: List[Bottleneck] = []
        for node in nodes:
            bottlenecks.extend(self._node_bottlenecks(node, G.in_degree(node.id), G.out_degree(node.id)))

        # sorted() is stable, ties keep encounter order
        bottlenecks = sorted(bottlenecks, key=lambda b: -b.impact)
        self._logger.debug("Detected %d bottlenecks across %d nodes", len(bottlenecks), len(nodes))
        return bottlenecks

    def _node_bottlenecks(self, node: Node, incoming: int, outgoing: int) -> List[Bottleneck]:
        found: List[Bottleneck] = []

        if incoming > self.CONVERGENCE_THRESHOLD:
            found.append(Bottleneck(
                node_id=node.id,
                type=BottleneckType.CONVERGENCE.value,
                severity=(Severity.HIGH if incoming > self.CONVERGENCE_HIGH else Severity.MEDIUM).value,
                description=f"Node has {incoming} incoming dependencies",
                impact=incoming * 2,
            ))

        if outgoing > self.DIVERGENCE_THRESHOLD:
            found.append(Bottleneck(
                node_id=node.id,
                type=BottleneckType.DIVERGENCE.value,
                severity=(Severity.HIGH if outgoing > self.DIVERGENCE_HIGH else Severity.MEDIUM).value,
                description=f"Node has {outgoing} outgoing dependencies",
                impact=outgoing * 1.5,
            ))

        if node.is_blocked:
            found.append(Bottleneck(
                node_id=node.id,
                type=BottleneckType.BLOCKED.value,
                severity=Severity.HIGH.value,
                description="Node is currently blocked",
                impact=self.BLOCKED_IMPACT,
            ))

        if node.story_points is not None and node.story_points > self.COMPLEXITY_THRESHOLD:
            found.append(Bottleneck(
                node_id=node.id,
                type=BottleneckType.COMPLEXITY.value,
                severity=Severity.MEDIUM.value,
                description=f"High complexity node ({node.story_points:g} story points)",
                impact=node.story_points,
            ))

        return found

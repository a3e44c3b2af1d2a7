"""
Critical Path Solver

Approximates the longest weighted path through the dependency/sequence
subgraph of a task graph.

Algorithm:
    1. Build a DiGraph of dependency/sequence edges between known nodes.
    2. For each node (input order) without a memoized length, run a
       depth-first longest-path search:
           L(n) = duration(n) + max(L(c) for successors c not on the current path)
       Successors already on the current path are skipped, which silently
       breaks cycles. Finalized lengths are memoized across roots.
    3. The first root with a strictly larger L wins. Its path is rebuilt
       greedily by stepping to the successor with the largest memoized
       length until no successor remains.

Limitations:
    Exact only when the filtered subgraph is acyclic. On cyclic input the
    result depends on traversal order; cycles are not reported.

The search is iterative; chain length is not bounded by the recursion limit.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

import networkx as nx

from devflow_analytics.domain.models import Node, Connection, CriticalPathResult
from .graph_builder import build_path_graph


class CriticalPathSolver:
    """Longest-path search over the dependency/sequence subgraph."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def solve(self, nodes: Sequence[Node], connections: Sequence[Connection]) -> CriticalPathResult:
        G = build_path_graph(nodes, connections)
        memo: Dict[str, float] = {}

        best_root: Optional[str] = None
        best_length = 0.0
        path: List[str] = []

        for node_id in G.nodes:
            if node_id in memo:
                continue
            length = self._longest_from(G, node_id, memo)
            if length > best_length:
                best_length = length
                best_root = node_id
                path = self.reconstruct_path(G, node_id, memo)

        self._logger.debug(
            "Critical path from %s: %d nodes, duration %s", best_root, len(path), best_length
        )
        return CriticalPathResult(
            path=path,
            total_duration=best_length,
            nodes=[G.nodes[n]["node"] for n in path],
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _longest_from(G: nx.DiGraph, root: str, memo: Dict[str, float]) -> float:
        """Depth-first longest path length from *root*, filling *memo*."""
        on_path: Set[str] = {root}
        best_child: Dict[str, float] = {root: 0.0}
        stack: List[Tuple[str, Iterator[str]]] = [(root, iter(G.successors(root)))]

        while stack:
            node_id, children = stack[-1]
            descended = False

            for child in children:
                if child in memo:
                    best_child[node_id] = max(best_child[node_id], memo[child])
                elif child not in on_path:
                    on_path.add(child)
                    best_child[child] = 0.0
                    stack.append((child, iter(G.successors(child))))
                    descended = True
                    break

            if descended:
                continue

            stack.pop()
            on_path.discard(node_id)
            memo[node_id] = G.nodes[node_id]["duration"] + best_child.pop(node_id)
            if stack:
                parent = stack[-1][0]
                best_child[parent] = max(best_child[parent], memo[node_id])

        return memo[root]

    @staticmethod
    def reconstruct_path(G: nx.DiGraph, start: str, memo: Dict[str, float]) -> List[str]:
        """
        Greedy walk from *start* along the largest memoized successor.

        Stops when no successor has a positive length, or when the chosen
        successor is already on the path (cyclic input).
        """
        path = [start]
        seen = {start}
        current = start

        while True:
            next_node: Optional[str] = None
            max_length = 0.0
            for neighbor in G.successors(current):
                length = memo.get(neighbor, 0.0)
                if length > max_length:
                    max_length = length
                    next_node = neighbor

            if next_node is None or next_node in seen:
                break
            path.append(next_node)
            seen.add(next_node)
            current = next_node

        return path

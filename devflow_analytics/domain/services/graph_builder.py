"""
Graph Builder

Builds NetworkX views of a graph snapshot.

    connection graph : MultiDiGraph of every connection (parallel edges kept),
                       used for fan-in / fan-out counting
    path graph       : DiGraph restricted to dependency/sequence edges whose
                       endpoints are both known, used for critical path search

Node insertion order follows the input order so traversals that depend on
it stay reproducible.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import networkx as nx

from devflow_analytics.domain.models import Node, Connection
from devflow_analytics.domain.models.value_objects import PATH_CONNECTION_TYPES


def build_connection_graph(
    nodes: Sequence[Node],
    connections: Sequence[Connection],
) -> nx.MultiDiGraph:
    """
    Every connection becomes one edge, duplicates included.

    Endpoints missing from *nodes* are added as bare vertices so their
    edges still count toward the known endpoint's degree.
    """
    G = nx.MultiDiGraph()
    for node in nodes:
        G.add_node(node.id)
    for conn in connections:
        G.add_edge(conn.source_node_id, conn.target_node_id, type=conn.type)
    return G


def build_path_graph(
    nodes: Sequence[Node],
    connections: Iterable[Connection],
) -> nx.DiGraph:
    """
    Directed graph used for longest-path search.

    Each vertex carries a ``duration`` attribute. When a node id appears
    more than once the last occurrence wins.
    """
    G = nx.DiGraph()
    for node in nodes:
        G.add_node(node.id, duration=node.duration, node=node)

    for conn in connections:
        if conn.type not in PATH_CONNECTION_TYPES:
            continue
        if conn.source_node_id not in G or conn.target_node_id not in G:
            continue
        G.add_edge(conn.source_node_id, conn.target_node_id, type=conn.type)

    return G

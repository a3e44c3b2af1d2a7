"""
Domain Entities

Graph snapshot elements supplied by the editor: nodes, connections and
timeline events. All are frozen; analyzers derive new values from them and
never mutate the caller's snapshot.

Optional fields default as follows:
    story_points    → None  (counts as 0 for scoring, 1 as a unit of work)
    estimated_time  → None  (critical path falls back to story points, then 1)
    content         → None  (no content contribution)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any, Optional

from .enums import NodeStatus


@dataclass(frozen=True)
class NodeContent:
    """Counts of the content items attached to a node."""
    todos: int = 0
    code_snippets: int = 0
    references: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "todos": self.todos,
            "codeSnippets": self.code_snippets,
            "references": self.references,
        }


@dataclass(frozen=True)
class Node:
    """
    A unit of work or content in the dependency graph.

    Attributes:
        id: Unique node identifier
        type: task, code, component, file, folder, reference, comment
        status: idle, active, blocked, completed (free-form, compared as text)
        story_points: Estimated complexity in story points
        content: Attached todo / snippet / reference counts
        estimated_time: Time estimate used as critical path duration
        title: Display title, carried through to resolved path nodes
    """
    id: str
    type: str
    status: str = NodeStatus.IDLE.value
    story_points: Optional[float] = None
    content: Optional[NodeContent] = None
    estimated_time: Optional[float] = None
    title: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == NodeStatus.COMPLETED.value

    @property
    def is_blocked(self) -> bool:
        return self.status == NodeStatus.BLOCKED.value

    @property
    def work_units(self) -> float:
        """Story points as a unit of work; unestimated nodes count as 1."""
        return self.story_points or 1

    @property
    def duration(self) -> float:
        """Critical path weight: time estimate, else story points, else 1."""
        return self.estimated_time or self.story_points or 1

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "status": self.status,
        }
        if self.title is not None:
            result["title"] = self.title
        if self.story_points is not None:
            result["complexity"] = {"storyPoints": self.story_points}
        if self.content is not None:
            result["content"] = self.content.to_dict()
        if self.estimated_time is not None:
            result["timeEstimate"] = {"estimated": self.estimated_time}
        return result


@dataclass(frozen=True)
class Connection:
    """A directed, typed edge between two nodes."""
    source_node_id: str
    target_node_id: str
    type: str
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "sourceNodeId": self.source_node_id,
            "targetNodeId": self.target_node_id,
            "type": self.type,
        }
        if self.id is not None:
            result["id"] = self.id
        return result


@dataclass(frozen=True)
class TimelineEvent:
    """A timestamped event (epoch milliseconds) from the session timeline."""
    type: str
    timestamp: int
    node_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "nodeId": self.node_id,
            "timestamp": self.timestamp,
        }

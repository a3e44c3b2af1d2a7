"""
Pydantic models for worker requests and responses.

Envelope (both directions):
    request  : {"id": str, "type": str, "data": {...}}
    response : {"id": str, "type": "success" | "error", "result"?: {...}, "error"?: str}

Payload models accept the editor's camelCase keys, ignore unknown node
fields (position, title, tags, ...) and convert to domain entities.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from devflow_analytics.domain.models import Node, NodeContent, Connection, TimelineEvent, TimeRange


class Operation(str, Enum):
    """Operations the analysis worker understands."""
    ANALYZE_COMPLEXITY = "analyze-complexity"
    ANALYZE_PROGRESS = "analyze-progress"


class ResponseType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class _PayloadModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ── Graph elements ───────────────────────────────────────────────────────

class ComplexityModel(_PayloadModel):
    story_points: Optional[float] = Field(default=None, alias="storyPoints", ge=0)


class TimeEstimateModel(_PayloadModel):
    estimated: Optional[float] = Field(default=None, ge=0)


class ContentModel(_PayloadModel):
    """Node content; each entry may be the item list itself or its count."""
    todos: int = Field(default=0, ge=0)
    code_snippets: int = Field(default=0, alias="codeSnippets", ge=0)
    references: int = Field(default=0, ge=0)

    @field_validator("todos", "code_snippets", "references", mode="before")
    @classmethod
    def _count_items(cls, value: Union[None, int, List[Any]]) -> Any:
        if value is None:
            return 0
        if isinstance(value, (list, tuple)):
            return len(value)
        return value


class NodeModel(_PayloadModel):
    id: str = Field(..., min_length=1, description="Unique node identifier")
    type: str = Field(..., description="task, code, component, file, folder, reference, comment")
    status: str = Field(default="idle", description="idle, active, blocked, completed")
    title: Optional[str] = None
    complexity: Optional[ComplexityModel] = None
    content: Optional[ContentModel] = None
    time_estimate: Optional[TimeEstimateModel] = Field(default=None, alias="timeEstimate")

    def to_domain(self) -> Node:
        return Node(
            id=self.id,
            type=self.type,
            status=self.status,
            story_points=self.complexity.story_points if self.complexity else None,
            content=NodeContent(
                todos=self.content.todos,
                code_snippets=self.content.code_snippets,
                references=self.content.references,
            ) if self.content else None,
            estimated_time=self.time_estimate.estimated if self.time_estimate else None,
            title=self.title,
        )


class ConnectionModel(_PayloadModel):
    id: Optional[str] = None
    source_node_id: str = Field(..., alias="sourceNodeId")
    target_node_id: str = Field(..., alias="targetNodeId")
    type: str = Field(..., description="dependency, sequence, reference, blocks, ...")

    def to_domain(self) -> Connection:
        return Connection(
            source_node_id=self.source_node_id,
            target_node_id=self.target_node_id,
            type=self.type,
            id=self.id,
        )


class TimelineEventModel(_PayloadModel):
    type: str
    timestamp: int = Field(..., description="Epoch milliseconds")
    node_id: Optional[str] = Field(default=None, alias="nodeId")

    def to_domain(self) -> TimelineEvent:
        return TimelineEvent(type=self.type, timestamp=self.timestamp, node_id=self.node_id)


class TimeRangeModel(_PayloadModel):
    start: Optional[int] = None
    end: Optional[int] = None

    def to_domain(self) -> TimeRange:
        return TimeRange(start=self.start, end=self.end)


# ── Operation payloads ───────────────────────────────────────────────────

class ComplexityPayload(_PayloadModel):
    nodes: List[NodeModel]
    connections: List[ConnectionModel]


class ProgressPayload(_PayloadModel):
    nodes: List[NodeModel]
    timeline: List[TimelineEventModel]
    time_range: Optional[TimeRangeModel] = Field(default=None, alias="timeRange")


# ── Envelope ─────────────────────────────────────────────────────────────

class AnalysisRequest(BaseModel):
    id: str = Field(..., description="Caller-assigned correlation id")
    type: str = Field(..., description="Operation name")
    data: Dict[str, Any] = Field(default_factory=dict)


class AnalysisResponse(BaseModel):
    id: Optional[str] = None
    type: ResponseType
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, request_id: Optional[str], result: Dict[str, Any]) -> "AnalysisResponse":
        return cls(id=request_id, type=ResponseType.SUCCESS, result=result)

    @classmethod
    def failure(cls, request_id: Optional[str], message: str) -> "AnalysisResponse":
        return cls(id=request_id, type=ResponseType.ERROR, error=message)

    @property
    def ok(self) -> bool:
        return self.type is ResponseType.SUCCESS

    def to_message(self) -> Dict[str, Any]:
        """Wire form; only the branch matching ``type`` is included."""
        message: Dict[str, Any] = {"id": self.id, "type": self.type.value}
        if self.ok:
            message["result"] = self.result
        else:
            message["error"] = self.error
        return message

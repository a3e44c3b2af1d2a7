"""
Value Objects

Immutable scoring tables and small value types with no identity.

Node Complexity Reference:
    score(n) = min(MAX_COMPLEXITY,
                   BASE + T(type) + 0.5·todos + 2·snippets + 0.3·refs + SP)

Connection Weight Reference:
    w(c) = W(type), unknown types weigh DEFAULT_CONNECTION_WEIGHT
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional

from .enums import NodeType, ConnectionType


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MS_PER_DAY: int = 24 * 60 * 60 * 1000

BASE_COMPLEXITY: float = 1.0

#: Upper clamp for any node score. Also the cap of the overall score.
MAX_COMPLEXITY: float = 10.0

NODE_TYPE_COMPLEXITY: Dict[str, float] = {
    NodeType.TASK.value: 2,
    NodeType.CODE.value: 4,
    NodeType.COMPONENT.value: 3,
    NodeType.FILE.value: 1,
    NodeType.FOLDER.value: 1,
    NodeType.REFERENCE.value: 1,
    NodeType.COMMENT.value: 1,
}
DEFAULT_NODE_TYPE_COMPLEXITY: float = 1

TODO_WEIGHT: float = 0.5
CODE_SNIPPET_WEIGHT: float = 2.0
REFERENCE_WEIGHT: float = 0.3

CONNECTION_TYPE_WEIGHTS: Dict[str, float] = {
    ConnectionType.DEPENDENCY.value: 3,
    ConnectionType.SEQUENCE.value: 2,
    ConnectionType.REFERENCE.value: 1,
    ConnectionType.BLOCKS.value: 4,
    ConnectionType.DATAFLOW.value: 3,
    ConnectionType.NAVIGATION.value: 2,
    ConnectionType.API.value: 3,
    ConnectionType.IMPORT.value: 2,
}
DEFAULT_CONNECTION_WEIGHT: float = 1

#: Edge types that take part in critical path computation.
PATH_CONNECTION_TYPES = frozenset({ConnectionType.DEPENDENCY.value, ConnectionType.SEQUENCE.value})

NODE_SCORE_WEIGHT: float = 0.6
DENSITY_WEIGHT: float = 0.4


@dataclass(frozen=True)
class ComplexityRange:
    """A labelled score bucket, half-open unless ``inclusive_max`` is set."""
    label: str
    minimum: float
    maximum: float
    inclusive_max: bool = False

    def contains(self, value: float) -> bool:
        if value < self.minimum:
            return False
        if self.inclusive_max:
            return value <= self.maximum
        return value < self.maximum


COMPLEXITY_RANGES: List[ComplexityRange] = [
    ComplexityRange("Low", 0, 2),
    ComplexityRange("Medium", 2, 5),
    ComplexityRange("High", 5, 8),
    ComplexityRange("Very High", 8, 10, inclusive_max=True),
]


@dataclass(frozen=True)
class TimeRange:
    """
    Analysis window in epoch milliseconds.

    Either bound may be missing; ``resolve`` fills the gaps from the
    default trailing window.
    """
    start: Optional[int] = None
    end: Optional[int] = None

    DEFAULT_DAYS = 7

    def resolve(self, now: int) -> "TimeRange":
        start = self.start if self.start is not None else now - self.DEFAULT_DAYS * MS_PER_DAY
        end = self.end if self.end is not None else now
        return TimeRange(start=start, end=end)

    @property
    def days(self) -> float:
        """Window length in days, never below one."""
        if self.start is None or self.end is None:
            return float(self.DEFAULT_DAYS)
        return max(1.0, (self.end - self.start) / MS_PER_DAY)

    def contains(self, timestamp: int) -> bool:
        return self.start <= timestamp <= self.end

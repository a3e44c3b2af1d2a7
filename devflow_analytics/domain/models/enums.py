from enum import Enum

class NodeType(str, Enum):
    TASK = "task"
    CODE = "code"
    COMPONENT = "component"
    FILE = "file"
    FOLDER = "folder"
    REFERENCE = "reference"
    COMMENT = "comment"

class NodeStatus(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    BLOCKED = "blocked"
    COMPLETED = "completed"

class ConnectionType(str, Enum):
    DEPENDENCY = "dependency"
    SEQUENCE = "sequence"
    REFERENCE = "reference"
    BLOCKS = "blocks"
    DATAFLOW = "dataflow"
    NAVIGATION = "navigation"
    API = "api"
    IMPORT = "import"

class EventType(str, Enum):
    """Timeline event types the analyzers look at."""
    NODE_COMPLETED = "node_completed"

class BottleneckType(str, Enum):
    CONVERGENCE = "convergence"   # fan-in
    DIVERGENCE = "divergence"     # fan-out
    BLOCKED = "blocked"
    COMPLEXITY = "complexity"

class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"

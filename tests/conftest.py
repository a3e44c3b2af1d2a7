"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for testing the devflow-analytics engine.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -v                 # Verbose output
    pytest tests/ -k "critical"      # Run only critical path tests
    pytest tests/ --quick            # Skip slow tests
"""

import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from devflow_analytics.domain.models import Node, NodeContent, Connection, TimelineEvent, MS_PER_DAY


# =============================================================================
# Custom Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--quick",
        action="store_true",
        default=False,
        help="Skip slow tests",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests if --quick is specified"""
    if config.getoption("--quick"):
        skip_slow = pytest.mark.skip(reason="Skipped with --quick")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


# =============================================================================
# Clock Fixtures
# =============================================================================

#: 2024-03-15T12:00:00Z
FIXED_NOW = 1710504000000


@pytest.fixture
def now() -> int:
    return FIXED_NOW


@pytest.fixture
def clock():
    """Frozen clock returning FIXED_NOW."""
    return lambda: FIXED_NOW


# =============================================================================
# Graph Fixtures
# =============================================================================

@pytest.fixture
def task_nodes() -> List[Node]:
    """
    Small project graph.

    design(3sp) -> build(5sp, est 8) -> test(2sp) -> release
                   build -> docs (reference edge, ignored by critical path)
    """
    return [
        Node(id="design", type="task", status="completed", story_points=3),
        Node(id="build", type="code", status="active", story_points=5, estimated_time=8,
             content=NodeContent(todos=2, code_snippets=1)),
        Node(id="test", type="task", status="blocked", story_points=2),
        Node(id="release", type="task", status="idle"),
        Node(id="docs", type="file", status="idle"),
    ]


@pytest.fixture
def task_connections() -> List[Connection]:
    return [
        Connection("design", "build", "dependency"),
        Connection("build", "test", "sequence"),
        Connection("test", "release", "dependency"),
        Connection("build", "docs", "reference"),
    ]


@pytest.fixture
def completion_timeline(now) -> List[TimelineEvent]:
    """Completions spread over the last few days, plus noise events."""
    return [
        TimelineEvent("node_completed", now - 2 * MS_PER_DAY, node_id="design"),
        TimelineEvent("node_created", now - 5 * MS_PER_DAY, node_id="build"),
        TimelineEvent("node_completed", now - 1 * MS_PER_DAY, node_id="test"),
        TimelineEvent("node_completed", now - 40 * MS_PER_DAY, node_id="release"),
    ]


# =============================================================================
# Wire Fixtures
# =============================================================================

@pytest.fixture
def wire_nodes() -> List[Dict[str, Any]]:
    """Nodes as the editor sends them, including UI-only fields."""
    return [
        {
            "id": "A",
            "type": "task",
            "status": "completed",
            "position": {"x": 10, "y": 20},
            "complexity": {"storyPoints": 3},
            "content": {"todos": [{"text": "a"}, {"text": "b"}], "codeSnippets": [], "references": []},
        },
        {
            "id": "B",
            "type": "code",
            "status": "active",
            "timeEstimate": {"estimated": 4},
        },
        {"id": "C", "type": "comment", "status": "blocked"},
    ]


@pytest.fixture
def wire_connections() -> List[Dict[str, Any]]:
    return [
        {"id": "c1", "sourceNodeId": "A", "targetNodeId": "B", "type": "dependency"},
        {"id": "c2", "sourceNodeId": "B", "targetNodeId": "C", "type": "sequence"},
        {"id": "c3", "sourceNodeId": "A", "targetNodeId": "C", "type": "reference"},
    ]

"""
Tests for the request dispatcher and wire models

Covers:
    - Success envelopes for both operations, id echoed unchanged
    - Unknown operations, malformed envelopes and invalid payloads
    - Analysis failures converted to error responses
    - Payload parsing (camelCase keys, content lists or counts, extra fields)
    - Determinism of repeated requests
"""

import json
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from devflow_analytics.adapters.inbound import RequestDispatcher, Operation, AnalysisResponse
from devflow_analytics.adapters.inbound.messages import NodeModel, ProgressPayload
from devflow_analytics.application.services import AnalysisService, AnalysisError
from devflow_analytics.domain.models import MS_PER_DAY


@pytest.fixture
def dispatcher(clock):
    return RequestDispatcher(AnalysisService(clock=clock))


def complexity_request(nodes, connections, request_id="req-1"):
    return {"id": request_id, "type": "analyze-complexity", "data": {"nodes": nodes, "connections": connections}}


class TestSuccess:

    def test_analyze_complexity(self, dispatcher, wire_nodes, wire_connections):
        response = dispatcher.handle(complexity_request(wire_nodes, wire_connections))

        assert response["id"] == "req-1"
        assert response["type"] == "success"
        assert "error" not in response

        result = response["result"]
        assert result["nodeComplexity"]["scores"] == [7.0, 5.0, 2.0]
        assert result["connectionComplexity"]["weightedComplexity"] == 6
        assert result["criticalPath"]["path"] == ["A", "B", "C"]
        assert result["criticalPath"]["totalDuration"] == 8
        assert [b["type"] for b in result["bottlenecks"]] == ["blocked"]

    def test_analyze_progress(self, dispatcher, wire_nodes, now):
        response = dispatcher.handle({
            "id": "req-2",
            "type": "analyze-progress",
            "data": {
                "nodes": wire_nodes,
                "timeline": [{"type": "node_completed", "nodeId": "A", "timestamp": now - 1000}],
                "timeRange": {"start": now - MS_PER_DAY, "end": now},
            },
        })
        assert response["type"] == "success"
        summary = response["result"]["summary"]
        assert summary["velocity"] == 3
        assert summary["completedNodes"] == 1
        assert response["result"]["trends"]["dailyCompletions"] == {"2024-03-15": 1}

    def test_progress_without_time_range(self, dispatcher, wire_nodes):
        response = dispatcher.handle({
            "id": "req-3",
            "type": "analyze-progress",
            "data": {"nodes": wire_nodes, "timeline": []},
        })
        assert response["type"] == "success"

    def test_request_id_echoed(self, dispatcher):
        response = dispatcher.handle(complexity_request([], [], request_id="7f3c-🙂"))
        assert response["id"] == "7f3c-🙂"

    def test_repeated_requests_are_identical(self, dispatcher, wire_nodes, wire_connections):
        message = complexity_request(wire_nodes, wire_connections)
        first = json.dumps(dispatcher.handle(message))
        second = json.dumps(dispatcher.handle(message))
        assert first == second

    def test_request_not_mutated(self, dispatcher, wire_nodes, wire_connections):
        message = complexity_request(wire_nodes, wire_connections)
        snapshot = json.dumps(message)
        dispatcher.handle(message)
        assert json.dumps(message) == snapshot


class TestErrors:

    def test_unknown_operation(self, dispatcher):
        response = dispatcher.handle({"id": "r1", "type": "analyze-regex", "data": {}})
        assert response == {
            "id": "r1",
            "type": "error",
            "error": "Unknown analysis operation type: analyze-regex",
        }

    def test_missing_id(self, dispatcher):
        response = dispatcher.handle({"type": "analyze-complexity", "data": {}})
        assert response["id"] is None
        assert response["type"] == "error"
        assert response["error"].startswith("Invalid request")

    @pytest.mark.parametrize("message", [None, [], "analyze-complexity", 42])
    def test_non_mapping_message(self, dispatcher, message):
        response = dispatcher.handle(message)
        assert response["type"] == "error"
        assert response["id"] is None

    def test_missing_payload_field(self, dispatcher):
        response = dispatcher.handle({"id": "r2", "type": "analyze-complexity", "data": {"nodes": []}})
        assert response["id"] == "r2"
        assert response["type"] == "error"
        assert "Invalid payload for 'analyze-complexity'" in response["error"]
        assert "connections" in response["error"]

    def test_negative_story_points(self, dispatcher):
        nodes = [{"id": "A", "type": "task", "complexity": {"storyPoints": -2}}]
        response = dispatcher.handle(complexity_request(nodes, []))
        assert response["type"] == "error"
        assert "storyPoints" in response["error"]

    @pytest.mark.parametrize("field", ["todos", "codeSnippets", "references"])
    def test_negative_content_count(self, dispatcher, field):
        nodes = [{"id": "A", "type": "task", "content": {field: -1}}]
        response = dispatcher.handle(complexity_request(nodes, []))
        assert response["type"] == "error"
        assert "Invalid payload for 'analyze-complexity'" in response["error"]
        assert field in response["error"]

    def test_connection_missing_endpoint(self, dispatcher):
        response = dispatcher.handle(complexity_request([], [{"sourceNodeId": "A", "type": "api"}]))
        assert response["type"] == "error"
        assert "targetNodeId" in response["error"]

    def test_analysis_failure_becomes_error(self):
        analysis = MagicMock()
        analysis.analyze_complexity.side_effect = AnalysisError("Session complexity analysis failed: boom")
        response = RequestDispatcher(analysis).handle(complexity_request([], []))
        assert response == {
            "id": "req-1",
            "type": "error",
            "error": "Session complexity analysis failed: boom",
        }

    def test_unexpected_exception_becomes_error(self):
        analysis = MagicMock()
        analysis.analyze_progress.side_effect = ZeroDivisionError("division by zero")
        response = RequestDispatcher(analysis).handle(
            {"id": "x", "type": "analyze-progress", "data": {"nodes": [], "timeline": []}}
        )
        assert response["type"] == "error"
        assert response["error"] == "division by zero"

    def test_dangling_connection_is_not_an_error(self, dispatcher):
        nodes = [{"id": "A", "type": "task"}]
        connections = [{"sourceNodeId": "A", "targetNodeId": "ghost", "type": "dependency"}]
        response = dispatcher.handle(complexity_request(nodes, connections))
        assert response["type"] == "success"
        assert response["result"]["criticalPath"]["path"] == ["A"]


class TestMessages:

    def test_node_content_lists_and_counts(self):
        from_lists = NodeModel.model_validate(
            {"id": "n", "type": "task", "content": {"todos": [1, 2], "codeSnippets": ["x"], "references": None}}
        ).to_domain()
        from_counts = NodeModel.model_validate(
            {"id": "n", "type": "task", "content": {"todos": 2, "codeSnippets": 1}}
        ).to_domain()
        assert from_lists.content == from_counts.content
        assert from_lists.content.references == 0

    def test_unknown_fields_ignored(self):
        node = NodeModel.model_validate(
            {"id": "n", "type": "task", "position": {"x": 1}, "tags": ["ui"], "status": "active"}
        ).to_domain()
        assert node.status == "active"
        assert node.story_points is None
        assert node.content is None

    def test_status_defaults_to_idle(self):
        assert NodeModel.model_validate({"id": "n", "type": "task"}).to_domain().status == "idle"

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            NodeModel.model_validate({"id": "", "type": "task"})

    def test_partial_time_range(self):
        payload = ProgressPayload.model_validate({"nodes": [], "timeline": [], "timeRange": {"start": 5}})
        window = payload.time_range.to_domain()
        assert window.start == 5
        assert window.end is None

    def test_response_envelope(self):
        ok = AnalysisResponse.success("a", {"x": 1})
        failed = AnalysisResponse.failure("b", "nope")
        assert ok.to_message() == {"id": "a", "type": "success", "result": {"x": 1}}
        assert failed.to_message() == {"id": "b", "type": "error", "error": "nope"}

    def test_operations(self):
        assert {op.value for op in Operation} == {"analyze-complexity", "analyze-progress"}

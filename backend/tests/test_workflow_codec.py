"""Tests for the persistence codec."""

import pytest
from pydantic import ValidationError

from service.workflow.nodes.base import NodeCatalog, StepCategory, StepDefinition
from service.workflow.tree_editor import CANVAS_REF, find_node, insert_node
from service.workflow.workflow_codec import (
    FALLBACK_PRESENTATION_KEY,
    deserialize_tree,
    deserialize_workflow,
    serialize_tree,
    serialize_workflow,
)
from service.workflow.workflow_model import Workflow


class TestSerializeTree:
    """Tests for serialize_tree."""

    def test_persisted_shape(self, branch_tree):
        data = serialize_tree(branch_tree)
        assert data[0] == {
            "id": "source-meeting-summary",
            "type": "trigger",
            "label": "Meeting Summary",
            "description": "Triggered when a meeting summary is available",
            "instanceId": "trigger-1",
        }
        branch = data[1]
        assert branch["type"] == "branch"
        assert [n["instanceId"] for n in branch["branches"]["true"]] == ["slack-1", "ai-1"]
        assert branch["branches"]["true"][0]["config"] == {"channel": "#team"}

    def test_no_presentation_state(self, branch_tree):
        def walk(nodes):
            for node in nodes:
                yield node
                for side in ("true", "false"):
                    yield from walk(node.get("branches", {}).get(side, []))

        for node in walk(serialize_tree(branch_tree)):
            assert "presentation_key" not in node
            assert "icon" not in node

    def test_empty(self):
        assert serialize_tree([]) == []

    def test_config_copied(self, branch_tree):
        data = serialize_tree(branch_tree)
        data[1]["branches"]["true"][0]["config"]["channel"] = "#other"
        assert find_node(branch_tree, "slack-1").config == {"channel": "#team"}


class TestDeserializeTree:
    """Tests for deserialize_tree."""

    def test_reattaches_presentation(self, catalog, branch_tree):
        tree = deserialize_tree(serialize_tree(branch_tree), catalog)
        assert find_node(tree, "slack-1").presentation_key == "slack"
        assert find_node(tree, "branch-1").presentation_key == "git-fork"

    def test_round_trip_stable(self, catalog, branch_tree):
        once = serialize_tree(branch_tree)
        assert serialize_tree(deserialize_tree(once, catalog)) == once

    def test_unknown_definition_uses_fallback(self, catalog):
        data = [
            {"id": "retired-step", "type": "action", "label": "Old", "instanceId": "old-1",
             "config": {"a": 1}},
            {"id": "ai-summary", "type": "ai", "label": "Sum", "instanceId": "s-1"},
        ]
        tree = deserialize_tree(data, catalog)
        assert tree[0].presentation_key == FALLBACK_PRESENTATION_KEY
        assert tree[1].presentation_key == "file-text"
        assert serialize_tree(tree) == data

    def test_custom_fallback(self):
        catalog = NodeCatalog([])
        data = [{"id": "x", "type": "trigger", "label": "X", "instanceId": "x-1"}]
        assert deserialize_tree(data, catalog, fallback_key="bolt")[0].presentation_key == "bolt"

    def test_missing_type_filled_from_catalog(self, catalog):
        data = [{"id": "logic-branch", "label": "If", "instanceId": "b"}]
        tree = deserialize_tree(data, catalog)
        assert tree[0].category == StepCategory.BRANCH
        assert tree[0].branches is not None
        assert tree[0].branches.is_empty

    def test_branches_dropped_from_leaf(self, catalog):
        data = [{
            "id": "action-email", "type": "action", "label": "Mail", "instanceId": "m",
            "branches": {"true": [], "false": []},
        }]
        assert deserialize_tree(data, catalog)[0].branches is None

    def test_stored_icon_ignored(self, catalog):
        data = [{"id": "ai-tasks", "type": "ai", "label": "T", "instanceId": "t", "icon": {}}]
        tree = deserialize_tree(data, catalog)
        assert tree[0].presentation_key == "check-square"
        assert "icon" not in serialize_tree(tree)[0]

    def test_malformed_node(self, catalog):
        with pytest.raises(ValidationError):
            deserialize_tree([{"id": "ai-tasks", "type": "ai", "label": "T"}], catalog)

    def test_nested_presentation(self):
        catalog = NodeCatalog([
            StepDefinition(id="if", category=StepCategory.BRANCH, label="If", presentation_key="fork"),
            StepDefinition(id="go", category=StepCategory.ACTION, label="Go", presentation_key="go"),
        ])
        tree = insert_node([], CANVAS_REF, "if", catalog, "if-1")
        tree = insert_node(tree, "if-1-false", "go", catalog, "go-1")
        restored = deserialize_tree(serialize_tree(tree), catalog)
        assert restored[0].branches.false_branch[0].presentation_key == "go"


class TestWorkflowDocument:
    """Tests for serialize_workflow / deserialize_workflow."""

    def test_round_trip(self, catalog, branch_tree):
        workflow = Workflow(
            id="wf-1", name="Follow-up", is_enabled=False, root=branch_tree,
            created_at="2026-01-01T00:00:00+00:00", updated_at="2026-01-02T00:00:00+00:00",
        )
        data = serialize_workflow(workflow)
        assert set(data) == {"id", "name", "isEnabled", "nodes", "createdAt", "updatedAt"}
        assert data["isEnabled"] is False
        restored = deserialize_workflow(data, catalog)
        assert restored.id == "wf-1"
        assert restored.is_enabled is False
        assert restored.created_at == "2026-01-01T00:00:00+00:00"
        assert serialize_workflow(restored) == data

    def test_draft(self):
        workflow = Workflow()
        assert workflow.is_draft
        assert workflow.name == "Untitled Workflow"
        assert serialize_workflow(workflow)["id"] is None

"""Tests for the node catalog."""

import pytest

from service.workflow.nodes.base import (
    NodeCatalog,
    StepCategory,
    StepDefinition,
)


class TestDefaultCatalog:
    """Tests for the built-in steps."""

    def test_size(self, catalog):
        assert len(catalog) == 16

    def test_category_counts(self, catalog):
        grouped = catalog.grouped()
        assert list(grouped) == list(StepCategory)
        assert len(grouped[StepCategory.TRIGGER]) == 5
        assert len(grouped[StepCategory.ACTION]) == 5
        assert len(grouped[StepCategory.AI_STEP]) == 5
        assert len(grouped[StepCategory.BRANCH]) == 1

    def test_lookup(self, catalog):
        definition = catalog.lookup("ai-summary")
        assert definition.category == StepCategory.AI_STEP
        assert definition.label == "Extract Summary"
        assert definition.presentation_key == "file-text"

    def test_lookup_miss(self, catalog):
        assert catalog.lookup("does-not-exist") is None
        assert "does-not-exist" not in catalog

    def test_palette_order(self, catalog):
        ids = [d.id for d in catalog.list_by_category(StepCategory.TRIGGER)]
        assert ids[0] == "source-meeting-summary"
        assert ids[-1] == "source-calendar"

    def test_only_branch_step_is_branch(self, catalog):
        branches = [d.id for d in catalog.list_all() if d.is_branch]
        assert branches == ["logic-branch"]


class TestParameters:
    """Tests for config field lookup."""

    def test_own_parameters(self, catalog):
        names = [p.name for p in catalog.parameters_for("action-email")]
        assert names == ["recipient", "subject", "body"]

    def test_action_fallback(self, catalog):
        names = [p.name for p in catalog.parameters_for("action-jira")]
        assert names == ["actionType"]

    def test_ai_fallback(self, catalog):
        names = [p.name for p in catalog.parameters_for("ai-custom")]
        assert names == ["model", "prompt"]

    def test_trigger_has_none(self, catalog):
        assert catalog.parameters_for("source-email") == []

    def test_unknown_has_none(self, catalog):
        assert catalog.parameters_for("nope") == []

    def test_to_dict(self, catalog):
        data = catalog.lookup("action-slack").to_dict()
        assert data["type"] == "action"
        assert data["parameters"][0]["name"] == "channel"


class TestCustomCatalog:
    """Tests for caller-supplied catalogs."""

    def test_duplicate_ids_rejected(self):
        step = StepDefinition(id="x", category=StepCategory.ACTION, label="X")
        with pytest.raises(ValueError):
            NodeCatalog([step, step])

    def test_custom_definitions(self):
        catalog = NodeCatalog([
            StepDefinition(id="only", category=StepCategory.TRIGGER, label="Only"),
        ])
        assert [d.id for d in catalog.list_all()] == ["only"]
        assert catalog.list_by_category(StepCategory.ACTION) == []

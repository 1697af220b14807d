"""Pytest configuration and fixtures."""

import itertools

import pytest

from service.workflow.nodes.base import NodeCatalog, get_node_catalog
from service.workflow.tree_editor import CANVAS_REF, insert_node, update_node
from service.workflow.workflow_store import InMemoryWorkflowRepository, JsonWorkflowRepository


@pytest.fixture
def catalog() -> NodeCatalog:
    return get_node_catalog()


@pytest.fixture
def clock():
    """Deterministic timestamps: each call returns the next second."""
    counter = itertools.count()
    return lambda: f"2026-01-01T00:00:{next(counter):02d}+00:00"


@pytest.fixture
def memory_repo(catalog, clock) -> InMemoryWorkflowRepository:
    return InMemoryWorkflowRepository(catalog=catalog, clock=clock)


@pytest.fixture
def json_repo(tmp_path, catalog, clock) -> JsonWorkflowRepository:
    return JsonWorkflowRepository(tmp_path / "workflows.json", catalog=catalog, clock=clock)


@pytest.fixture
def branch_tree(catalog):
    """trigger, branch{true: [slack, ai], false: [email]}, all configured."""
    tree = insert_node([], CANVAS_REF, "source-meeting-summary", catalog, "trigger-1")
    tree = insert_node(tree, CANVAS_REF, "logic-branch", catalog, "branch-1")
    tree = insert_node(tree, "branch-1-true", "action-slack", catalog, "slack-1")
    tree = insert_node(tree, "branch-1-true", "ai-summary", catalog, "ai-1")
    tree = insert_node(tree, "branch-1-false", "action-email", catalog, "email-1")
    tree = update_node(tree, "slack-1", {"config": {"channel": "#team"}})
    tree = update_node(tree, "ai-1", {"config": {"model": "GPT-4"}})
    tree = update_node(tree, "email-1", {"config": {"recipient": "a@b.c"}})
    return tree

"""
Workflow Document Model — Visual Automation Builder.

Provides the infrastructure for assembling, validating and storing
automations built as a tree of typed steps on a drag-and-drop canvas.

Architecture:
    nodes/             — StepDefinition catalog and the built-in steps
    workflow_model     — PlacedNode / BranchPaths / Workflow models
    tree_editor        — Pure insert/delete/update/find over trees
    workflow_validator — Per-node error map and edit-time reconciliation
    workflow_codec     — Persisted form without presentation state
    workflow_store     — Keyed repository of saved workflows
    editor_session     — One interactive editing session
    workflow_inspector — Listing summaries
    templates          — Pre-built workflows
"""

from service.workflow.nodes.base import (
    NodeCatalog,
    NodeParameter,
    StepCategory,
    StepDefinition,
    get_node_catalog,
)
from service.workflow.workflow_model import (
    BranchPaths,
    PlacedNode,
    Workflow,
    WorkflowTree,
)
from service.workflow.errors import (
    WorkflowError,
    InvalidContainerError,
    UnknownStepError,
    DuplicateInstanceIdError,
    NodeNotFoundError,
    WorkflowValidationError,
    WorkflowPersistenceError,
)
from service.workflow.tree_editor import (
    CANVAS_REF,
    count_nodes,
    delete_node,
    find_node,
    insert_node,
    iter_nodes,
    update_node,
)
from service.workflow.workflow_validator import reconcile_errors, validate_workflow
from service.workflow.workflow_codec import (
    deserialize_tree,
    deserialize_workflow,
    serialize_tree,
    serialize_workflow,
)
from service.workflow.workflow_store import (
    WorkflowRepository,
    InMemoryWorkflowRepository,
    JsonWorkflowRepository,
    get_workflow_repository,
)
from service.workflow.editor_session import WorkflowEditorSession
from service.workflow.workflow_inspector import list_workflow_summaries, summarize_workflow

__all__ = [
    "NodeCatalog",
    "NodeParameter",
    "StepCategory",
    "StepDefinition",
    "get_node_catalog",
    "BranchPaths",
    "PlacedNode",
    "Workflow",
    "WorkflowTree",
    "WorkflowError",
    "InvalidContainerError",
    "UnknownStepError",
    "DuplicateInstanceIdError",
    "NodeNotFoundError",
    "WorkflowValidationError",
    "WorkflowPersistenceError",
    "CANVAS_REF",
    "count_nodes",
    "delete_node",
    "find_node",
    "insert_node",
    "iter_nodes",
    "update_node",
    "reconcile_errors",
    "validate_workflow",
    "deserialize_tree",
    "deserialize_workflow",
    "serialize_tree",
    "serialize_workflow",
    "WorkflowRepository",
    "InMemoryWorkflowRepository",
    "JsonWorkflowRepository",
    "get_workflow_repository",
    "WorkflowEditorSession",
    "list_workflow_summaries",
    "summarize_workflow",
]

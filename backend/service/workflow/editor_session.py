"""
Editor Session — one interactive editing session over a workflow.

Holds the single in-memory tree being edited and applies the pure
``tree_editor`` functions to it, one event at a time. Validation is
lenient while editing and strict on save:

* after a drop, delete, or update, the shown errors are reconciled
  against a fresh validation, so fixed nodes lose their error but no
  new error appears;
* ``validate()`` and ``save()`` run the full check and replace the
  shown errors.

Tree-mutation failures are logged no-ops. Only ``save()`` raises:
``WorkflowValidationError`` when the tree has errors and
``WorkflowPersistenceError`` when the store fails.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Mapping, Optional

from service.logging import get_session_logger
from service.workflow.errors import (
    NodeNotFoundError,
    WorkflowError,
    WorkflowValidationError,
)
from service.workflow.nodes.base import NodeCatalog, NodeParameter, get_node_catalog
from service.workflow.tree_editor import (
    count_nodes,
    delete_node,
    find_node,
    insert_node,
    mint_instance_id,
    require_node,
    update_node,
)
from service.workflow.workflow_model import PlacedNode, Workflow
from service.workflow.workflow_store import WorkflowRepository
from service.workflow.workflow_validator import reconcile_errors, validate_workflow

DEFAULT_WORKFLOW_NAME = "Untitled Workflow"


class WorkflowEditorSession:
    """Editing state for a single workflow document."""

    def __init__(
        self,
        repository: WorkflowRepository,
        catalog: Optional[NodeCatalog] = None,
        workflow_id: Optional[str] = None,
    ) -> None:
        self._repository = repository
        self._catalog = catalog if catalog is not None else get_node_catalog()
        self.session_id = uuid.uuid4().hex[:8]
        self._log = get_session_logger(self.session_id)

        self.workflow_id: Optional[str] = None
        self.name = DEFAULT_WORKFLOW_NAME
        self.is_enabled = True
        self.nodes: List[PlacedNode] = []
        self.errors: Dict[str, str] = {}
        self.selected_node_id: Optional[str] = None

        if workflow_id:
            self._load(workflow_id)

    def _load(self, workflow_id: str) -> None:
        workflow = self._repository.get(workflow_id)
        if workflow is None:
            self._log.warning(f"Workflow {workflow_id} not found, starting a new draft")
            return
        self.workflow_id = workflow.id
        self.name = workflow.name
        self.is_enabled = workflow.is_enabled
        self.nodes = workflow.root
        self._log.info(f"Loaded workflow {workflow.id} with {count_nodes(self.nodes)} nodes")

    # ── Properties ──

    @property
    def is_draft(self) -> bool:
        return self.workflow_id is None

    @property
    def node_count(self) -> int:
        return count_nodes(self.nodes)

    # ── Tree events ──

    def drop(self, definition_id: str, container_ref: Optional[str]) -> Optional[str]:
        """Place a new step where a drag ended.

        ``container_ref`` is ``None`` when the drag ended outside every
        drop target. Returns the new instance id, or ``None`` if nothing
        changed.
        """
        if container_ref is None:
            return None
        instance_id = mint_instance_id(definition_id)
        try:
            next_nodes = insert_node(
                self.nodes, container_ref, definition_id, self._catalog, instance_id,
            )
        except WorkflowError as e:
            self._log.warning(f"Drop ignored: {e.message}")
            return None
        self._apply(next_nodes)
        return instance_id

    def delete_node(self, instance_id: str) -> None:
        self._apply(delete_node(self.nodes, instance_id))
        if self.selected_node_id == instance_id:
            self.selected_node_id = None
        if self.selected_node_id and find_node(self.nodes, self.selected_node_id) is None:
            # The selection lived inside the deleted subtree.
            self.selected_node_id = None

    def update_node(self, instance_id: str, fields: Mapping[str, Any]) -> None:
        self._apply(update_node(self.nodes, instance_id, fields))

    def _apply(self, next_nodes: List[PlacedNode]) -> None:
        self.nodes = next_nodes
        if self.errors:
            self.errors = reconcile_errors(self.errors, validate_workflow(next_nodes))

    # ── Selection ──

    def select_node(self, instance_id: Optional[str]) -> None:
        if instance_id is not None:
            try:
                require_node(self.nodes, instance_id)
            except NodeNotFoundError as e:
                self._log.debug(f"Select ignored: {e.message}")
                return
        self.selected_node_id = instance_id

    def selected_node(self) -> Optional[PlacedNode]:
        if self.selected_node_id is None:
            return None
        return find_node(self.nodes, self.selected_node_id)

    def config_parameters(self) -> List[NodeParameter]:
        """Config fields for the selected node."""
        node = self.selected_node()
        if node is None:
            return []
        return self._catalog.parameters_for(node.definition_id)

    # ── Document ──

    def rename(self, name: str) -> None:
        self.name = name.strip() or DEFAULT_WORKFLOW_NAME

    def set_enabled(self, enabled: bool) -> None:
        self.is_enabled = enabled

    def validate(self) -> Dict[str, str]:
        """Run the full check and show every error it finds."""
        self.errors = validate_workflow(self.nodes)
        return dict(self.errors)

    def to_workflow(self) -> Workflow:
        return Workflow(
            id=self.workflow_id,
            name=self.name,
            is_enabled=self.is_enabled,
            root=[n.model_copy(deep=True) for n in self.nodes],
        )

    def save(self) -> Workflow:
        """Validate and persist the workflow.

        Raises ``WorkflowValidationError`` without touching the store when
        any node fails validation. A ``WorkflowPersistenceError`` from the
        store propagates with the session state unchanged.
        """
        errors = self.validate()
        if errors:
            self._log.info(f"Save refused: {len(errors)} validation errors")
            raise WorkflowValidationError(errors)

        saved = self._repository.save(self.to_workflow())
        self.workflow_id = saved.id
        self._log.info(f"Saved workflow {saved.id} ({count_nodes(saved.root)} nodes)")
        return saved


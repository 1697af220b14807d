"""
Workflow Codec — convert trees between memory and persisted form.

The persisted form is plain JSON-ready data::

    {"id": "ai-summary", "type": "ai", "label": "...", "description": "...",
     "config": {...}, "instanceId": "...", "branches": {"true": [], "false": []}}

Presentation keys never appear in it. ``deserialize_tree`` reattaches
them from the catalog by ``definition_id``; a definition the catalog
does not know gets ``fallback_key`` instead of failing the load.
"""

from __future__ import annotations

import copy
from logging import getLogger
from typing import Any, Dict, List, Optional

from service.workflow.nodes.base import NodeCatalog, get_node_catalog
from service.workflow.workflow_model import BranchPaths, PlacedNode, Workflow

logger = getLogger(__name__)

FALLBACK_PRESENTATION_KEY = "zap"


# ── Tree ──


def serialize_tree(tree: List[PlacedNode]) -> List[Dict[str, Any]]:
    """Deep copy of ``tree`` as persisted dicts, without presentation keys."""
    return [_serialize_node(node) for node in tree]


def _serialize_node(node: PlacedNode) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": node.definition_id,
        "type": node.category.value,
        "label": node.label,
    }
    if node.description is not None:
        data["description"] = node.description
    if node.config is not None:
        data["config"] = copy.deepcopy(node.config)
    data["instanceId"] = node.instance_id
    if node.branches is not None:
        data["branches"] = {
            "true": serialize_tree(node.branches.true_branch),
            "false": serialize_tree(node.branches.false_branch),
        }
    return data


def deserialize_tree(
    data: List[Dict[str, Any]],
    catalog: Optional[NodeCatalog] = None,
    fallback_key: str = FALLBACK_PRESENTATION_KEY,
) -> List[PlacedNode]:
    """Build an in-memory tree from persisted dicts.

    Raises pydantic's ``ValidationError`` when a node is malformed
    (missing ids, unknown ``type``).
    """
    catalog = catalog if catalog is not None else get_node_catalog()
    return [_deserialize_node(item, catalog, fallback_key) for item in data]


def _deserialize_node(
    item: Dict[str, Any],
    catalog: NodeCatalog,
    fallback_key: str,
) -> PlacedNode:
    definition = catalog.lookup(item.get("id", ""))
    fields = {k: copy.deepcopy(v) for k, v in item.items() if k != "branches"}
    if "type" not in fields and definition is not None:
        fields["type"] = definition.category

    node = PlacedNode.model_validate(fields)
    if definition is not None:
        node.presentation_key = definition.presentation_key
    else:
        logger.warning(
            f"Unknown step '{node.definition_id}' on {node.instance_id}, "
            f"using fallback presentation"
        )
        node.presentation_key = fallback_key

    raw_branches = item.get("branches")
    if node.is_branch:
        raw_branches = raw_branches or {}
        node.branches = BranchPaths(
            true_branch=deserialize_tree(raw_branches.get("true", []), catalog, fallback_key),
            false_branch=deserialize_tree(raw_branches.get("false", []), catalog, fallback_key),
        )
    elif raw_branches:
        logger.warning(f"Dropping branches from non-branch node {node.instance_id}")
    return node


# ── Workflow document ──


def serialize_workflow(workflow: Workflow) -> Dict[str, Any]:
    return {
        "id": workflow.id,
        "name": workflow.name,
        "isEnabled": workflow.is_enabled,
        "nodes": serialize_tree(workflow.root),
        "createdAt": workflow.created_at,
        "updatedAt": workflow.updated_at,
    }


def deserialize_workflow(
    data: Dict[str, Any],
    catalog: Optional[NodeCatalog] = None,
    fallback_key: str = FALLBACK_PRESENTATION_KEY,
) -> Workflow:
    header = {k: v for k, v in data.items() if k != "nodes"}
    workflow = Workflow.model_validate(header)
    workflow.root = deserialize_tree(data.get("nodes", []), catalog, fallback_key)
    return workflow

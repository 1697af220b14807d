"""
Tree Editor — pure mutation and lookup functions for workflow trees.

Every mutator takes a tree and returns a new one; the input list and
the nodes in it are never modified. Internally each call clones the
tree once and edits the private clone, so a mutation costs O(size of
tree) and the result shares no lists or config dicts with the input.

Traversal order is fixed everywhere: list order, and for a branch
node the whole ``true`` path before the ``false`` path.

Container references name the list an insert lands in:

* ``"canvas"`` — the root list
* ``"<instanceId>-true"`` / ``"<instanceId>-false"`` — a branch path
"""

from __future__ import annotations

import uuid
from logging import getLogger
from typing import Any, Iterator, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from service.workflow.errors import (
    DuplicateInstanceIdError,
    InvalidContainerError,
    NodeNotFoundError,
    UnknownStepError,
)
from service.workflow.nodes.base import NodeCatalog, StepDefinition, get_node_catalog
from service.workflow.workflow_model import BranchPaths, PlacedNode

logger = getLogger(__name__)

CANVAS_REF = "canvas"
TRUE_SIDE = "true"
FALSE_SIDE = "false"

EDITABLE_FIELDS = ("label", "description", "config")


# ====================================================================
# Lookup helpers
# ====================================================================


def iter_nodes(tree: List[PlacedNode]) -> Iterator[PlacedNode]:
    """Yield every node depth-first in canonical order."""
    for node in tree:
        yield node
        if node.branches is not None:
            yield from iter_nodes(node.branches.true_branch)
            yield from iter_nodes(node.branches.false_branch)


def count_nodes(tree: List[PlacedNode]) -> int:
    """Count every node once, including nested branch members."""
    return sum(1 for _ in iter_nodes(tree))


def find_node(tree: List[PlacedNode], instance_id: str) -> Optional[PlacedNode]:
    """Return a copy of the node with ``instance_id``, or ``None``."""
    for node in iter_nodes(tree):
        if node.instance_id == instance_id:
            return node.model_copy(deep=True)
    return None


def require_node(tree: List[PlacedNode], instance_id: str) -> PlacedNode:
    """Like ``find_node`` but raises ``NodeNotFoundError`` on a miss."""
    node = find_node(tree, instance_id)
    if node is None:
        raise NodeNotFoundError(instance_id)
    return node


def container_ref(instance_id: str, side: str) -> str:
    """Build the reference for one path of a branch node."""
    return f"{instance_id}-{side}"


def container_refs(tree: List[PlacedNode]) -> List[str]:
    """All valid drop targets, canvas first, then branch paths in order."""
    refs = [CANVAS_REF]
    for node in iter_nodes(tree):
        if node.branches is not None:
            refs.append(container_ref(node.instance_id, TRUE_SIDE))
            refs.append(container_ref(node.instance_id, FALSE_SIDE))
    return refs


def mint_instance_id(definition_id: str) -> str:
    return f"{definition_id}-{uuid.uuid4()}"


# ====================================================================
# Mutations
# ====================================================================


def insert_node(
    tree: List[PlacedNode],
    container: str,
    definition_id: str,
    catalog: Optional[NodeCatalog] = None,
    instance_id: Optional[str] = None,
) -> List[PlacedNode]:
    """Append a new node built from ``definition_id`` to ``container``.

    Raises ``UnknownStepError`` for a definition missing from the
    catalog, ``InvalidContainerError`` when ``container`` names no
    existing list, and ``DuplicateInstanceIdError`` when an explicit
    ``instance_id`` is already taken. The input tree is untouched in
    every case.
    """
    catalog = catalog if catalog is not None else get_node_catalog()
    definition = catalog.lookup(definition_id)
    if definition is None:
        raise UnknownStepError(definition_id)

    if instance_id is None:
        instance_id = mint_instance_id(definition_id)
    elif any(n.instance_id == instance_id for n in iter_nodes(tree)):
        raise DuplicateInstanceIdError(instance_id)

    result = _clone_tree(tree)
    target = _resolve_container(result, container)
    if target is None:
        raise InvalidContainerError(container)

    target.append(_new_node(definition, instance_id))
    logger.debug(f"Inserted {definition_id} as {instance_id} into {container}")
    return result


def delete_node(tree: List[PlacedNode], instance_id: str) -> List[PlacedNode]:
    """Remove the node with ``instance_id`` together with its subtree.

    Deleting an id that is not in the tree returns an equal tree.
    """
    result = _clone_tree(tree)
    if not _remove_in_place(result, instance_id):
        logger.debug(f"Delete skipped, node not found: {instance_id}")
    return result


def update_node(
    tree: List[PlacedNode],
    instance_id: str,
    fields: Mapping[str, Any],
) -> List[PlacedNode]:
    """Merge ``fields`` into the node's label, description and config.

    ``config`` is merged shallowly: given keys override, the rest stay.
    Any other key is ignored, since identity and type never change
    after creation. An update with a value of the wrong type (a
    non-string label, a config that is not a mapping) is dropped as a
    whole and returns an equal tree.
    """
    ignored = [k for k in fields if k not in EDITABLE_FIELDS]
    if ignored:
        logger.warning(f"Ignoring non-editable fields on {instance_id}: {ignored}")

    result = _clone_tree(tree)
    for node in iter_nodes(result):
        if node.instance_id != instance_id:
            continue
        try:
            _assign_fields(node, fields)
        except (ValidationError, TypeError) as e:
            logger.warning(f"Update rejected on {instance_id}: {e}")
            return _clone_tree(tree)
        return result

    logger.debug(f"Update skipped, node not found: {instance_id}")
    return result


# ====================================================================
# Internals
# ====================================================================


def _new_node(definition: StepDefinition, instance_id: str) -> PlacedNode:
    return PlacedNode(
        definition_id=definition.id,
        category=definition.category,
        instance_id=instance_id,
        label=definition.label,
        description=definition.description,
        presentation_key=definition.presentation_key,
        branches=BranchPaths() if definition.is_branch else None,
    )


def _assign_fields(node: PlacedNode, fields: Mapping[str, Any]) -> None:
    # PlacedNode validates on assignment, so bad values raise here.
    if "label" in fields:
        node.label = fields["label"]
    if "description" in fields:
        node.description = fields["description"]
    if "config" in fields:
        config = fields["config"] or {}
        if not isinstance(config, Mapping):
            raise TypeError(f"config must be a mapping, got {type(config).__name__}")
        node.config = {**(node.config or {}), **config}


def _clone_tree(tree: List[PlacedNode]) -> List[PlacedNode]:
    return [node.model_copy(deep=True) for node in tree]


def _parse_container_ref(ref: str) -> Optional[Tuple[str, str]]:
    # Instance ids contain hyphens themselves, so split from the right.
    if not ref or "-" not in ref:
        return None
    instance_id, side = ref.rsplit("-", 1)
    if not instance_id or side not in (TRUE_SIDE, FALSE_SIDE):
        return None
    return instance_id, side


def _resolve_container(
    tree: List[PlacedNode], ref: str,
) -> Optional[List[PlacedNode]]:
    if ref == CANVAS_REF:
        return tree
    parsed = _parse_container_ref(ref)
    if parsed is None:
        return None
    instance_id, side = parsed
    for node in iter_nodes(tree):
        if node.instance_id == instance_id:
            if not node.is_branch or node.branches is None:
                return None
            if side == TRUE_SIDE:
                return node.branches.true_branch
            return node.branches.false_branch
    return None


def _remove_in_place(nodes: List[PlacedNode], instance_id: str) -> bool:
    removed = False
    kept = [n for n in nodes if n.instance_id != instance_id]
    if len(kept) != len(nodes):
        nodes[:] = kept
        removed = True
    for node in nodes:
        if node.branches is not None:
            removed = _remove_in_place(node.branches.true_branch, instance_id) or removed
            removed = _remove_in_place(node.branches.false_branch, instance_id) or removed
    return removed

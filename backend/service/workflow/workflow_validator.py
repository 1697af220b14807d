"""
Workflow Validator — per-node error map for a workflow tree.

``validate_workflow`` always recomputes the full map from scratch.
``reconcile_errors`` is the lenient variant used while editing: it
only keeps errors that were already shown and still fail, so errors
disappear as the user fixes them but new ones only appear on an
explicit full check (e.g. save).
"""

from __future__ import annotations

from typing import Dict, List, Mapping

from service.workflow.nodes.base import StepCategory
from service.workflow.workflow_model import PlacedNode

CONFIG_REQUIRED = "Configuration required"
EMPTY_BRANCH = "At least one branch path must have steps"

_CONFIGURABLE = (StepCategory.ACTION, StepCategory.AI_STEP)


def validate_workflow(tree: List[PlacedNode]) -> Dict[str, str]:
    """Return ``{instance_id: message}`` for every failing node.

    A node gets at most one message; the config rule is checked before
    the empty-branch rule. Branch paths are always descended into.
    """
    errors: Dict[str, str] = {}
    _validate_nodes(tree, errors)
    return errors


def _validate_nodes(nodes: List[PlacedNode], errors: Dict[str, str]) -> None:
    for node in nodes:
        message = _check_node(node)
        if message:
            errors[node.instance_id] = message
        if node.branches is not None:
            _validate_nodes(node.branches.true_branch, errors)
            _validate_nodes(node.branches.false_branch, errors)


def _check_node(node: PlacedNode) -> str:
    if node.category in _CONFIGURABLE and not node.config:
        return CONFIG_REQUIRED
    if node.is_branch and (node.branches is None or node.branches.is_empty):
        return EMPTY_BRANCH
    return ""


def reconcile_errors(
    previous: Mapping[str, str],
    fresh: Mapping[str, str],
) -> Dict[str, str]:
    """Keep only previously shown errors that are still present.

    The result never contains a key absent from ``previous``; messages
    come from ``fresh``.
    """
    return {k: fresh[k] for k in previous if k in fresh}

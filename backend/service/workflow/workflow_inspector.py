"""
Workflow Inspector — structured summaries of saved workflows.

Produces the per-workflow report shown in the automation list:

* node totals (every nested branch member counted once)
* per-category counts and branch count
* nesting depth of the deepest node
* validation state
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from service.workflow.nodes.base import StepCategory
from service.workflow.tree_editor import count_nodes, iter_nodes
from service.workflow.workflow_model import PlacedNode, Workflow
from service.workflow.workflow_store import WorkflowRepository
from service.workflow.workflow_validator import validate_workflow


# ====================================================================
# Public API
# ====================================================================


def summarize_workflow(workflow: Workflow) -> Dict[str, Any]:
    """Summarize a workflow for listing.

    Returns a dict containing identity, enabled state, timestamps,
    ``total_nodes``, ``nodes_by_category``, ``branch_count``,
    ``max_depth``, ``error_count`` and ``is_valid``.
    """
    by_category = {cat.value: 0 for cat in StepCategory}
    for node in iter_nodes(workflow.root):
        by_category[node.category.value] += 1

    errors = validate_workflow(workflow.root)
    return {
        "id": workflow.id,
        "name": workflow.name,
        "is_enabled": workflow.is_enabled,
        "total_nodes": count_nodes(workflow.root),
        "nodes_by_category": by_category,
        "branch_count": by_category[StepCategory.BRANCH.value],
        "max_depth": tree_depth(workflow.root),
        "error_count": len(errors),
        "is_valid": not errors,
        "created_at": workflow.created_at,
        "updated_at": workflow.updated_at,
    }


def list_workflow_summaries(
    repository: WorkflowRepository,
    newest_first: bool = True,
) -> List[Dict[str, Any]]:
    """Summaries of every stored workflow, latest-inserted first by default."""
    workflows = repository.list_all()
    if newest_first:
        workflows.reverse()
    return [summarize_workflow(w) for w in workflows]


def tree_depth(tree: List[PlacedNode], _level: int = 1) -> int:
    """Nesting depth: 0 for an empty tree, 1 for a flat one."""
    depth = 0
    for node in tree:
        depth = max(depth, _level)
        if node.branches is not None:
            depth = max(
                depth,
                tree_depth(node.branches.true_branch, _level + 1),
                tree_depth(node.branches.false_branch, _level + 1),
            )
    return depth


def describe_tree(tree: List[PlacedNode], indent: Optional[str] = None) -> str:
    """Readable outline of a tree, one node per line."""
    lines: List[str] = []
    _outline(tree, indent if indent is not None else "  ", 0, lines)
    return "\n".join(lines)


def _outline(
    nodes: List[PlacedNode], indent: str, level: int, lines: List[str],
) -> None:
    for node in nodes:
        lines.append(f"{indent * level}- {node.label} [{node.category.value}] ({node.instance_id})")
        if node.branches is not None:
            lines.append(f"{indent * (level + 1)}true:")
            _outline(node.branches.true_branch, indent, level + 2, lines)
            lines.append(f"{indent * (level + 1)}false:")
            _outline(node.branches.false_branch, indent, level + 2, lines)

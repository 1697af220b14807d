"""
Workflow Data Models — placed nodes, branch paths, and workflows.

These are the data structures behind the visual builder. A workflow's
``root`` is an ordered list of ``PlacedNode``; branch nodes nest two
more ordered lists, so the whole document is a finite rooted tree.

Field names are snake_case in Python and use the persisted camelCase
names as aliases (``instanceId``, ``isEnabled``, ``branches.true``...).
``presentation_key`` is in-memory only and excluded from every dump.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from service.workflow.nodes.base import StepCategory


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class BranchPaths(BaseModel):
    """The two child lists of a branch node."""

    model_config = ConfigDict(populate_by_name=True)

    true_branch: List["PlacedNode"] = Field(default_factory=list, alias="true")
    false_branch: List["PlacedNode"] = Field(default_factory=list, alias="false")

    @property
    def is_empty(self) -> bool:
        return not self.true_branch and not self.false_branch


class PlacedNode(BaseModel):
    """A single step placed on the canvas or inside a branch.

    ``definition_id`` references a catalog ``StepDefinition``;
    ``instance_id`` is unique across the whole tree. Both are fixed once
    the node is created. Only branch nodes carry ``branches``.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    definition_id: str = Field(alias="id")
    category: StepCategory = Field(alias="type")
    instance_id: str = Field(alias="instanceId")
    label: str = ""
    description: Optional[str] = None
    config: Optional[Dict[str, Any]] = None
    branches: Optional[BranchPaths] = None
    presentation_key: Optional[str] = Field(default=None, exclude=True)

    @property
    def is_branch(self) -> bool:
        return self.category == StepCategory.BRANCH


BranchPaths.model_rebuild()


# The ordered root list; nested branch lists complete the tree.
WorkflowTree = List[PlacedNode]


class Workflow(BaseModel):
    """A named automation document.

    ``id`` is ``None`` while the workflow is a Draft; the repository
    assigns one on the first successful save.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    name: str = "Untitled Workflow"
    is_enabled: bool = Field(default=True, alias="isEnabled")
    root: List[PlacedNode] = Field(default_factory=list, alias="nodes")
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")

    @property
    def is_draft(self) -> bool:
        return self.id is None

"""
Workflow Errors — exception hierarchy for the workflow document model.

Tree-mutation errors (``InvalidContainerError``, ``UnknownStepError``,
``DuplicateInstanceIdError``, ``NodeNotFoundError``) are raised by the
low-level editor functions and absorbed by the editing session as
logged no-ops. ``WorkflowValidationError`` and ``WorkflowPersistenceError``
are the only two that reach the user.
"""

from __future__ import annotations

from typing import Dict, Optional


class WorkflowError(Exception):
    """Base exception for all workflow errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidContainerError(WorkflowError):
    """A container reference resolves to no existing node list."""

    def __init__(self, container_ref: str) -> None:
        self.container_ref = container_ref
        super().__init__(f"No container matches reference '{container_ref}'")


class UnknownStepError(WorkflowError):
    """A definition id is not present in the node catalog."""

    def __init__(self, definition_id: str) -> None:
        self.definition_id = definition_id
        super().__init__(f"Unknown step definition '{definition_id}'")


class DuplicateInstanceIdError(WorkflowError):
    """An explicit instance id is already used somewhere in the tree."""

    def __init__(self, instance_id: str) -> None:
        self.instance_id = instance_id
        super().__init__(f"Instance id '{instance_id}' already exists in the tree")


class NodeNotFoundError(WorkflowError):
    """No node carries the requested instance id."""

    def __init__(self, instance_id: str) -> None:
        self.instance_id = instance_id
        super().__init__(f"Node '{instance_id}' not found")


class WorkflowValidationError(WorkflowError):
    """Save refused because the tree still has validation errors.

    ``errors`` maps instance ids to messages, exactly as returned by
    ``validate_workflow``.
    """

    def __init__(self, errors: Dict[str, str]) -> None:
        self.errors = dict(errors)
        super().__init__(
            f"Cannot save: {self.error_count} errors found. "
            "Please check the flagged nodes."
        )

    @property
    def error_count(self) -> int:
        return len(self.errors)


class WorkflowPersistenceError(WorkflowError):
    """Reading or writing the workflow store failed."""

    def __init__(self, message: str, workflow_id: Optional[str] = None) -> None:
        self.workflow_id = workflow_id
        super().__init__(message)

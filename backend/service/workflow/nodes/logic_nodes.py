"""
Logic Nodes — control-flow steps.

The branch step is the only step with children: every placed branch
owns a ``true`` and a ``false`` list of nested steps.
"""

from __future__ import annotations

from service.workflow.nodes.base import StepCategory, StepDefinition, register_steps

register_steps(
    StepDefinition(
        id="logic-branch",
        category=StepCategory.BRANCH,
        label="Condition (If/Else)",
        description="Branch workflow based on conditions",
        presentation_key="git-fork",
    ),
)

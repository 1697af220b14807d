"""
AI Nodes — model-backed extraction and analysis steps.

Nothing here calls a model; the definitions only describe what the
step will do and which settings it needs once an engine runs it.
"""

from __future__ import annotations

from service.workflow.nodes.base import (
    AI_MODELS,
    NodeParameter,
    StepCategory,
    StepDefinition,
    register_steps,
)

_MODEL_PARAMETER = NodeParameter(name="model", label="AI Model", type="select", options=AI_MODELS)

register_steps(
    StepDefinition(
        id="ai-summary",
        category=StepCategory.AI_STEP,
        label="Extract Summary",
        description="Generate concise summary",
        presentation_key="file-text",
        parameters=[
            _MODEL_PARAMETER,
            NodeParameter(
                name="length",
                label="Summary Length",
                type="select",
                options=["Short", "Medium", "Long"],
            ),
            NodeParameter(
                name="focus",
                label="Focus Area",
                placeholder="e.g., Decisions, Action Items",
            ),
        ],
    ),
    StepDefinition(
        id="ai-tasks",
        category=StepCategory.AI_STEP,
        label="Extract Action Items",
        description="Identify tasks & assignees",
        presentation_key="check-square",
        parameters=[
            _MODEL_PARAMETER,
            NodeParameter(
                name="assignee",
                label="Default Assignee",
                placeholder="e.g., Project Manager",
            ),
        ],
    ),
    StepDefinition(
        id="ai-risks",
        category=StepCategory.AI_STEP,
        label="Extract Risks & Decisions",
        description="Find key risks and decisions",
        presentation_key="alert-triangle",
    ),
    StepDefinition(
        id="ai-sentiment",
        category=StepCategory.AI_STEP,
        label="Sentiment Analysis",
        description="Analyze tone and sentiment",
        presentation_key="smile",
    ),
    StepDefinition(
        id="ai-custom",
        category=StepCategory.AI_STEP,
        label="Custom AI Prompt",
        description="Run custom prompt",
        presentation_key="brain",
    ),
)

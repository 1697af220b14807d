"""
Node Catalog — step definitions and the registry that serves them.

A ``StepDefinition`` describes one kind of step that can be dragged
onto the canvas, independent of where it is placed. The catalog is
built once from a fixed sequence of definitions and never mutated
afterwards; it only supplies defaults (label, description,
presentation key) when a node is inserted or rehydrated, plus the
configuration parameters the config panel should render.

The built-in steps live in the sibling ``*_nodes`` modules and are
collected by ``register_steps`` at import time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from logging import getLogger
from typing import Any, Dict, Iterable, List, Optional

logger = getLogger(__name__)


class StepCategory(str, Enum):
    """Kind of step. The value is what gets persisted as ``type``."""
    TRIGGER = "trigger"
    ACTION = "action"
    AI_STEP = "ai"
    BRANCH = "branch"


@dataclass(frozen=True)
class NodeParameter:
    """One configurable field shown in the node config panel."""
    name: str
    label: str
    type: str = "text"                # text | textarea | select | number
    placeholder: str = ""
    options: List[str] = field(default_factory=list)
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "type": self.type,
            "placeholder": self.placeholder,
            "options": list(self.options),
            "description": self.description,
        }


@dataclass(frozen=True)
class StepDefinition:
    """Catalog entry for one kind of step.

    ``presentation_key`` is an opaque UI handle (an icon name). It is
    resolved from the catalog whenever a tree is loaded and is never
    stored with a node.
    """
    id: str
    category: StepCategory
    label: str
    description: str = ""
    presentation_key: str = ""
    parameters: List[NodeParameter] = field(default_factory=list)

    @property
    def is_branch(self) -> bool:
        return self.category == StepCategory.BRANCH

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the palette."""
        return {
            "id": self.id,
            "type": self.category.value,
            "label": self.label,
            "description": self.description,
            "presentation_key": self.presentation_key,
            "parameters": [p.to_dict() for p in self.parameters],
        }


AI_MODELS = ["GPT-4", "Claude 3.5 Sonnet", "Gemini Pro"]

# Parameters used when a step declares none of its own.
CATEGORY_FALLBACK_PARAMETERS: Dict[StepCategory, List[NodeParameter]] = {
    StepCategory.ACTION: [
        NodeParameter(
            name="actionType",
            label="Action Type",
            type="select",
            options=["Immediate", "Scheduled", "Recurring"],
        ),
    ],
    StepCategory.AI_STEP: [
        NodeParameter(name="model", label="AI Model", type="select", options=list(AI_MODELS)),
        NodeParameter(
            name="prompt",
            label="Custom Prompt",
            type="textarea",
            placeholder="Enter your custom prompt...",
        ),
    ],
}


class NodeCatalog:
    """Read-only registry of step definitions keyed by id."""

    def __init__(self, definitions: Iterable[StepDefinition]) -> None:
        self._definitions: Dict[str, StepDefinition] = {}
        for definition in definitions:
            if definition.id in self._definitions:
                raise ValueError(f"Duplicate step definition id: {definition.id}")
            self._definitions[definition.id] = definition

    def lookup(self, definition_id: str) -> Optional[StepDefinition]:
        """Return the definition for ``definition_id`` or ``None``."""
        return self._definitions.get(definition_id)

    def __contains__(self, definition_id: object) -> bool:
        return definition_id in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def list_all(self) -> List[StepDefinition]:
        return list(self._definitions.values())

    def list_by_category(self, category: StepCategory) -> List[StepDefinition]:
        return [d for d in self._definitions.values() if d.category == category]

    def grouped(self) -> Dict[StepCategory, List[StepDefinition]]:
        """Palette sections in category order, definitions in registration order."""
        return {cat: self.list_by_category(cat) for cat in StepCategory}

    def parameters_for(self, definition_id: str) -> List[NodeParameter]:
        """Config fields for a step, falling back to its category defaults."""
        definition = self.lookup(definition_id)
        if definition is None:
            return []
        if definition.parameters:
            return list(definition.parameters)
        return list(CATEGORY_FALLBACK_PARAMETERS.get(definition.category, []))


# ── Built-in step registration ──

_BUILTIN_STEPS: List[StepDefinition] = []


def register_steps(*definitions: StepDefinition) -> None:
    """Add built-in steps. Called by the ``*_nodes`` modules on import."""
    _BUILTIN_STEPS.extend(definitions)


_catalog_instance: Optional[NodeCatalog] = None


def get_node_catalog() -> NodeCatalog:
    """Return the process-wide catalog of built-in steps."""
    global _catalog_instance
    if _catalog_instance is None:
        # Importing the package triggers the register_steps calls.
        import service.workflow.nodes  # noqa: F401
        _catalog_instance = NodeCatalog(_BUILTIN_STEPS)
        logger.info(f"Node catalog initialized with {len(_catalog_instance)} steps")
    return _catalog_instance

"""
Workflow Nodes Package.

Registers the built-in step definitions that make up the default
node catalog. Import order is palette order.
"""

from service.workflow.nodes.base import (
    NodeCatalog,
    NodeParameter,
    StepCategory,
    StepDefinition,
    get_node_catalog,
)

# Import all step modules to trigger registration
from service.workflow.nodes import trigger_nodes  # noqa: F401
from service.workflow.nodes import task_nodes     # noqa: F401
from service.workflow.nodes import model_nodes    # noqa: F401
from service.workflow.nodes import logic_nodes    # noqa: F401

__all__ = [
    "NodeCatalog",
    "NodeParameter",
    "StepCategory",
    "StepDefinition",
    "get_node_catalog",
]

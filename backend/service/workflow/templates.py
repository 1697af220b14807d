"""
Pre-built Workflow Templates.

Factory functions returning ready-made Draft ``Workflow`` objects that
users can save as a starting point. Templates are assembled with the
same ``tree_editor`` operations the builder uses, and every step is
configured so the result passes validation.
"""

from __future__ import annotations

from typing import Optional

from service.workflow.nodes.base import NodeCatalog, get_node_catalog
from service.workflow.tree_editor import (
    CANVAS_REF,
    FALSE_SIDE,
    TRUE_SIDE,
    container_ref,
    insert_node,
    mint_instance_id,
    update_node,
)
from service.workflow.workflow_model import Workflow


# ============================================================================
# Meeting Follow-up Template
# ============================================================================


def create_meeting_followup_template(catalog: Optional[NodeCatalog] = None) -> Workflow:
    """Build the meeting follow-up automation.

    Topology::
        Meeting Summary → Extract Action Items → Condition (If/Else)
          true:  Send to Slack
          false: Send Email
    """
    catalog = catalog if catalog is not None else get_node_catalog()
    nodes = []

    def _add(container: str, definition_id: str, cfg=None) -> str:
        nonlocal nodes
        instance_id = mint_instance_id(definition_id)
        nodes = insert_node(nodes, container, definition_id, catalog, instance_id)
        if cfg:
            nodes = update_node(nodes, instance_id, {"config": cfg})
        return instance_id

    _add(CANVAS_REF, "source-meeting-summary")
    _add(CANVAS_REF, "ai-tasks",
         {"model": "Claude 3.5 Sonnet", "assignee": "Meeting Owner"})
    branch_id = _add(CANVAS_REF, "logic-branch",
                     {"condition": "action_items.count > 0"})
    _add(container_ref(branch_id, TRUE_SIDE), "action-slack",
         {"channel": "#team", "message": "New action items from the meeting"})
    _add(container_ref(branch_id, FALSE_SIDE), "action-email",
         {"recipient": "team@company.com", "subject": "Meeting recap",
          "body": "No action items came out of this meeting."})

    return Workflow(name="Meeting Follow-up", is_enabled=True, root=nodes)

"""
Action Nodes — steps that push results out to other tools.

Email and Slack declare their own config fields; the remaining
actions fall back to the generic action parameters.
"""

from __future__ import annotations

from service.workflow.nodes.base import (
    NodeParameter,
    StepCategory,
    StepDefinition,
    register_steps,
)

register_steps(
    StepDefinition(
        id="action-email",
        category=StepCategory.ACTION,
        label="Send Email",
        description="Send summary via email",
        presentation_key="mail",
        parameters=[
            NodeParameter(
                name="recipient",
                label="Recipient",
                placeholder="e.g., team@company.com",
            ),
            NodeParameter(name="subject", label="Subject", placeholder="Enter email subject"),
            NodeParameter(
                name="body",
                label="Email Body",
                type="textarea",
                placeholder="Enter email content...",
            ),
        ],
    ),
    StepDefinition(
        id="action-slack",
        category=StepCategory.ACTION,
        label="Send to Slack",
        description="Post to Slack channel",
        presentation_key="slack",
        parameters=[
            NodeParameter(name="channel", label="Slack Channel", placeholder="#general"),
            NodeParameter(
                name="message",
                label="Message",
                type="textarea",
                placeholder="Enter message...",
            ),
        ],
    ),
    StepDefinition(
        id="action-jira",
        category=StepCategory.ACTION,
        label="Create Jira Issue",
        description="Create task in Jira",
        presentation_key="check-square",
    ),
    StepDefinition(
        id="action-notion",
        category=StepCategory.ACTION,
        label="Save to Notion",
        description="Add to Notion database",
        presentation_key="database",
    ),
    StepDefinition(
        id="action-webhook",
        category=StepCategory.ACTION,
        label="Webhook",
        description="Send data to webhook",
        presentation_key="globe",
    ),
)

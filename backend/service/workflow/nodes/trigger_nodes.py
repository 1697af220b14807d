"""
Trigger Nodes — input sources that start an automation.

Each trigger fires on a kind of meeting-derived data becoming
available. Triggers take no configuration.
"""

from __future__ import annotations

from service.workflow.nodes.base import StepCategory, StepDefinition, register_steps

register_steps(
    StepDefinition(
        id="source-meeting-summary",
        category=StepCategory.TRIGGER,
        label="Meeting Summary",
        description="Triggered when a meeting summary is available",
        presentation_key="file-text",
    ),
    StepDefinition(
        id="source-notes",
        category=StepCategory.TRIGGER,
        label="Notes / Transcripts",
        description="Triggered when new notes are added",
        presentation_key="message-square",
    ),
    StepDefinition(
        id="source-chat",
        category=StepCategory.TRIGGER,
        label="Chat Messages",
        description="Triggered by specific chat messages",
        presentation_key="message-square",
    ),
    StepDefinition(
        id="source-email",
        category=StepCategory.TRIGGER,
        label="Email",
        description="Triggered by incoming emails",
        presentation_key="mail",
    ),
    StepDefinition(
        id="source-calendar",
        category=StepCategory.TRIGGER,
        label="Calendar Event",
        description="Triggered by calendar events",
        presentation_key="calendar-days",
    ),
)

"""Tests for workflow summaries and templates."""

from service.workflow.templates import create_meeting_followup_template
from service.workflow.tree_editor import CANVAS_REF, count_nodes, insert_node
from service.workflow.workflow_inspector import (
    describe_tree,
    list_workflow_summaries,
    summarize_workflow,
    tree_depth,
)
from service.workflow.workflow_model import Workflow
from service.workflow.workflow_validator import validate_workflow


class TestSummaries:
    """Tests for summarize_workflow and listing."""

    def test_summary(self, branch_tree):
        summary = summarize_workflow(Workflow(id="wf", name="Tree", root=branch_tree))
        assert summary["total_nodes"] == 5
        assert summary["nodes_by_category"] == {"trigger": 1, "action": 2, "ai": 1, "branch": 1}
        assert summary["branch_count"] == 1
        assert summary["max_depth"] == 2
        assert summary["is_valid"] is True
        assert summary["error_count"] == 0

    def test_summary_with_errors(self, catalog):
        tree = insert_node([], CANVAS_REF, "logic-branch", catalog, "b")
        summary = summarize_workflow(Workflow(root=tree))
        assert summary["is_valid"] is False
        assert summary["error_count"] == 1

    def test_depth(self, catalog, branch_tree):
        assert tree_depth([]) == 0
        tree = insert_node(branch_tree, "branch-1-false", "logic-branch", catalog, "inner")
        tree = insert_node(tree, "inner-true", "ai-custom", catalog, "deep")
        assert tree_depth(tree) == 3

    def test_newest_first(self, memory_repo):
        for name in ("first", "second", "third"):
            memory_repo.save(Workflow(name=name))
        names = [s["name"] for s in list_workflow_summaries(memory_repo)]
        assert names == ["third", "second", "first"]
        oldest = [s["name"] for s in list_workflow_summaries(memory_repo, newest_first=False)]
        assert oldest == ["first", "second", "third"]

    def test_describe_tree(self, branch_tree):
        lines = describe_tree(branch_tree).splitlines()
        assert lines[0] == "- Meeting Summary [trigger] (trigger-1)"
        assert lines[2] == "  true:"
        assert lines[3] == "    - Send to Slack [action] (slack-1)"


class TestTemplates:
    """Tests for the pre-built templates."""

    def test_followup_template_is_valid(self, catalog):
        workflow = create_meeting_followup_template(catalog)
        assert workflow.is_draft
        assert count_nodes(workflow.root) == 5
        assert validate_workflow(workflow.root) == {}
        branch = workflow.root[2]
        assert branch.branches.true_branch[0].definition_id == "action-slack"
        assert branch.branches.false_branch[0].definition_id == "action-email"

    def test_templates_get_fresh_ids(self, catalog):
        a = create_meeting_followup_template(catalog)
        b = create_meeting_followup_template(catalog)
        assert a.root[0].instance_id != b.root[0].instance_id

    def test_template_saves(self, memory_repo, catalog):
        saved = memory_repo.save(create_meeting_followup_template(catalog))
        assert memory_repo.get(saved.id).name == "Meeting Follow-up"

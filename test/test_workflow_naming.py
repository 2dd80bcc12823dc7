from types import SimpleNamespace

import pytest

from lint import WorkflowKind
from workflows import group_workflows_by_namespace, infer_workflow_kind, parse_workflow_name


@pytest.mark.parametrize(
    ("raw", "namespace", "section", "name"),
    [
        ("gsd:plan-phase", "gsd", None, "plan-phase"),
        ("gsd:milestone.audit", "gsd", "milestone", "audit"),
        ("/gsd:plan-phase", "gsd", None, "plan-phase"),
        ("vidyard.work-report", "vidyard", None, "work-report"),
        ("vidyard-debug_prod", "vidyard-debug", None, "prod"),
        ("my-long-name", "my-long", None, "name"),
        ("deploy", None, None, "deploy"),
        ("-leading", None, None, "-leading"),
        ("trailing_", None, None, "trailing_"),
    ],
)
def test_parse_workflow_name(raw, namespace, section, name):
    parsed = parse_workflow_name(raw)

    assert parsed.namespace == namespace
    assert parsed.section == section
    assert parsed.name == name


def test_trailing_separator_falls_through_to_hyphen():
    # "_" at the end cannot split, so the last "-" is used instead.
    parsed = parse_workflow_name("a-b_")

    assert parsed.namespace == "a"
    assert parsed.name == "b_"


def test_full_path_and_display_name():
    parsed = parse_workflow_name("gsd:milestone.audit")

    assert parsed.full_path == ("gsd", "milestone", "audit")
    assert parsed.display_name == "audit"
    assert parse_workflow_name("deploy").full_path == ("deploy",)


def test_colon_keeps_remainder():
    parsed = parse_workflow_name("a:b:c")

    assert parsed.namespace == "a"
    assert parsed.name == "b:c"


def test_group_by_namespace():
    workflows = [SimpleNamespace(name=n) for n in ["gsd:plan", "deploy", "gsd:ship", "x.y"]]

    groups = group_workflows_by_namespace(workflows)

    assert list(groups) == ["gsd", "General", "x"]
    assert [w.name for w in groups["gsd"]] == ["gsd:plan", "gsd:ship"]
    assert [w.name for w in groups["General"]] == ["deploy"]


@pytest.mark.parametrize(
    ("path", "kind"),
    [
        ("/home/me/.claude/agents/reviewer.md", WorkflowKind.AGENT),
        ("project/.claude/commands/gsd/plan.md", WorkflowKind.COMMAND),
        ("skills/lint/SKILL.md", WorkflowKind.SKILL),
        ("skills/lint/reference.md", None),
        ("/home/me/.claude/skills/lint/references/api.md", None),
        ("SKILL.md", WorkflowKind.SKILL),
        ("docs/README.md", None),
    ],
)
def test_infer_workflow_kind(path, kind):
    assert infer_workflow_kind(path) == kind

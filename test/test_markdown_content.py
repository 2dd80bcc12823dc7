import textwrap

from lint import Severity, lint_workflow_file, validate_markdown_content


def _doc(text: str) -> str:
    return textwrap.dedent(text).lstrip("\n")


def test_multiple_h1_warns_at_second_heading():
    content = _doc(
        """
        # One

        # Two
        """
    )

    diagnostics = validate_markdown_content(content)

    assert len(diagnostics) == 1
    assert diagnostics[0].severity is Severity.WARNING
    assert diagnostics[0].line == 3


def test_skipped_heading_level_is_info():
    content = _doc(
        """
        # Title
        ### Deep
        """
    )

    diagnostics = validate_markdown_content(content)

    assert [d.severity for d in diagnostics] == [Severity.INFO]
    assert "H1 to H3" in diagnostics[0].message


def test_going_back_up_is_fine():
    content = _doc(
        """
        # Title
        ## Section
        ### Sub
        ## Next
        """
    )

    assert validate_markdown_content(content) == ()


def test_headings_inside_fences_are_ignored():
    content = _doc(
        """
        # Title

        ```bash
        # not a heading
        #### still not
        ```
        """
    )

    assert validate_markdown_content(content) == ()


def test_unclosed_fence_reported_at_opening_line():
    content = _doc(
        """
        # Title

        ```python
        print("hi")
        """
    )

    diagnostics = validate_markdown_content(content)

    assert len(diagnostics) == 1
    assert diagnostics[0].message == "Unclosed code block"
    assert diagnostics[0].line == 3


def test_line_numbers_count_frontmatter():
    content = _doc(
        """
        ---
        name: x
        description: d
        ---
        # A
        # B
        """
    )

    result = lint_workflow_file(content, "skill")

    assert [d.line for d in result.warnings] == [6]


def test_frontmatter_comments_are_not_headings():
    content = "---\n# comment\nname: x\ndescription: d\n---\n# A\n"

    assert lint_workflow_file(content, "skill").diagnostics == ()

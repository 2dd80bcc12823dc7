import pytest

from lint.tool_names import is_valid_tool, normalize_tools, split_tool_list, unknown_tools


class TestNormalizeTools:
    def test_comma_string(self):
        assert normalize_tools("Read, Grep ,Bash") == ["Read", "Grep", "Bash"]

    def test_parentheses_keep_commas(self):
        assert split_tool_list("Bash(git add:*, git commit:*), Read") == [
            "Bash(git add:*, git commit:*)",
            "Read",
        ]

    def test_empty_tokens_dropped(self):
        assert normalize_tools("Read,, ,Write,") == ["Read", "Write"]

    def test_list_with_comma_entries(self):
        assert normalize_tools(["Read, Write", "Grep"]) == ["Read", "Write", "Grep"]

    def test_other_types_rejected(self):
        assert normalize_tools(True) is None


class TestIsValidTool:
    @pytest.mark.parametrize(
        "tool",
        [
            "Read",
            "read",
            "WebFetch",
            "mcp__github__create_issue",
            "mcp__my-server__tool*",
            "mcp__slack*",
            "Bash(git status)",
        ],
    )
    def test_accepted(self, tool):
        assert is_valid_tool(tool)

    @pytest.mark.parametrize(
        "tool", ["Reed", "mcp__github", "Bash()", "Bash(git", "shell"]
    )
    def test_rejected(self, tool):
        assert not is_valid_tool(tool)

    def test_unknown_tools_keeps_order(self):
        assert unknown_tools(["Reed", "Read", "Shell"]) == ["Reed", "Shell"]

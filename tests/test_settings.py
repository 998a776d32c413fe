"""
Exact-identity settings merge: hooks per event and named MCP servers.
"""

import copy

from services.settings import hook_identity, merge_into_settings

PRE_TOOL_HOOK = {"type": "prompt", "prompt": "Check existing patterns first", "description": "Verify approach"}
TEST_HOOK = {"type": "command", "command": "npm test 2>&1 | tail -20"}
PLAYWRIGHT = {"command": "npx", "args": ["@anthropic-ai/mcp-server-playwright"]}


def fragment(**kwargs):
    base = {"hooks": {"PreToolUse": [dict(PRE_TOOL_HOOK)]}, "mcpServers": {"playwright": dict(PLAYWRIGHT)}}
    base.update(kwargs)
    return base


class TestHookIdentity:

    def test_command_wins_over_prompt(self):
        assert hook_identity({"command": "make", "prompt": "ignored"}) == "make"

    def test_prompt_fallback(self):
        assert hook_identity({"prompt": "think"}) == "think"

    def test_no_content(self):
        assert hook_identity({"type": "prompt"}) == ""
        assert hook_identity("not a dict") == ""


class TestMergeIntoSettings:

    def test_created_when_no_existing_settings(self):
        result = merge_into_settings(fragment(), None)
        assert result.status == "created"
        assert result.settings["hooks"]["PreToolUse"] == [PRE_TOOL_HOOK]
        assert result.settings["mcpServers"]["playwright"] == PLAYWRIGHT

    def test_appends_new_hooks_next_to_existing_events(self):
        existing = {"hooks": {"Stop": [{"type": "prompt", "prompt": "Existing stop hook"}]}}
        result = merge_into_settings(fragment(mcpServers={}), existing)
        assert result.status == "updated"
        assert len(result.settings["hooks"]["Stop"]) == 1
        assert len(result.settings["hooks"]["PreToolUse"]) == 1
        assert result.hooks_added == 1

    def test_does_not_duplicate_hooks(self):
        existing = {"hooks": {"PreToolUse": [dict(PRE_TOOL_HOOK, description="older wording")]}}
        result = merge_into_settings(fragment(mcpServers={}), existing)
        assert result.status == "unchanged"
        assert result.settings["hooks"]["PreToolUse"] == [dict(PRE_TOOL_HOOK, description="older wording")]

    def test_same_content_under_another_event_is_added(self):
        existing = {"hooks": {"Stop": [dict(PRE_TOOL_HOOK)]}}
        result = merge_into_settings(fragment(mcpServers={}), existing)
        assert result.hooks_added == 1

    def test_duplicates_inside_fragment_are_added_once(self):
        result = merge_into_settings({"hooks": {"PostToolUse": [TEST_HOOK, dict(TEST_HOOK)]}}, {})
        assert result.settings["hooks"]["PostToolUse"] == [TEST_HOOK]

    def test_existing_server_config_wins(self):
        old = {"command": "node", "args": ["./my-playwright.js"]}
        existing = {"mcpServers": {"playwright": dict(old)}}
        result = merge_into_settings({"mcpServers": {"playwright": dict(PLAYWRIGHT)}}, existing)
        assert result.status == "unchanged"
        assert result.settings["mcpServers"]["playwright"] == old

    def test_adds_new_servers(self):
        existing = {"mcpServers": {"postgres": {"command": "npx"}}}
        result = merge_into_settings({"mcpServers": {"playwright": PLAYWRIGHT}}, existing)
        assert result.status == "updated"
        assert set(result.settings["mcpServers"]) == {"postgres", "playwright"}
        assert result.servers_added == 1

    def test_other_keys_pass_through(self):
        existing = {"permissions": {"allow": ["Read", "Write"]}, "model": "default"}
        result = merge_into_settings(fragment(), existing)
        assert result.settings["permissions"] == {"allow": ["Read", "Write"]}
        assert result.settings["model"] == "default"

    def test_non_list_hook_bucket_is_replaced(self):
        existing = {"hooks": {"PreToolUse": "broken"}}
        result = merge_into_settings(fragment(mcpServers={}), existing)
        assert result.settings["hooks"]["PreToolUse"] == [PRE_TOOL_HOOK]
        assert result.status == "updated"

    def test_inputs_are_not_mutated(self):
        existing = {"hooks": {"Stop": [{"type": "prompt", "prompt": "Existing stop hook"}]}}
        new = fragment()
        existing_before = copy.deepcopy(existing)
        new_before = copy.deepcopy(new)
        result = merge_into_settings(new, existing)
        result.settings["mcpServers"]["playwright"]["args"].append("--mutated")
        assert existing == existing_before
        assert new == new_before

    def test_empty_fragment_is_unchanged(self):
        assert merge_into_settings({}, {"model": "x"}).status == "unchanged"
        assert merge_into_settings({}, None).status == "unchanged"

    def test_rerun_is_unchanged(self):
        first = merge_into_settings(fragment(), None)
        second = merge_into_settings(fragment(), first.settings)
        assert second.status == "unchanged"
        assert second.settings == first.settings

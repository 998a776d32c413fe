"""
Exact-identity merge of settings fragments (hooks and named MCP servers).
"""

import copy
import logging
from typing import Any, Dict, Optional

from config import log_event
from models import SettingsMergeResult


def hook_identity(entry: Any) -> str:
    """Identity of a hook entry within its event: the command, else the prompt."""
    if not isinstance(entry, dict):
        return ""
    return entry.get("command") or entry.get("prompt") or ""


def merge_into_settings(
    fragment: Dict[str, Any],
    existing: Optional[Dict[str, Any]],
) -> SettingsMergeResult:
    """
    Merge `fragment` into `existing` without touching either argument.
    `existing` is None when there was no settings file.

    Hooks are appended per event unless an entry with the same identity is
    already there. MCP servers are added by name; an existing server config
    always wins. Every other key of `existing` passes through.
    """
    file_exists = existing is not None
    result = copy.deepcopy(existing) if file_exists else {}

    if not fragment:
        return SettingsMergeResult(result, "unchanged")

    hooks_added = 0
    servers_added = 0

    new_hooks = fragment.get("hooks") or {}
    if isinstance(new_hooks, dict) and new_hooks:
        merged_hooks = result.get("hooks")
        if not isinstance(merged_hooks, dict):
            merged_hooks = {}

        for event_key, new_entries in new_hooks.items():
            if not isinstance(new_entries, list):
                continue

            current = merged_hooks.get(event_key, [])
            if not isinstance(current, list):
                log_event(logging.WARNING, "hooks_bucket_replaced", event=event_key)
                merged_hooks[event_key] = copy.deepcopy(new_entries)
                hooks_added += len(new_entries)
                continue

            seen = {hook_identity(e) for e in current}
            for entry in new_entries:
                key = hook_identity(entry)
                if key in seen:
                    log_event(logging.DEBUG, "hook_skipped", event=event_key, key=key[:60])
                    continue
                current.append(copy.deepcopy(entry))
                seen.add(key)
                hooks_added += 1
            merged_hooks[event_key] = current

        result["hooks"] = merged_hooks

    new_servers = fragment.get("mcpServers") or {}
    if isinstance(new_servers, dict) and new_servers:
        merged_servers = result.get("mcpServers")
        if not isinstance(merged_servers, dict):
            merged_servers = {}

        for name, server_config in new_servers.items():
            if name in merged_servers:
                log_event(logging.DEBUG, "mcp_server_kept", server=name)
                continue
            merged_servers[name] = copy.deepcopy(server_config)
            servers_added += 1

        result["mcpServers"] = merged_servers

    if not file_exists:
        status = "created"
    elif hooks_added or servers_added:
        status = "updated"
    else:
        status = "unchanged"

    log_event(
        logging.INFO,
        "settings_merged",
        status=status,
        hooks_added=hooks_added,
        servers_added=servers_added,
    )
    return SettingsMergeResult(result, status, hooks_added, servers_added)

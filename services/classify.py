"""
Keyword lookup tables: friction domains, hook suggestions, MCP servers.

Tables are ordered; the first matching entry wins.
"""

import re
import logging
from typing import Any, Dict, List, Tuple

from config import log_event
from models import Friction, HookConfig, McpRecommendation

# --- DOMAINS ---

DOMAIN_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("css-styling", ("css", "styling", "scoped", "shadow dom", "layout", "visual", "selector", "pseudo")),
    ("testing", ("test", "mock", "playwright", "vitest", "unit test", "e2e", "fixture", "assertion")),
    ("debugging", ("debug", "root cause", "reproduce", "diagnostic", "production", "logging")),
    ("data-sql", ("sql", "query", "database", "table", "data", "migration", "vertica", "warehouse")),
    ("imports-dependencies", ("import", "build", "compile", "bundle", "dependency", "module resolution")),
    ("architecture-scope", ("scope", "boundary", "architecture", "module boundary", "layer")),
)
DEFAULT_DOMAIN = "general"


def matches_keyword(text: str, keyword: str) -> bool:
    """Multi-word keywords match as substrings, single words only on word boundaries."""
    if " " in keyword:
        return keyword in text
    return re.search(rf"\b{re.escape(keyword)}\b", text) is not None


def classify_friction_domain(friction: Friction) -> str:
    """Title keywords are checked first; the description is only a fallback."""
    for text in (friction.title.lower(), friction.description.lower()):
        for domain, keywords in DOMAIN_KEYWORDS:
            if any(matches_keyword(text, kw) for kw in keywords):
                return domain
    return DEFAULT_DOMAIN


# --- HOOKS ---

FRICTION_HOOK_MAPPINGS: Tuple[Tuple[Tuple[str, ...], Tuple[HookConfig, ...]], ...] = (
    (
        ("css", "styling", "scoped", "shadow dom", "layout", "visual"),
        (HookConfig(
            event="PreToolUse",
            handler_type="prompt",
            prompt="Before editing CSS or style files: 1) List all existing selectors in the target file, "
                   "2) Identify which components could be affected, 3) Note any Shadow DOM or scoping boundaries",
        ),),
    ),
    (
        ("test", "mock", "playwright", "vitest", "unit test", "e2e"),
        (HookConfig(event="PostToolUse", handler_type="command", command="npm test 2>&1 | tail -20"),),
    ),
    (
        ("debug", "root cause", "reproduce", "diagnostic", "production"),
        (HookConfig(
            event="Stop",
            handler_type="prompt",
            prompt="Before completing: verify the root cause was confirmed with evidence, not just hypothesized. "
                   "Check that diagnostic steps were followed.",
        ),),
    ),
    (
        ("import", "build", "compile", "bundle", "dependency"),
        (HookConfig(
            event="PreToolUse",
            handler_type="prompt",
            prompt="Before modifying imports or build configuration: verify the change against existing "
                   "import conventions in sibling files.",
        ),),
    ),
    (
        ("scope", "boundary", "frontend", "backend"),
        (HookConfig(
            event="PreToolUse",
            handler_type="prompt",
            prompt="Before making changes: confirm the scope boundaries. Do not modify files outside the "
                   "stated scope without explicit permission.",
        ),),
    ),
)

DEFAULT_HOOK = HookConfig(
    event="PreToolUse",
    handler_type="prompt",
    prompt="Before proposing changes: verify your approach against existing codebase patterns. "
           "Read similar implementations first.",
)


def _with_description(hook: HookConfig, friction: Friction) -> HookConfig:
    return HookConfig(
        event=hook.event,
        handler_type=hook.handler_type,
        command=hook.command,
        prompt=hook.prompt,
        description=f'Addresses friction: "{friction.title}"',
    )


def map_friction_to_hooks(friction: Friction) -> List[HookConfig]:
    """Every hook whose keywords appear in the friction; the default hook otherwise."""
    combined = f"{friction.title} {friction.description}".lower()
    hooks = [
        _with_description(hook, friction)
        for keywords, mapped in FRICTION_HOOK_MAPPINGS
        if any(kw in combined for kw in keywords)
        for hook in mapped
    ]
    return hooks or [_with_description(DEFAULT_HOOK, friction)]


def build_settings_fragment(frictions: List[Friction]) -> Dict[str, Any]:
    """A {"hooks": {event: [entry, ...]}} fragment, one entry per event+content."""
    hooks_map: Dict[str, List[Dict[str, str]]] = {}
    seen = set()

    for friction in frictions:
        for hook in map_friction_to_hooks(friction):
            key = (hook.event, hook.command or hook.prompt or "")
            if key in seen:
                continue
            seen.add(key)
            hooks_map.setdefault(hook.event, []).append(hook.to_entry())

    if not hooks_map:
        return {}
    log_event(logging.DEBUG, "settings_fragment_built", events=len(hooks_map), hooks=len(seen))
    return {"hooks": hooks_map}


# --- MCP SERVERS ---

MCP_SERVER_REGISTRY: Tuple[Dict[str, Any], ...] = (
    {
        "server_name": "playwright",
        "keywords": ("css", "styling", "visual", "layout", "screenshot", "browser", "dom"),
        "description": "Visual testing, screenshot verification, and browser automation",
        "install_command": "npx @anthropic-ai/mcp-server-playwright",
        "config_block": {"command": "npx", "args": ["@anthropic-ai/mcp-server-playwright"]},
    },
    {
        "server_name": "postgres",
        "keywords": ("database", "sql", "query", "table", "migration", "schema"),
        "description": "Direct database access for query validation and schema inspection",
        "install_command": "npx @anthropic-ai/mcp-server-postgres",
        "config_block": {
            "command": "npx",
            "args": ["@anthropic-ai/mcp-server-postgres", "postgresql://localhost/mydb"],
        },
    },
    {
        "server_name": "fetch",
        "keywords": ("api", "http", "endpoint", "request", "response", "rest"),
        "description": "HTTP request testing and API response verification",
        "install_command": "npx @anthropic-ai/mcp-server-fetch",
        "config_block": {"command": "npx", "args": ["@anthropic-ai/mcp-server-fetch"]},
    },
    {
        "server_name": "filesystem",
        "keywords": ("file", "directory", "path", "search", "find"),
        "description": "Enhanced file search and manipulation beyond built-in tools",
        "install_command": "npx @anthropic-ai/mcp-server-filesystem",
        "config_block": {
            "command": "npx",
            "args": ["@anthropic-ai/mcp-server-filesystem", "/path/to/project"],
        },
    },
    {
        "server_name": "git",
        "keywords": ("git", "branch", "merge", "commit", "version", "rebase"),
        "description": "Advanced git operations and repository management",
        "install_command": "npx @anthropic-ai/mcp-server-git",
        "config_block": {"command": "npx", "args": ["@anthropic-ai/mcp-server-git"]},
    },
)


def build_mcp_recommendations(frictions: List[Friction]) -> List[McpRecommendation]:
    """Recommend each registry server at most once, collecting the frictions that triggered it."""
    recommendations: Dict[str, McpRecommendation] = {}

    for friction in frictions:
        combined = f"{friction.title} {friction.description}".lower()
        for entry in MCP_SERVER_REGISTRY:
            if not any(kw in combined for kw in entry["keywords"]):
                continue
            existing = recommendations.get(entry["server_name"])
            if existing is None:
                recommendations[entry["server_name"]] = McpRecommendation(
                    server_name=entry["server_name"],
                    description=entry["description"],
                    install_command=entry["install_command"],
                    config_block=entry["config_block"],
                    matched_frictions=[friction.title],
                )
            elif friction.title not in existing.matched_frictions:
                existing.matched_frictions.append(friction.title)

    return list(recommendations.values())


def mcp_servers_fragment(recommendations: List[McpRecommendation]) -> Dict[str, Any]:
    """Settings fragment {"mcpServers": {name: config}} for the recommendations."""
    if not recommendations:
        return {}
    return {"mcpServers": {rec.server_name: rec.config_block for rec in recommendations}}

"""
Apply generated artifacts to a project directory.

Each merge reads its target, computes the merged content in memory, and
writes it back only when something changed.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from config import (
    log_event,
    CLAUDE_MD_FILENAME,
    SETTINGS_DIRNAME,
    SETTINGS_FILENAME,
    SKILLS_DIRNAME,
)
from models import ApplyResult, DocumentMergeResult, ProjectArtifacts, SettingsMergeResult, SkillFile
from services.classify import mcp_servers_fragment
from services.files import read_json_file, read_text_file, write_json_file, write_text_file
from services.markdown import extract_rule_paragraphs, merge_into_document
from services.settings import merge_into_settings

PathLike = Union[str, Path]


def merge_claude_md(rule_additions: str, project_dir: PathLike) -> DocumentMergeResult:
    """Merge the rule paragraphs of `rule_additions` into the project's CLAUDE.md."""
    path = Path(project_dir) / CLAUDE_MD_FILENAME
    new_rules = extract_rule_paragraphs(rule_additions)
    existing = read_text_file(path)

    result = merge_into_document(new_rules, existing)
    if result.status != "unchanged":
        write_text_file(path, result.text)
    log_event(
        logging.INFO,
        "claude_md_merged",
        path=str(path),
        status=result.status,
        added=result.added,
        skipped=result.skipped,
    )
    return result


def merge_settings_file(fragment: Dict[str, Any], project_dir: PathLike) -> SettingsMergeResult:
    """
    Merge a settings fragment into .claude/settings.json. A corrupt or
    non-object settings file is replaced as if it never existed.
    """
    path = Path(project_dir) / SETTINGS_DIRNAME / SETTINGS_FILENAME
    existing = read_json_file(path)
    if existing is not None and not isinstance(existing, dict):
        log_event(logging.WARNING, "settings_not_object", path=str(path))
        existing = None

    result = merge_into_settings(fragment, existing)
    if result.status != "unchanged":
        write_json_file(path, result.settings)
    return result


def place_skills(skills: List[SkillFile], project_dir: PathLike) -> int:
    """Write skill files under .claude/skills/<dir>/, overwriting older copies."""
    skills_root = Path(project_dir) / SETTINGS_DIRNAME / SKILLS_DIRNAME
    for skill in skills:
        write_text_file(skills_root / skill.dir_name / skill.filename, skill.content)
    if skills:
        log_event(logging.INFO, "skills_placed", count=len(skills), root=str(skills_root))
    return len(skills)


def apply_to_project(artifacts: ProjectArtifacts, project_dir: PathLike) -> ApplyResult:
    """Merge CLAUDE.md and settings.json, then place skills."""
    claude_md = merge_claude_md(artifacts.rule_additions, project_dir)

    fragment = dict(artifacts.settings)
    fragment.update(mcp_servers_fragment(artifacts.mcp_recommendations))
    settings = merge_settings_file(fragment, project_dir)

    skills_placed = place_skills(artifacts.skills, project_dir)

    return ApplyResult(
        claude_md_status=claude_md.status,
        settings_status=settings.status,
        skills_placed=skills_placed,
        rules_added=claude_md.added,
        rules_skipped=claude_md.skipped,
    )


def format_apply_summary(result: ApplyResult) -> str:
    summary = "\nApply Summary\n"
    summary += "─────────────\n"
    summary += (
        f"  CLAUDE.md:      {result.claude_md_status} "
        f"({result.rules_added} rules added, {result.rules_skipped} skipped)\n"
    )
    summary += f"  settings.json:  {result.settings_status}\n"
    summary += f"  Skills placed:  {result.skills_placed}\n"
    return summary

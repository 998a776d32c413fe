"""
Team aggregation: fold frictions and rules from several reports into one
deduplicated set with per-entry provenance.
"""

import logging
from typing import Callable, List, Optional

from config import log_event
from models import Friction, ReportData, Rule, TeamFriction, TeamReport, TeamRule
from services.text import is_similar

LabelFn = Callable[[int], str]


def default_label(index: int) -> str:
    return f"Report {index + 1}"


def rule_priority(member_count: int) -> str:
    return "High" if member_count >= 2 else "Medium"


def merge_frictions(
    sources: List[List[Friction]],
    label_fn: LabelFn = default_label,
) -> List[TeamFriction]:
    """
    Merge frictions from several reports, grouping by fuzzy title identity.

    The first friction seen (source order, then list order) keeps its title
    and description. Later matches only add unseen examples and, once per
    source, their report label.
    """
    merged: List[TeamFriction] = []

    for idx, frictions in enumerate(sources):
        label = label_fn(idx)
        for friction in frictions:
            existing = next((m for m in merged if is_similar(m.title, friction.title)), None)

            if existing is None:
                merged.append(TeamFriction(
                    title=friction.title,
                    description=friction.description,
                    examples=list(friction.examples),
                    member_count=1,
                    members=[label],
                ))
                continue

            for example in friction.examples:
                if example not in existing.examples:
                    existing.examples.append(example)
            if label not in existing.members:
                existing.members.append(label)
                existing.member_count = len(existing.members)
            log_event(logging.DEBUG, "team_friction_merged", title=existing.title, member=label)

    log_event(logging.INFO, "team_frictions_merged", sources=len(sources), merged=len(merged))
    return merged


def merge_rules(
    sources: List[List[Rule]],
    label_fn: LabelFn = default_label,
) -> List[TeamRule]:
    """Merge rules by fuzzy identity of their text; rules in 2+ reports are High priority."""
    merged: List[TeamRule] = []

    for idx, rules in enumerate(sources):
        label = label_fn(idx)
        for rule in rules:
            existing = next((m for m in merged if is_similar(m.code, rule.code)), None)

            if existing is None:
                merged.append(TeamRule(
                    code=rule.code,
                    why=rule.why,
                    member_count=1,
                    members=[label],
                    priority=rule_priority(1),
                ))
            elif label not in existing.members:
                existing.members.append(label)
                existing.member_count = len(existing.members)
                existing.priority = rule_priority(existing.member_count)

    log_event(logging.INFO, "team_rules_merged", sources=len(sources), merged=len(merged))
    return merged


def _stat_value(raw: str) -> int:
    try:
        return int(raw.replace(",", "").strip())
    except ValueError:
        return 0


def aggregate_reports(
    reports: List[ReportData],
    label_fn: Optional[LabelFn] = None,
) -> TeamReport:
    """Combine several parsed reports into a single team view."""
    label_fn = label_fn or default_label
    total_messages = 0
    total_sessions = 0

    for report in reports:
        for stat in report.stats:
            label = stat.label.strip().lower()
            if label == "messages":
                total_messages += _stat_value(stat.value)
            elif label == "sessions":
                total_sessions += _stat_value(stat.value)

    team = TeamReport(
        member_count=len(reports),
        total_messages=total_messages,
        total_sessions=total_sessions,
        frictions=merge_frictions([r.frictions for r in reports], label_fn),
        rules=merge_rules([r.rules for r in reports], label_fn),
    )
    log_event(
        logging.INFO,
        "team_report_aggregated",
        members=team.member_count,
        frictions=len(team.frictions),
        rules=len(team.rules),
    )
    return team

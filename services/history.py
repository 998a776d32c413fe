"""
Per-run history entries and the trend between consecutive runs.
"""

import logging
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from config import log_event, HISTORY_DIR
from models import HistoryEntry, ReportData, TrendReport
from services.files import read_json_file, write_json_file

PathLike = Union[str, Path]


def _history_dir(history_dir: Optional[PathLike]) -> Path:
    return Path(history_dir) if history_dir else HISTORY_DIR


def _entry_from_dict(data) -> Optional[HistoryEntry]:
    try:
        return HistoryEntry(**data)
    except TypeError:
        return None


def save_history_entry(entry: HistoryEntry, history_dir: Optional[PathLike] = None) -> Path:
    path = _history_dir(history_dir) / f"{entry.date}.json"
    write_json_file(path, asdict(entry))
    log_event(logging.INFO, "history_entry_saved", path=str(path))
    return path


def load_history_entries(history_dir: Optional[PathLike] = None) -> List[HistoryEntry]:
    """All readable entries, oldest first. Corrupt files are skipped."""
    directory = _history_dir(history_dir)
    if not directory.is_dir():
        return []

    entries = []
    for path in sorted(directory.glob("*.json")):
        entry = _entry_from_dict(read_json_file(path) or {})
        if entry is None:
            log_event(logging.WARNING, "history_entry_skipped", path=str(path))
            continue
        entries.append(entry)
    return entries


def get_latest_entry(history_dir: Optional[PathLike] = None) -> Optional[HistoryEntry]:
    entries = load_history_entries(history_dir)
    return entries[-1] if entries else None


def load_entry(date: str, history_dir: Optional[PathLike] = None) -> Optional[HistoryEntry]:
    data = read_json_file(_history_dir(history_dir) / f"{date}.json")
    return _entry_from_dict(data) if data is not None else None


def to_history_entry(report: ReportData, skill_count: int, report_file: str) -> HistoryEntry:
    return HistoryEntry(
        date=datetime.now().date().isoformat(),
        report_file=report_file,
        friction_count=len(report.frictions),
        friction_titles=[f.title for f in report.frictions],
        skill_count=skill_count,
        rule_count=len(report.rules),
    )


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def build_trend_report(current: HistoryEntry, previous: Optional[HistoryEntry]) -> TrendReport:
    if previous is None:
        return TrendReport(
            current=current,
            previous=None,
            new_frictions=list(current.friction_titles),
            resolved_frictions=[],
            friction_count_delta=0,
            summary=f"First analysis run. Found {_plural(current.friction_count, 'friction pattern')}.",
        )

    new_frictions = [t for t in current.friction_titles if t not in previous.friction_titles]
    resolved = [t for t in previous.friction_titles if t not in current.friction_titles]
    delta = current.friction_count - previous.friction_count

    if delta < 0:
        summary = f"Friction reduced! {_plural(abs(delta), 'pattern')} resolved since {previous.date}."
    elif delta > 0:
        summary = f"{_plural(delta, 'new friction pattern')} detected since {previous.date}."
    else:
        summary = f"Friction count unchanged since {previous.date} ({current.friction_count} patterns)."

    if resolved:
        summary += f" Resolved: {', '.join(resolved)}."
    if new_frictions:
        summary += f" New: {', '.join(new_frictions)}."

    return TrendReport(current, previous, new_frictions, resolved, delta, summary)


def format_trend_report(trend: TrendReport) -> str:
    output = "\nTrend Report\n"
    output += "────────────\n"
    output += trend.summary + "\n"

    if trend.previous:
        delta = trend.friction_count_delta
        arrow = "↓" if delta < 0 else "↑" if delta > 0 else "→"
        output += (
            f"  Frictions: {trend.previous.friction_count} → {trend.current.friction_count} "
            f"({arrow}{abs(delta)})\n"
        )
        if trend.resolved_frictions:
            output += f"  Resolved: {', '.join(trend.resolved_frictions)}\n"
        if trend.new_frictions:
            output += f"  New: {', '.join(trend.new_frictions)}\n"

    return output


def format_history_table(entries: List[HistoryEntry]) -> str:
    if not entries:
        return "No history entries found.\n"

    output = "\nAnalysis History\n"
    output += "────────────────\n"
    output += "| Date       | Frictions | Skills | Rules | Report |\n"
    output += "|------------|-----------|--------|-------|--------|\n"
    for entry in entries:
        report = entry.report_file
        if len(report) > 30:
            report = "..." + report[-27:]
        output += (
            f"| {entry.date} | {entry.friction_count:<9} | {entry.skill_count:<6} "
            f"| {entry.rule_count:<5} | {report} |\n"
        )
    return output

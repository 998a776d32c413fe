"""
Data structures (dataclasses) for insights-kit.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# --- REPORT RECORDS ---

@dataclass
class Friction:
    """A friction category extracted from a usage report."""
    title: str
    description: str = ""
    examples: List[str] = field(default_factory=list)


@dataclass
class Rule:
    """A suggested rule-document item: the rule text plus its rationale."""
    code: str
    why: str = ""


@dataclass
class Stat:
    """A headline statistic, kept as the raw display string."""
    value: str
    label: str


@dataclass
class ReportData:
    """The subset of a parsed report consumed by the merge engine."""
    title: str = ""
    frictions: List[Friction] = field(default_factory=list)
    rules: List[Rule] = field(default_factory=list)
    stats: List[Stat] = field(default_factory=list)


# --- ANNOTATIONS ---

class AnnotationStatus(str, Enum):
    USEFUL = "useful"
    FALSE_POSITIVE = "false-positive"


@dataclass
class Annotation:
    """User verdict on a friction, identified by the fuzzy class of its title."""
    friction_title: str
    status: AnnotationStatus
    annotated_at: str  # ISO timestamp
    note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "friction_title": self.friction_title,
            "status": self.status.value,
            "annotated_at": self.annotated_at,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Annotation":
        return cls(
            friction_title=data["friction_title"],
            status=AnnotationStatus(data["status"]),
            annotated_at=data.get("annotated_at", ""),
            note=data.get("note"),
        )


@dataclass
class FilterResult:
    """Frictions left after removing annotated false positives."""
    kept: List[Friction]
    removed_count: int
    removed_titles: List[str]


# --- TEAM AGGREGATION ---

@dataclass
class TeamFriction:
    """A friction merged across reports; member_count == len(members)."""
    title: str
    description: str
    examples: List[str]
    member_count: int
    members: List[str]


@dataclass
class TeamRule:
    """A rule merged across reports, prioritized by how many reports carry it."""
    code: str
    why: str
    member_count: int
    members: List[str]
    priority: str  # "High" or "Medium"


@dataclass
class TeamReport:
    member_count: int
    total_messages: int
    total_sessions: int
    frictions: List[TeamFriction]
    rules: List[TeamRule]


# --- DOCUMENTS ---

@dataclass
class MarkdownSection:
    """Represents a section in the markdown file."""
    id: str
    heading: str
    level: int  # 1 for #, 2 for ##, etc.
    content: str  # Full content including heading
    line_start: int
    line_end: int


@dataclass
class DocumentMergeResult:
    """Outcome of merging rule paragraphs into a rule document."""
    text: str
    status: str  # "created", "updated", "unchanged"
    added: int
    skipped: int


@dataclass
class SettingsMergeResult:
    """Outcome of merging a settings fragment into a settings object."""
    settings: Dict[str, Any]
    status: str  # "created", "updated", "unchanged"
    hooks_added: int = 0
    servers_added: int = 0


# --- GENERATED ARTIFACTS ---

@dataclass
class HookConfig:
    event: str  # "PreToolUse", "PostToolUse", "Notification", "Stop", "SubagentStop"
    handler_type: str  # "command" or "prompt"
    command: Optional[str] = None
    prompt: Optional[str] = None
    description: str = ""

    def to_entry(self) -> Dict[str, str]:
        """Render as a settings hook entry."""
        entry = {"type": self.handler_type, "description": self.description}
        if self.command:
            entry["command"] = self.command
        if self.prompt:
            entry["prompt"] = self.prompt
        return entry


@dataclass
class McpRecommendation:
    server_name: str
    description: str
    install_command: str
    config_block: Dict[str, Any]
    matched_frictions: List[str] = field(default_factory=list)


@dataclass
class SkillFile:
    skill_name: str
    dir_name: str
    filename: str
    content: str


@dataclass
class ProjectArtifacts:
    """Generated content ready to be applied to a project directory."""
    rule_additions: str = ""
    settings: Dict[str, Any] = field(default_factory=dict)
    skills: List[SkillFile] = field(default_factory=list)
    mcp_recommendations: List[McpRecommendation] = field(default_factory=list)


@dataclass
class ApplyResult:
    claude_md_status: str
    settings_status: str
    skills_placed: int
    rules_added: int
    rules_skipped: int


# --- HISTORY ---

@dataclass
class HistoryEntry:
    """One analysis run, persisted as <date>.json."""
    date: str
    report_file: str
    friction_count: int
    friction_titles: List[str]
    skill_count: int
    rule_count: int


@dataclass
class TrendReport:
    current: HistoryEntry
    previous: Optional[HistoryEntry]
    new_frictions: List[str]
    resolved_frictions: List[str]
    friction_count_delta: int
    summary: str

"""Services package for insights-kit."""

from services.text import (
    significant_words,
    is_similar,
    find_best_match,
)

from services.files import (
    FileWriteError,
    read_text_file,
    write_text_file,
    read_json_file,
    write_json_file,
)

from services.annotations import (
    AnnotationStore,
    find_annotation,
    upsert_annotation,
    remove_annotations,
    filter_annotated_frictions,
    format_annotation_list,
)

from services.team import (
    merge_frictions,
    merge_rules,
    aggregate_reports,
)

from services.markdown import (
    split_paragraphs,
    extract_rule_paragraphs,
    parse_markdown_sections,
    merge_into_document,
)

from services.settings import (
    merge_into_settings,
)

from services.classify import (
    classify_friction_domain,
    map_friction_to_hooks,
    build_settings_fragment,
    build_mcp_recommendations,
)

from services.applier import (
    merge_claude_md,
    merge_settings_file,
    place_skills,
    apply_to_project,
    format_apply_summary,
)

from services.history import (
    save_history_entry,
    load_history_entries,
    get_latest_entry,
    build_trend_report,
    format_trend_report,
)

__all__ = [
    # Text
    "significant_words",
    "is_similar",
    "find_best_match",
    # Files
    "FileWriteError",
    "read_text_file",
    "write_text_file",
    "read_json_file",
    "write_json_file",
    # Annotations
    "AnnotationStore",
    "find_annotation",
    "upsert_annotation",
    "remove_annotations",
    "filter_annotated_frictions",
    "format_annotation_list",
    # Team
    "merge_frictions",
    "merge_rules",
    "aggregate_reports",
    # Documents
    "split_paragraphs",
    "extract_rule_paragraphs",
    "parse_markdown_sections",
    "merge_into_document",
    "merge_into_settings",
    # Classification
    "classify_friction_domain",
    "map_friction_to_hooks",
    "build_settings_fragment",
    "build_mcp_recommendations",
    # Apply
    "merge_claude_md",
    "merge_settings_file",
    "place_skills",
    "apply_to_project",
    "format_apply_summary",
    # History
    "save_history_entry",
    "load_history_entries",
    "get_latest_entry",
    "build_trend_report",
    "format_trend_report",
]

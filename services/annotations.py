"""
False-positive annotations keyed by fuzzy friction-title identity.

The pure functions operate on an explicit list; AnnotationStore binds them to
the versioned JSON file.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from config import log_event, get_annotations_path, ANNOTATION_STORE_VERSION
from models import Annotation, AnnotationStatus, FilterResult, Friction
from services.files import read_json_file, write_json_file
from services.text import is_similar


def is_false_positive(annotation: Annotation) -> bool:
    return annotation.status == AnnotationStatus.FALSE_POSITIVE


# --- PURE OPERATIONS ---

def find_annotation(annotations: List[Annotation], title: str) -> Optional[Annotation]:
    """First annotation whose title fuzzy-matches `title`."""
    return next((a for a in annotations if is_similar(a.friction_title, title)), None)


def upsert_annotation(annotations: List[Annotation], annotation: Annotation) -> List[Annotation]:
    """
    Return a new list with `annotation` replacing the first fuzzy match in
    place, or appended when nothing matches. Later entries that also match
    are dropped, so no two entries in the result are similar.
    """
    updated = []
    replaced = False
    for existing in annotations:
        if is_similar(existing.friction_title, annotation.friction_title):
            if not replaced:
                updated.append(annotation)
                replaced = True
            continue
        updated.append(existing)
    if not replaced:
        updated.append(annotation)
    return updated


def remove_annotations(
    annotations: List[Annotation],
    title: Optional[str] = None,
) -> Tuple[List[Annotation], int]:
    """Drop every annotation matching `title` (all of them when title is None)."""
    if title is None:
        return [], len(annotations)
    remaining = [a for a in annotations if not is_similar(a.friction_title, title)]
    return remaining, len(annotations) - len(remaining)


def filter_annotated_frictions(
    frictions: List[Friction],
    annotations: List[Annotation],
    predicate: Callable[[Annotation], bool] = is_false_positive,
) -> FilterResult:
    """Split off frictions whose title matches an annotation selected by `predicate`."""
    flagged = [a for a in annotations if predicate(a)]
    if not flagged:
        return FilterResult(list(frictions), 0, [])

    kept = []
    removed_titles = []
    for friction in frictions:
        if any(is_similar(a.friction_title, friction.title) for a in flagged):
            removed_titles.append(friction.title)
        else:
            kept.append(friction)

    return FilterResult(kept, len(removed_titles), removed_titles)


# --- FILE-BACKED STORE ---

class AnnotationStore:
    """
    Annotations persisted as {"version": 1, "annotations": [...]}.

    Anything unreadable (missing file, corrupt JSON, another version) loads
    as an empty store. Write failures propagate as FileWriteError.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = get_annotations_path(str(path) if path else None)

    def load(self) -> List[Annotation]:
        raw = read_json_file(self.path)
        if raw is None:
            return []
        if not isinstance(raw, dict) or raw.get("version") != ANNOTATION_STORE_VERSION:
            log_event(logging.WARNING, "annotation_store_ignored", path=str(self.path), reason="version")
            return []
        try:
            return [Annotation.from_dict(item) for item in raw.get("annotations") or []]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            log_event(logging.WARNING, "annotation_store_ignored", path=str(self.path), reason=str(e))
            return []

    def save(self, annotations: List[Annotation]) -> None:
        write_json_file(self.path, {
            "version": ANNOTATION_STORE_VERSION,
            "annotations": [a.to_dict() for a in annotations],
        })
        log_event(logging.DEBUG, "annotation_store_saved", path=str(self.path), count=len(annotations))

    @property
    def annotations(self) -> List[Annotation]:
        return self.load()

    def set(self, title: str, status: AnnotationStatus, note: Optional[str] = None) -> Annotation:
        """Upsert the annotation for `title`'s fuzzy class."""
        annotation = Annotation(
            friction_title=title,
            status=AnnotationStatus(status),
            annotated_at=datetime.now().isoformat(),
            note=note,
        )
        self.save(upsert_annotation(self.load(), annotation))
        log_event(logging.INFO, "annotation_upserted", title=title, status=annotation.status.value)
        return annotation

    def find(self, title: str) -> Optional[Annotation]:
        return find_annotation(self.load(), title)

    def clear(self, title: Optional[str] = None) -> int:
        """Remove the annotation matching `title`, or all of them. Returns the count removed."""
        remaining, removed = remove_annotations(self.load(), title)
        self.save(remaining)
        log_event(logging.INFO, "annotations_cleared", title=title, removed=removed)
        return removed

    def filter_out(self, frictions: List[Friction]) -> FilterResult:
        result = filter_annotated_frictions(frictions, self.load())
        if result.removed_count:
            log_event(logging.INFO, "frictions_filtered", removed=result.removed_count)
        return result


def format_annotation_list(annotations: List[Annotation]) -> str:
    """Render annotations as a readable list."""
    if not annotations:
        return "No annotations found."

    output = "\nFriction Annotations\n"
    output += "────────────────────\n"
    for a in annotations:
        date = a.annotated_at.split("T")[0]
        icon = "✗" if is_false_positive(a) else "✓"
        output += f"  {icon} [{a.status.value}] {a.friction_title} ({date})"
        if a.note:
            output += f" ({a.note})"
        output += "\n"
    return output

"""
Rule document parsing and the append-only paragraph merge.
"""

import re
import hashlib
import logging
from typing import List, Optional

from config import log_event, SECTION_HEADER
from models import DocumentMergeResult, MarkdownSection
from services.text import is_similar, significant_words

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_HEADING = re.compile(r"^(#{1,6})\s+(.+)$")


def split_paragraphs(content: str) -> List[str]:
    """Split text on blank lines into trimmed, non-empty paragraphs."""
    return [p.strip() for p in _PARAGRAPH_BREAK.split(content) if p.strip()]


def extract_rule_paragraphs(additions: str) -> List[str]:
    """
    Rule paragraphs from generated rule-document additions.
    Headings and blockquotes (the "> _Why: ..._" rationale lines) are not rules.
    """
    return [
        p for p in split_paragraphs(additions)
        if not p.startswith("#") and not p.startswith(">")
    ]


def parse_markdown_sections(content: str) -> List[MarkdownSection]:
    """
    Parse markdown content into sections based on headings.
    Each section includes the heading and all content until the next heading.
    """
    lines = content.split('\n')
    sections = []
    current_section = None

    for i, line in enumerate(lines):
        match = _HEADING.match(line)

        if match:
            # Close previous section
            if current_section:
                current_section.line_end = i - 1
                current_section.content = '\n'.join(
                    lines[current_section.line_start:i]
                ).strip()
                sections.append(current_section)

            level = len(match.group(1))
            heading = match.group(2).strip()
            section_id = hashlib.md5(f"{heading}:{i}".encode()).hexdigest()[:12]

            current_section = MarkdownSection(
                id=section_id,
                heading=heading,
                level=level,
                content="",
                line_start=i,
                line_end=i
            )

    # Close last section
    if current_section:
        current_section.line_end = len(lines) - 1
        current_section.content = '\n'.join(
            lines[current_section.line_start:]
        ).strip()
        sections.append(current_section)

    log_event(logging.DEBUG, "markdown_sections_parsed", sections=len(sections))
    return sections


def _section_end_line(content: str, header: str) -> Optional[int]:
    """
    Line index where the section opened by `header` ends: the next heading of
    the same or higher level. len(lines) when it runs to the end of the text,
    None when the header is absent.
    """
    sections = parse_markdown_sections(content)
    header_match = _HEADING.match(header)
    target_level = len(header_match.group(1))
    target_heading = header_match.group(2).strip()

    for idx, section in enumerate(sections):
        if section.level == target_level and section.heading == target_heading:
            for later in sections[idx + 1:]:
                if later.level <= target_level:
                    return later.line_start
            return len(content.split('\n'))
    return None


def merge_into_document(
    new_paragraphs: List[str],
    existing_text: Optional[str],
    header: str = SECTION_HEADER,
) -> DocumentMergeResult:
    """
    Append the paragraphs not already present (by fuzzy match) to a rule
    document. `existing_text` is None when the document does not exist.

    Existing content is never rewritten: new paragraphs go at the end of the
    `header` section, or under a freshly appended header. Applying the same
    paragraphs twice leaves the second call unchanged.
    """
    existing_paragraphs = split_paragraphs(existing_text or "")
    to_add: List[str] = []
    skipped = 0

    candidates = [p for text in new_paragraphs for p in split_paragraphs(text)]

    for paragraph in candidates:
        if not significant_words(paragraph):
            skipped += 1
            log_event(logging.DEBUG, "rule_skipped_empty", preview=paragraph[:60])
            continue
        if any(is_similar(paragraph, p) for p in existing_paragraphs + to_add):
            skipped += 1
            log_event(logging.DEBUG, "rule_skipped_duplicate", preview=paragraph[:60])
            continue
        to_add.append(paragraph)

    if not to_add:
        log_event(logging.INFO, "document_unchanged", skipped=skipped)
        return DocumentMergeResult(existing_text or "", "unchanged", 0, skipped)

    block = "\n\n".join(to_add)

    if existing_text is None:
        text = f"{header}\n\n{block}\n"
        status = "created"
    else:
        end_line = _section_end_line(existing_text, header)
        if end_line is None:
            prefix = existing_text.rstrip()
            text = f"{prefix}\n\n{header}\n\n{block}\n" if prefix else f"{header}\n\n{block}\n"
        else:
            lines = existing_text.split('\n')
            head = '\n'.join(lines[:end_line]).rstrip()
            tail = '\n'.join(lines[end_line:])
            if tail.strip():
                text = f"{head}\n\n{block}\n\n{tail}"
            else:
                text = f"{head}\n\n{block}\n"
        status = "updated"

    log_event(logging.INFO, "document_merged", status=status, added=len(to_add), skipped=skipped)
    return DocumentMergeResult(text, status, len(to_add), skipped)

"""Labelled-section lookup plus key point and recommendation extraction.

Analysis text from the LLM is loosely structured: sections may appear as
Markdown headings ("### Key Points"), as labels ("Key Points:"), bolded
("**Recommendation:**"), or not at all. Everything here is best-effort
and never raises; missing sections yield empty results.
"""

import re
from functools import lru_cache

from config import settings
from services import lexicon
from services.text_matching import word_pattern

# "1. item", "2) item", "- item", "• item", "* item"
LIST_ITEM_RE = re.compile(r"^(\s*)(?:\d+[.)]|[-•*])\s+(.*\S)\s*$")
HEADING_RE = re.compile(r"^\s*#{1,6}\s")
BOLD_RE = re.compile(r"\*\*|__")
PARAGRAPH_SPLIT_RE = re.compile(r"\n[ \t]*\n")


def _label_alternation(labels: list[str]) -> str:
    ordered = sorted(labels, key=len, reverse=True)
    return "|".join(r"\s+".join(re.escape(w) for w in lbl.split()) for lbl in ordered)


@lru_cache(maxsize=None)
def _heading_re(labels: tuple[str, ...]) -> re.Pattern:
    """'## Result', '### **Key Points**', '### Recommendation: ...'"""
    alt = _label_alternation(list(labels))
    return re.compile(
        rf"^\s*#{{1,6}}\s*(?:\*\*)?\s*(?:{alt})(?!\w)\s*(?:\*\*)?\s*:?\s*(?:\*\*)?\s*(.*)$",
        re.IGNORECASE,
    )


@lru_cache(maxsize=None)
def _label_re(labels: tuple[str, ...]) -> re.Pattern:
    """'Result: x', 'Result : x', '**Result:** x', '- **Key Points**:'"""
    alt = _label_alternation(list(labels))
    return re.compile(
        rf"^\s*(?:[-•]\s*)?(?:\*\*)?\s*(?:{alt})\s?(?:\*\*)?\s?:\s*(?:\*\*)?\s*(.*)$",
        re.IGNORECASE,
    )


def _indent(line: str) -> int:
    expanded = line.expandtabs(4)
    return len(expanded) - len(expanded.lstrip())


def _is_boundary(line: str, stop_re: re.Pattern | None) -> bool:
    if HEADING_RE.match(line):
        return True
    return bool(stop_re and stop_re.match(line))


def find_section(text: str, section: str, locale: str | None = None) -> str | None:
    """Return the body of a labelled section, or None if it has no label.

    Heading form runs until the next heading or the next label of another
    known section (so it may span paragraphs). Label form runs until the
    first blank line after its content starts, except between list items.
    """
    if not text:
        return None
    labels = tuple(lexicon.section_labels(locale, section))
    if not labels:
        return None
    other = tuple(
        lbl for lbl in lexicon.all_section_labels(locale) if lbl not in labels
    )
    stop_re = _label_re(other) if other else None
    lines = text.splitlines()

    heading_re = _heading_re(labels)
    for i, line in enumerate(lines):
        m = heading_re.match(line)
        if not m:
            continue
        body = [m.group(1)] if m.group(1).strip() else []
        for follow in lines[i + 1:]:
            if _is_boundary(follow, stop_re):
                break
            body.append(follow)
        return "\n".join(body).strip()

    label_re = _label_re(labels)
    for i, line in enumerate(lines):
        m = label_re.match(line)
        if not m:
            continue
        body = [m.group(1)] if m.group(1).strip() else []
        rest = lines[i + 1:]
        for j, follow in enumerate(rest):
            if not follow.strip():
                if not body:
                    continue
                # a blank line between list items does not end the section
                upcoming = next((nl for nl in rest[j + 1:] if nl.strip()), "")
                if LIST_ITEM_RE.match(body[-1]) and LIST_ITEM_RE.match(upcoming):
                    continue
                break
            if _is_boundary(follow, stop_re):
                break
            body.append(follow)
        return "\n".join(body).strip()

    return None


def split_paragraphs(text: str) -> list[str]:
    return [p.strip() for p in PARAGRAPH_SPLIT_RE.split(text) if p.strip()]


def clean_point(text: str) -> str:
    """Strip bold markers and surrounding whitespace from a list item."""
    return BOLD_RE.sub("", text).strip()


def _list_items(section: str) -> list[str]:
    """List items in a section; indented follow-on lines join the item above."""
    points: list[str] = []
    item_indent = 0
    for line in section.splitlines():
        m = LIST_ITEM_RE.match(line)
        if m:
            item_indent = _indent(line)
            cleaned = clean_point(m.group(2))
            if cleaned:
                points.append(cleaned)
        elif points and line.strip() and _indent(line) > item_indent:
            points[-1] = f"{points[-1]} {clean_point(line)}"
    return points


def _first_list_run(text: str) -> list[str]:
    """First contiguous run of list items anywhere in the text.

    Blank lines end the run unless the next non-blank line is another list
    item. Non-list lines indented past the list continue the current item;
    anything else ends the run.
    """
    lines = text.splitlines()
    points: list[str] = []
    run_indent: int | None = None

    for i, line in enumerate(lines):
        m = LIST_ITEM_RE.match(line)
        if m:
            indent = _indent(line)
            if run_indent is None or indent < run_indent:
                run_indent = indent
            cleaned = clean_point(m.group(2))
            if cleaned:
                points.append(cleaned)
            continue

        if not points:
            continue

        if not line.strip():
            upcoming = next((nl for nl in lines[i + 1:] if nl.strip()), "")
            if LIST_ITEM_RE.match(upcoming):
                continue
            break

        if run_indent is not None and _indent(line) > run_indent and not HEADING_RE.match(line):
            points[-1] = f"{points[-1]} {clean_point(line)}"
            continue
        break

    return points


def extract_key_points(text: str, locale: str | None = None) -> list[str]:
    """Key points from a 'Key Points' section, else from the first list in the text."""
    if not text or not text.strip():
        return []

    section = find_section(text, "key_points", locale)
    if section:
        points = _list_items(section)
        if points:
            return points
        return [clean_point(line) for line in section.splitlines() if clean_point(line)]

    return _first_list_run(text)


def find_recommendation(text: str, locale: str | None = None) -> str | None:
    """Recommendation text if one can be located, else None."""
    if not text or not text.strip():
        return None

    section = find_section(text, "recommendation", locale)
    if section:
        paragraphs = split_paragraphs(section)
        first = paragraphs[0]
        # A short first paragraph is usually a lead-in fragment
        if len(first) < settings.short_paragraph_chars and len(paragraphs) > 1:
            return f"{first} {paragraphs[1]}"
        return first

    # Unlabelled: many analyses close with the advice itself
    tail = [line.strip() for line in text.splitlines() if line.strip()]
    closing = " ".join(tail[-settings.recommendation_tail_lines:])
    cue_re = word_pattern("RECOMMENDATION_CUES", lexicon.normalize_locale(locale))
    if closing and cue_re and cue_re.search(closing):
        return closing
    return None


def extract_recommendation(text: str, locale: str | None = None) -> str:
    """Recommendation text, or the locale's placeholder when none is found."""
    return find_recommendation(text, locale) or lexicon.default_recommendation(locale)


def extract_summary(text: str, locale: str | None = None) -> str:
    """Body of a 'Summary' section, or the whole text when unlabelled."""
    if not text:
        return ""
    section = find_section(text, "summary", locale)
    return section if section else text.strip()

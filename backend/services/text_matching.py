"""Compiled term matching shared by the classifier passes.

Keyword groups (label, tail, section) match English terms as whole words
so "correct" never hits inside "incorrect". Phrases and weighted terms
only need a word start, so "dismiss" hits "dismissed" and "appeal" hits
"appealing" while "valid" still misses "invalid". Hebrew terms are
matched as substrings so prefixed forms (ו, ה, ל) still count. When hits
from different groups overlap, only the longest survives, which lets
"not in favor" outrank "in favor".
"""

import bisect
import re
from dataclasses import dataclass
from functools import lru_cache

from models.schemas.verdict import Category
from services import lexicon


def _is_ascii_word_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == "_")


def term_pattern(term: str, whole_word: bool = True) -> str:
    """Regex source for a literal term with whitespace-tolerant gaps.

    With `whole_word` off only the start of the term is anchored, so
    inflected forms ("contesting", "dismissed") still match.
    """
    body = r"\s+".join(re.escape(part) for part in term.lower().split())
    left = r"\b" if _is_ascii_word_char(term[0]) else ""
    right = r"\b" if whole_word and _is_ascii_word_char(term[-1]) else ""
    return f"{left}{body}{right}"


def compile_terms(terms: list[str]) -> re.Pattern | None:
    """One alternation for a word list; longest terms first."""
    if not terms:
        return None
    ordered = sorted(set(terms), key=len, reverse=True)
    return re.compile("|".join(term_pattern(t) for t in ordered), re.IGNORECASE)


@dataclass(frozen=True)
class Hit:
    start: int
    end: int
    category: Category
    term: str

    @property
    def length(self) -> int:
        return self.end - self.start


class GroupMatcher:
    """Matches text against category -> terms groups with overlap resolution."""

    def __init__(self, groups: dict[Category, list[str]], whole_word: bool = True) -> None:
        self._patterns: list[tuple[Category, str, re.Pattern]] = [
            (cat, term, re.compile(term_pattern(term, whole_word), re.IGNORECASE))
            for cat, terms in groups.items()
            for term in terms
        ]

    def hits(self, text: str) -> list[Hit]:
        """All non-overlapping hits, longest first on conflict, in text order."""
        candidates = [
            Hit(m.start(), m.end(), cat, term)
            for cat, term, pattern in self._patterns
            for m in pattern.finditer(text)
        ]
        candidates.sort(key=lambda h: (-h.length, h.start))
        # accepted hits never overlap, so sorting by start also sorts by end
        # and only the two neighbours of an insertion point can conflict
        starts: list[int] = []
        accepted: list[Hit] = []
        for hit in candidates:
            i = bisect.bisect_left(starts, hit.start)
            if i > 0 and accepted[i - 1].end > hit.start:
                continue
            if i < len(accepted) and accepted[i].start < hit.end:
                continue
            starts.insert(i, hit.start)
            accepted.insert(i, hit)
        return accepted

    def counts(self, text: str) -> dict[Category, int]:
        result = {cat: 0 for cat in lexicon.CATEGORY_ORDER}
        for hit in self.hits(text):
            result[hit.category] += 1
        return result

    def first_category(self, text: str) -> tuple[Category, Hit] | None:
        """First category in priority order that has any hit."""
        by_category: dict[Category, Hit] = {}
        for hit in self.hits(text):
            by_category.setdefault(hit.category, hit)
        for cat in lexicon.CATEGORY_ORDER:
            if cat in by_category:
                return cat, by_category[cat]
        return None


# Tables matched on word starts rather than whole words
PREFIX_TABLES = frozenset({"PHRASE_LIBRARY"})


@lru_cache(maxsize=None)
def group_matcher(table_name: str, locale: str) -> GroupMatcher:
    """Cached matcher for one of the lexicon's category tables."""
    table = getattr(lexicon, table_name)
    return GroupMatcher(
        lexicon.merged_groups(table, locale),
        whole_word=table_name not in PREFIX_TABLES,
    )


@lru_cache(maxsize=None)
def word_pattern(table_name: str, locale: str) -> re.Pattern | None:
    """Cached alternation for one of the lexicon's locale -> words tables."""
    table = getattr(lexicon, table_name)
    return compile_terms(lexicon.merged_words(table, locale))


@lru_cache(maxsize=None)
def whole_word_pattern(table_name: str, locale: str) -> re.Pattern | None:
    """Like word_pattern but bounded on both sides for every script."""
    table = getattr(lexicon, table_name)
    words = sorted(lexicon.merged_words(table, locale), key=len, reverse=True)
    if not words:
        return None
    alt = "|".join(re.escape(w) for w in words)
    return re.compile(rf"(?<!\w)(?:{alt})(?!\w)", re.IGNORECASE)


@lru_cache(maxsize=4096)
def term_regex(term: str, whole_word: bool = True) -> re.Pattern:
    return re.compile(term_pattern(term, whole_word), re.IGNORECASE)


def contains_term(text: str, term: str, whole_word: bool = True) -> bool:
    return term_regex(term, whole_word).search(text) is not None


def count_term(text: str, term: str) -> int:
    return len(term_regex(term).findall(text))

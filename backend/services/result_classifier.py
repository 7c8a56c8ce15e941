"""Result classifier: free-text fine analysis -> Verdict.

Pipeline (first strategy with a confident answer wins):
1. Explicit label       "Result: correct" / "תוצאה: עילה"
2. Terminal paragraph   final blank-line-separated paragraph is exactly a category word
3. Tail window          keyword counts over the last few lines
4. Result section       "### Result" / "## תוצאה" body, then a small word score
5. Phrase library       curated whole-document phrases
6. Weighted sentiment   sentence-level weighted terms with negation/hedging (total)

Key points and the recommendation are extracted separately and do not
affect the category. Everything here is pure and never raises.
"""

import logging
import re
from functools import lru_cache
from typing import Callable

from config import settings
from models.schemas.verdict import Category, SentimentScore, Verdict
from services import lexicon
from services.section_extractor import extract_key_points, extract_recommendation, find_section
from services.text_matching import (
    contains_term,
    count_term,
    group_matcher,
    whole_word_pattern,
)

logger = logging.getLogger(__name__)

Strategy = Callable[[str, str], Category | None]

SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_QUOTES_RE = re.compile(r"[\"'`*“”]")


@lru_cache(maxsize=None)
def _label_line_re(locale: str) -> re.Pattern:
    labels = lexicon.merged_words(lexicon.RESULT_LABELS, locale)
    alt = "|".join(re.escape(lbl) for lbl in labels)
    return re.compile(rf"(?:{alt})\s?(?:\*\*)?\s?:", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

def explicit_label(text: str, locale: str) -> Category | None:
    """Keyword test on the value following a 'Result:' label."""
    label_re = _label_line_re(locale)
    matcher = group_matcher("LABEL_KEYWORDS", locale)
    for line in text.splitlines():
        m = label_re.search(line)
        if not m:
            continue
        value = _QUOTES_RE.sub(" ", line[m.end():]).strip().lower()
        if not value:
            continue
        found = matcher.first_category(value)
        if found:
            category, hit = found
            logger.debug("Explicit label %r matched %r -> %s", value, hit.term, category.value)
            return category
    return None


def terminal_paragraph(text: str, locale: str) -> Category | None:
    """Final paragraph that is exactly one category keyword."""
    last = text.split("\n\n")[-1].strip().lower()
    category = lexicon.terminal_keywords(locale).get(last)
    if category:
        logger.debug("Terminal paragraph is %r -> %s", last, category.value)
    return category


def tail_window(text: str, locale: str) -> Category | None:
    """Keyword counts over the last lines, where conclusions are usually stated."""
    tail = " ".join(text.split("\n")[-settings.tail_window_lines:]).lower()
    counts = group_matcher("TAIL_KEYWORDS", locale).counts(tail)
    fav = counts[Category.FAVORABLE]
    unfav = counts[Category.UNFAVORABLE]
    partial = counts[Category.PARTIAL]
    logger.debug("Tail window counts: fav=%d unfav=%d partial=%d", fav, unfav, partial)

    if fav > 0 and unfav < fav and partial < fav:
        return Category.FAVORABLE
    if unfav > 0 and unfav > partial:
        return Category.UNFAVORABLE
    if partial > 0:
        return Category.PARTIAL
    return None


def result_section(text: str, locale: str) -> Category | None:
    """Keyword test on a '### Result' section, then a positive/negative word count."""
    section = find_section(text, "result", locale)
    if not section:
        return None
    body = section.lower()

    found = group_matcher("SECTION_KEYWORDS", locale).first_category(body)
    if found:
        category, hit = found
        logger.debug("Result section matched %r -> %s", hit.term, category.value)
        return category

    positive = sum(
        count_term(body, w) for w in lexicon.merged_words(_section_words("positive"), locale)
    )
    negative = sum(
        count_term(body, w) for w in lexicon.merged_words(_section_words("negative"), locale)
    )
    logger.debug("Result section word score: positive=%d negative=%d", positive, negative)
    if positive > negative:
        return Category.FAVORABLE
    if negative > positive:
        return Category.UNFAVORABLE
    return None


def _section_words(polarity: str) -> dict[str, list[str]]:
    return {
        code: words[polarity] for code, words in lexicon.SECTION_SCORE_WORDS.items()
    }


def phrase_library(text: str, locale: str) -> Category | None:
    """First category whose curated phrase list hits anywhere in the text."""
    found = group_matcher("PHRASE_LIBRARY", locale).first_category(text.lower())
    if not found:
        return None
    category, hit = found
    logger.debug("Phrase library matched %r -> %s", hit.term, category.value)
    return category


STRATEGIES: list[tuple[str, Strategy]] = [
    ("explicit_label", explicit_label),
    ("terminal_paragraph", terminal_paragraph),
    ("tail_window", tail_window),
    ("result_section", result_section),
    ("phrase_library", phrase_library),
]


# ---------------------------------------------------------------------------
# Weighted sentiment fallback
# ---------------------------------------------------------------------------

def _is_neutral(sentence: str, pairs: list[tuple[str, str]]) -> bool:
    return any(a in sentence and b in sentence for a, b in pairs)


def _embeds_negation(term: str, negation_re: re.Pattern | None) -> bool:
    return bool(negation_re and negation_re.search(term))


def _sentence_contribution(
    sentence: str,
    terms: list[tuple[str, int]],
    negated: bool,
    qualified: bool,
    negation_re: re.Pattern | None,
) -> float:
    """Score of the strongest matching term in one sentence, after modifiers."""
    for term, weight in terms:
        if not contains_term(sentence, term, whole_word=False):
            continue
        modifier = 1.0
        if negated and not _embeds_negation(term, negation_re):
            modifier = settings.negation_factor
        if qualified:
            modifier *= settings.qualifier_factor
        return weight * modifier
    return 0.0


def score_sentiment(text: str, locale: str | None = None) -> SentimentScore:
    """Sum weighted positive/negative sentence scores over the whole text."""
    loc = lexicon.normalize_locale(locale)
    if not text:
        return SentimentScore()

    positive_terms = lexicon.merged_weighted(loc, "positive")
    negative_terms = lexicon.merged_weighted(loc, "negative")
    neutral_pairs = lexicon.merged_words(lexicon.NEUTRAL_CONTEXTS, loc)
    negation_re = whole_word_pattern("NEGATION_WORDS", loc)
    qualifier_re = whole_word_pattern("QUALIFIER_WORDS", loc)

    positive = 0.0
    negative = 0.0
    for sentence in SENTENCE_SPLIT_RE.split(text.lower()):
        sentence = sentence.strip()
        if not sentence or _is_neutral(sentence, neutral_pairs):
            continue
        negated = bool(negation_re and negation_re.search(sentence))
        qualified = bool(qualifier_re and qualifier_re.search(sentence))
        positive += _sentence_contribution(sentence, positive_terms, negated, qualified, negation_re)
        negative += _sentence_contribution(sentence, negative_terms, negated, qualified, negation_re)

    return SentimentScore(positive=positive, negative=negative)


def weighted_sentiment(text: str, locale: str) -> Category:
    score = score_sentiment(text, locale)
    category = score.category(settings.strong_threshold, settings.moderate_threshold)
    logger.debug(
        "Weighted sentiment: positive=%.1f negative=%.1f diff=%.1f -> %s",
        score.positive, score.negative, score.diff, category.value,
    )
    return category


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def detect_category(text: str | None, locale: str | None = None) -> tuple[Category, str]:
    """Category for the text and the name of the strategy that decided it."""
    if not text or not text.strip():
        return Category.PARTIAL, "empty"

    loc = lexicon.normalize_locale(locale)
    text = text.replace("\r\n", "\n")
    for name, strategy in STRATEGIES:
        category = strategy(text, loc)
        if category is not None:
            logger.info("Result classified as %s by %s", category.value, name)
            return category, name

    category = weighted_sentiment(text, loc)
    logger.info("Result classified as %s by sentiment fallback", category.value)
    return category, "sentiment"


def classify(text: str | None, locale: str | None = None) -> Verdict:
    """Classify an analysis document and extract its key points and recommendation."""
    if not text or not text.strip():
        return Verdict(
            category=Category.PARTIAL,
            key_points=[],
            recommendation=lexicon.default_recommendation(locale),
            strategy="empty",
        )

    text = text.replace("\r\n", "\n")
    category, strategy = detect_category(text, locale)
    return Verdict(
        category=category,
        key_points=extract_key_points(text, locale),
        recommendation=extract_recommendation(text, locale),
        strategy=strategy,
    )

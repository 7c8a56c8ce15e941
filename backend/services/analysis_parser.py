"""Turn an LLM fine analysis (free text or JSON payload) into a Verdict.

The LLM is asked for Summary / Key Points / Recommendation / Result
sections but frequently deviates, so every field falls back to the
classifier and extractors over the full text.
"""

import logging
import re
from typing import Any

from models.schemas.fine_report import FineAnalysis
from models.schemas.verdict import Category, Verdict
from services.result_classifier import detect_category
from services.section_extractor import (
    extract_key_points,
    extract_recommendation,
    extract_summary,
    find_recommendation,
)

logger = logging.getLogger(__name__)

_RESULT_WORDS = r"(correct|partially|incorrect)\b"

EXPLICIT_RESULT_RES: list[re.Pattern] = [
    re.compile(
        rf"(?:result|תוצאה)\s?(?:\*\*)?\s?:\s*(?:\*\*)?\s*[\"']?{_RESULT_WORDS}",
        re.IGNORECASE,
    ),
    re.compile(rf"#{{2,3}}\s*(?:result|תוצאה)\s*:?\s*(?:\*\*)?\s*{_RESULT_WORDS}", re.IGNORECASE),
    re.compile(rf"\*\*{_RESULT_WORDS}\*\*", re.IGNORECASE),
]


def extract_explicit_result(text: str) -> Category | None:
    """Result only when the text states one of the three wire values outright."""
    if not text:
        return None
    for pattern in EXPLICIT_RESULT_RES:
        m = pattern.search(text)
        if m:
            return Category.parse(m.group(1))
    return None


def parse_analysis(text: str, locale: str | None = None) -> FineAnalysis:
    """Split a free-text LLM response into analysis sections."""
    if not text or not text.strip():
        return FineAnalysis()

    return FineAnalysis(
        summary=extract_summary(text, locale),
        key_points=extract_key_points(text, locale),
        recommendation=find_recommendation(text, locale) or "",
        result=extract_explicit_result(text),
    )


def _as_points(value: Any) -> list[str]:
    if isinstance(value, str):
        return [line.strip(" -•*\t") for line in value.splitlines() if line.strip(" -•*\t")]
    if isinstance(value, list):
        return [str(v).strip() for v in value if str(v).strip()]
    return []


def parse_analysis_json(data: dict[str, Any] | None) -> FineAnalysis:
    """Normalise an already-structured payload (e.g. a cached analysis)."""
    if not data:
        return FineAnalysis()

    raw_result = data.get("result")
    result = Category.parse(raw_result) if isinstance(raw_result, str) else None
    if raw_result and result is None:
        logger.warning("Ignoring unknown analysis result value: %r", raw_result)

    return FineAnalysis(
        summary=str(data.get("summary") or ""),
        key_points=_as_points(data.get("keyPoints", data.get("key_points"))),
        recommendation=str(data.get("recommendation") or ""),
        result=result,
    )


def resolve_verdict(
    analysis: FineAnalysis,
    locale: str | None = None,
    source_text: str | None = None,
) -> Verdict:
    """Combine explicit payload fields with classifier output.

    The category always comes from classifying `source_text` (the analysis
    summary when omitted); a stated `result` is only used when there is no
    text to classify. Key points and the recommendation come from the
    payload when present.
    """
    text = source_text if source_text is not None else analysis.summary

    category, strategy = detect_category(text, locale)
    if strategy == "empty" and analysis.result is not None:
        category, strategy = analysis.result, "payload"
    elif analysis.result is not None and analysis.result != category:
        logger.info(
            "Stated result %s overridden by %s from %s",
            analysis.result.value, category.value, strategy,
        )

    key_points = list(analysis.key_points) or extract_key_points(text, locale)
    recommendation = analysis.recommendation.strip() or extract_recommendation(text, locale)

    return Verdict(
        category=category,
        key_points=key_points,
        recommendation=recommendation,
        strategy=strategy,
    )

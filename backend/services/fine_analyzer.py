"""Fine analysis flow: cache -> Gemini -> parse -> classify.

Results are cached per report and locale, matching the keys the mobile
client stores them under. Degraded (offline) results are never cached so the
next request retries the LLM.
"""

import logging

from config import settings
from models.responses import AnalysisResponse
from models.schemas.fine_report import CancellationRequest, FineReport
from models.schemas.verdict import Category, Verdict
from services import gemini_client, lexicon, prompt_builder
from services.analysis_parser import parse_analysis, parse_analysis_json, resolve_verdict

logger = logging.getLogger(__name__)

_analysis_cache: dict[str, AnalysisResponse] = {}
_cancellation_cache: dict[str, CancellationRequest] = {}


class AnalysisUnavailableError(RuntimeError):
    """The LLM could not produce the requested content."""


def analysis_cache_key(report_number: str, locale: str | None) -> str:
    return f"analysis_{report_number}_{lexicon.normalize_locale(locale)}"


def cancellation_cache_key(report_number: str, full_auto: bool, locale: str | None) -> str:
    mode = "auto" if full_auto else "assisted"
    return f"cancellation_{report_number}_{mode}_{lexicon.normalize_locale(locale)}"


def fallback_analysis(locale: str | None = None) -> AnalysisResponse:
    """Offline result shown when the analysis service is unreachable."""
    loc = lexicon.normalize_locale(locale)
    analysis = parse_analysis_json(lexicon.FALLBACK_ANALYSIS[loc])
    return AnalysisResponse(
        analysis=analysis,
        verdict=Verdict(
            category=Category.PARTIAL,
            key_points=analysis.key_points,
            recommendation=analysis.recommendation,
            strategy="fallback",
        ),
        degraded=True,
    )


async def analyze_fine(report: FineReport, locale: str | None = None) -> AnalysisResponse:
    """Analyze a fine with the LLM and classify the result."""
    loc = lexicon.normalize_locale(locale)
    key = analysis_cache_key(report.report_number, loc)
    cached = _analysis_cache.get(key)
    if cached is not None:
        logger.info("Analysis cache hit: %s", key)
        return cached

    system, prompt = prompt_builder.build_analysis_prompt(report, loc)
    text = await gemini_client.generate_text(
        prompt,
        system_instruction=system,
        max_output_tokens=settings.analysis_max_output_tokens,
    )
    if not text:
        logger.warning("Gemini analysis unavailable for report %s, using fallback", report.report_number)
        return fallback_analysis(loc)

    analysis = parse_analysis(text, loc)
    verdict = resolve_verdict(analysis, loc, source_text=text)
    result = AnalysisResponse(analysis=analysis, verdict=verdict)
    _analysis_cache[key] = result
    return result


async def request_cancellation(
    report: FineReport,
    additional_info: str = "",
    full_auto: bool = True,
    locale: str | None = None,
) -> CancellationRequest:
    """Generate a cancellation letter (full_auto) or a list of contest arguments."""
    loc = lexicon.normalize_locale(locale)
    key = cancellation_cache_key(report.report_number, full_auto, loc)
    cached = _cancellation_cache.get(key)
    if cached is not None:
        logger.info("Cancellation cache hit: %s", key)
        return cached

    system, prompt = prompt_builder.build_cancellation_prompt(
        report, additional_info, full_auto, loc
    )
    text = await gemini_client.generate_text(
        prompt,
        system_instruction=system,
        max_output_tokens=settings.cancellation_max_output_tokens,
    )
    if not text:
        raise AnalysisUnavailableError(
            f"Failed to generate cancellation request for report {report.report_number}"
        )

    result = CancellationRequest(
        content=text,
        type="full_letter" if full_auto else "bullet_points",
    )
    _cancellation_cache[key] = result
    return result


def clear_cache() -> None:
    """Drop all cached analyses and letters. Useful for testing."""
    _analysis_cache.clear()
    _cancellation_cache.clear()

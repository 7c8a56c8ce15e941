"""Google Gemini API wrapper with error handling."""

import logging

from google import genai
from google.genai import types

from config import settings

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


async def generate_text(
    prompt: str,
    system_instruction: str | None = None,
    max_output_tokens: int | None = None,
) -> str | None:
    """Send a prompt to Gemini and return the response text, or None on failure."""
    client = get_client()
    if client is None:
        return None

    try:
        response = await client.aio.models.generate_content(
            model=settings.gemini_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=system_instruction,
                temperature=settings.llm_temperature,
                max_output_tokens=max_output_tokens or settings.analysis_max_output_tokens,
            ),
        )
        text = (response.text or "").strip()
        if not text:
            logger.error("Gemini returned an empty response")
            return None
        return text

    except Exception as e:
        logger.error("Gemini API error: %s", e)
        return None

import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    llm_temperature: float = 0.7
    analysis_max_output_tokens: int = 1000
    cancellation_max_output_tokens: int = 1500
    cors_origins: list[str] = [
        "http://localhost:8081",
        "http://localhost:19006",
        "exp://localhost:8081",
    ]
    debug: bool = False
    max_text_length: int = 20000

    # Result classifier tuning. Thresholds and weights were tuned by hand
    # against sample LLM output; override via env to re-tune.
    strong_threshold: float = 3.0
    moderate_threshold: float = 1.5
    negation_factor: float = -0.5
    qualifier_factor: float = 0.7
    tail_window_lines: int = 7
    short_paragraph_chars: int = 50
    recommendation_tail_lines: int = 3

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})

"""
Text summarization through an OpenAI-compatible chat-completion API.

Without an API key the summarizer runs offline and returns a short
excerpt of the input instead.
"""

from typing import Optional

from .client import post_json
from .config import SummarizerConfig
from .errors import UpstreamError, ValidationError
from .logger import get_logger

MIN_TEXT_LENGTH = 40
OFFLINE_LINES = 3
OFFLINE_MAX_CHARS = 600
TEMPERATURE = 0.5

SYSTEM_PROMPT = "You are a summarizer that produces clear, concise 3–5 paragraph summaries."


def offline_summary(text: str) -> str:
    """First three non-empty lines, capped at 600 characters."""
    first = " ".join([line for line in text.split("\n") if line][:OFFLINE_LINES])
    ellipsis = "…" if len(first) > OFFLINE_MAX_CHARS else ""
    return f"Summary (offline): {first[:OFFLINE_MAX_CHARS]}{ellipsis}"


def summarize_text(text: Optional[str], language: str = "en", config: Optional[SummarizerConfig] = None) -> str:
    """Summarize ``text`` with the configured LLM, or offline without one.

    Raises:
        ValidationError: ``text`` is missing or shorter than 40 characters
        UpstreamError: The LLM answered with an error or no content
        NetworkError: The LLM request failed in transport
    """
    if not isinstance(text, str) or len(text) < MIN_TEXT_LENGTH:
        raise ValidationError("Insufficient text to summarize")

    logger = get_logger()
    config = config or SummarizerConfig()
    if not config.enabled or not config.api_key:
        logger.warning("No LLM API key configured, running in offline mode.")
        return offline_summary(text)

    data = post_json(
        config.endpoint,
        {
            "model": config.model,
            "temperature": TEMPERATURE,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": f"Language: {language}\n\nSummarize:\n\n{text}"},
            ],
        },
        headers={"Authorization": f"Bearer {config.api_key}"},
    )

    choices = data.get("choices") if isinstance(data, dict) else None
    message = (choices[0] or {}).get("message") if choices else None
    summary = ((message or {}).get("content") or "").strip()
    if not summary:
        raise UpstreamError(None, config.endpoint, "Summary request returned no content")
    logger.info("Summarized text", model=config.model, language=language, chars=len(text))
    return summary

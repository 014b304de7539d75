"""
Runtime configuration.

Environment variables are read once, here, and turned into plain config
objects that are passed into the components that need them.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_LLM_ENDPOINT = "https://api.groq.com/openai/v1/chat/completions"
DEFAULT_LLM_MODEL = "llama-3.1-8b-instant"
DEFAULT_PORT = 3000


@dataclass(frozen=True)
class SummarizerConfig:
    """Chat-completion settings. ``enabled`` is False when no key is set."""

    enabled: bool = False
    endpoint: str = DEFAULT_LLM_ENDPOINT
    api_key: Optional[str] = None
    model: str = DEFAULT_LLM_MODEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SummarizerConfig":
        env = os.environ if environ is None else environ
        key = (env.get("GROQ_API_KEY") or "").strip() or None
        return cls(
            enabled=key is not None,
            endpoint=env.get("GROQ_ENDPOINT") or DEFAULT_LLM_ENDPOINT,
            api_key=key,
            model=env.get("GROQ_MODEL") or DEFAULT_LLM_MODEL,
        )


@dataclass(frozen=True)
class Settings:
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    history_path: Path = Path("data/history.json")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        try:
            port = int(env.get("PORT") or DEFAULT_PORT)
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {env.get('PORT')!r}")
        return cls(
            port=port,
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
            log_dir=Path(env.get("LOG_DIR") or "logs"),
            history_path=Path(env.get("SMARTSUMMARY_HISTORY") or "data/history.json"),
        )

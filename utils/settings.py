"""
Environment settings loader for the prompt studio service.
"""
from dataclasses import dataclass
from functools import lru_cache
import os

from dotenv import load_dotenv


load_dotenv()  # Load environment variables from .env file if present


@dataclass(frozen=True)
class Settings:
    """Immutable settings container built from environment variables."""
    openai_api_key: str | None
    prompt_model: str
    chat_model: str
    image_model: str
    edit_model: str
    debounce_seconds: float
    log_level: str


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings built from environment variables."""
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        prompt_model=os.getenv("PROMPT_MODEL", "gpt-5-mini"),
        chat_model=os.getenv("CHAT_MODEL", "gpt-5-mini"),
        image_model=os.getenv("IMAGE_MODEL", "gpt-image-1"),
        edit_model=os.getenv("EDIT_MODEL", "gpt-image-1"),
        debounce_seconds=_float_env("PROMPT_DEBOUNCE_SECONDS", 0.5),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )

"""
Runtime configuration, read from the environment on each request.
Only GEMINI_API_KEY is required; its absence is reported per request, not at import.
"""
import os
from dataclasses import dataclass, field

from prompts import Prompts

DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    api_key: str | None = field(default=None, repr=False)
    model: str = DEFAULT_MODEL
    api_base: str = DEFAULT_API_BASE
    timeout: float = 60.0
    enable_search: bool = True
    prompts: Prompts = field(default_factory=Prompts)

    @property
    def endpoint(self) -> str:
        return f"{self.api_base.rstrip('/')}/models/{self.model}:generateContent"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_key=os.environ.get("GEMINI_API_KEY") or None,
            model=os.environ.get("GEMINI_MODEL", "").strip() or DEFAULT_MODEL,
            api_base=os.environ.get("GEMINI_API_BASE", "").strip() or DEFAULT_API_BASE,
            timeout=float(os.getenv("MADE_TIMEOUT_SEC", "60")),
            enable_search=_env_flag("MADE_ENABLE_SEARCH", True),
        )

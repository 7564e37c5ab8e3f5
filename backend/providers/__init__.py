from .base import LLMProvider, ProviderResponse, Turn
from .gemini_provider import GeminiProvider

__all__ = [
    "LLMProvider",
    "ProviderResponse",
    "Turn",
    "GeminiProvider",
]

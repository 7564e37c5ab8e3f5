from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Turn:
    role: str  # "user" | "model"
    text: str


@dataclass
class ProviderResponse:
    content: str
    error: str | None = None
    status_code: int = 200


class LLMProvider(ABC):
    @property
    @abstractmethod
    def provider_id(self) -> str:
        pass

    @abstractmethod
    async def generate(self, contents: List[dict], tools: List[dict] | None = None) -> ProviderResponse:
        """Issue one generation call for already-shaped upstream contents."""

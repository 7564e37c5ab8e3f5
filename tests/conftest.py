from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from config import Settings
from providers import LLMProvider, ProviderResponse


@dataclass
class FakeProvider(LLMProvider):
    response: ProviderResponse = field(default_factory=lambda: ProviderResponse(content="respuesta"))
    calls: list[dict[str, Any]] = field(default_factory=list)

    @property
    def provider_id(self) -> str:
        return "fake"

    async def generate(self, contents: list[dict], tools: list[dict] | None = None) -> ProviderResponse:
        self.calls.append({"contents": contents, "tools": tools})
        return self.response


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key")


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("GEMINI_API_KEY", "GEMINI_MODEL", "GEMINI_API_BASE", "MADE_TIMEOUT_SEC", "MADE_ENABLE_SEARCH"):
        monkeypatch.delenv(name, raising=False)

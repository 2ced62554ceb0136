import pytest

from calcapp.config import Settings
from calcapp.llm import LLMProvider, LLMResponse


@pytest.fixture
def clean_settings(monkeypatch):
    """Settings with no backend credentials picked up from the environment"""
    for name in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "CALC_OPENAI_API_KEY", "CALC_ANTHROPIC_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    return Settings()


class FakeProvider(LLMProvider):
    """Replies with canned content and records the prompts it saw"""

    name = "Fake"

    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def complete(self, messages, **kwargs):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.content, model="fake-model")


@pytest.fixture
def fake_provider_cls():
    return FakeProvider

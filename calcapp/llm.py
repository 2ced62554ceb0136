"""
calcapp LLM Integration Module
Chat-completion backends used to turn natural language into expressions
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional

from .config import AISettings
from .errors import LLMBackendError

logger = logging.getLogger(__name__)


@dataclass
class Message:
    """Represents a chat message"""
    role: str  # system, user, assistant
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class LLMResponse:
    """Response from an LLM"""
    content: str
    model: str
    usage: Optional[Dict[str, int]] = None
    finish_reason: Optional[str] = None


class LLMProvider(ABC):
    """Abstract base class for LLM providers"""

    name = "base"

    @abstractmethod
    async def complete(self, messages: List[Message], **kwargs) -> LLMResponse:
        """Generate a completion"""
        pass


class OpenAIProvider(LLMProvider):
    """OpenAI API provider"""

    name = "OpenAI"

    def __init__(self, api_key: str, model: str = "gpt-3.5-turbo",
                 temperature: float = 0.0, max_tokens: int = 256):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = None

    @property
    def client(self):
        if self._client is None:
            from openai import AsyncOpenAI
            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    async def complete(self, messages: List[Message], **kwargs) -> LLMResponse:
        try:
            response = await self.client.chat.completions.create(
                model=kwargs.get("model", self.model),
                messages=[m.to_dict() for m in messages],
                temperature=kwargs.get("temperature", self.temperature),
                max_tokens=kwargs.get("max_tokens", self.max_tokens),
            )
            return LLMResponse(
                content=response.choices[0].message.content or "",
                model=response.model,
                usage={
                    "prompt_tokens": response.usage.prompt_tokens,
                    "completion_tokens": response.usage.completion_tokens,
                    "total_tokens": response.usage.total_tokens,
                } if response.usage else None,
                finish_reason=response.choices[0].finish_reason,
            )
        except Exception as e:
            raise LLMBackendError(f"OpenAI request failed: {e}") from e


class AnthropicProvider(LLMProvider):
    """Anthropic Claude API provider"""

    name = "Anthropic"

    def __init__(self, api_key: str, model: str = "claude-3-haiku-20240307",
                 temperature: float = 0.0, max_tokens: int = 256):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = None

    @property
    def client(self):
        if self._client is None:
            from anthropic import AsyncAnthropic
            self._client = AsyncAnthropic(api_key=self.api_key)
        return self._client

    async def complete(self, messages: List[Message], **kwargs) -> LLMResponse:
        # Separate system message from conversation
        system_msg = ""
        conv_messages = []
        for m in messages:
            if m.role == "system":
                system_msg = m.content
            else:
                conv_messages.append({"role": m.role, "content": m.content})

        try:
            response = await self.client.messages.create(
                model=kwargs.get("model", self.model),
                max_tokens=kwargs.get("max_tokens", self.max_tokens),
                temperature=kwargs.get("temperature", self.temperature),
                system=system_msg,
                messages=conv_messages,
            )
            return LLMResponse(
                content=response.content[0].text,
                model=response.model,
                usage={
                    "input_tokens": response.usage.input_tokens,
                    "output_tokens": response.usage.output_tokens,
                } if response.usage else None,
                finish_reason=response.stop_reason,
            )
        except Exception as e:
            raise LLMBackendError(f"Anthropic request failed: {e}") from e


def create_provider(ai: Optional[AISettings]) -> Optional[LLMProvider]:
    """Build the provider for the configured API key, or None for local parsing"""
    if ai is None:
        return None
    if ai.openai_api_key:
        logger.info("Using OpenAI provider")
        return OpenAIProvider(
            api_key=ai.openai_api_key,
            model=ai.model,
            temperature=ai.temperature,
            max_tokens=ai.max_tokens,
        )
    if ai.anthropic_api_key:
        logger.info("Using Anthropic provider")
        return AnthropicProvider(
            api_key=ai.anthropic_api_key,
            model=ai.anthropic_model,
            temperature=ai.temperature,
            max_tokens=ai.max_tokens,
        )
    logger.warning("No API key found. Natural language processing will use basic parsing only.")
    return None

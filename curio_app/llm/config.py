"""LLM configuration — model selection, defaults."""

from __future__ import annotations

from dataclasses import dataclass

from curio_app.config import AppConfig


@dataclass
class LLMConfig:
    description_model: str = "mistral/mistral-small-latest"
    max_quote_tokens: int = 200
    max_art_tokens: int = 350
    temperature: float = 0.7

    @classmethod
    def from_app_config(cls, config: AppConfig) -> LLMConfig:
        return cls(
            description_model=config.llm.description_model,
            max_quote_tokens=config.llm.max_quote_tokens,
            max_art_tokens=config.llm.max_art_tokens,
            temperature=config.llm.temperature,
        )

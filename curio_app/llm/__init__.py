"""LLM gateway — model-agnostic interface backed by LiteLLM."""

from curio_app.llm.gateway import LLMGateway
from curio_app.llm.config import LLMConfig

__all__ = ["LLMGateway", "LLMConfig"]

"""LLM Gateway — model-agnostic interface backed by LiteLLM."""

from __future__ import annotations

import logging
import re
import time
from typing import TYPE_CHECKING, Any

import litellm

from curio_app.llm.config import LLMConfig

if TYPE_CHECKING:
    from curio_app.db.models import LLMCallRepository

logger = logging.getLogger(__name__)

_BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")
_ITALIC_RE = re.compile(r"\*([^*]+)\*")
_HEADER_RE = re.compile(r"^#{1,3}\s+", re.MULTILINE)
_BULLET_RE = re.compile(r"^[-*]\s+", re.MULTILINE)
_NUMBERED_RE = re.compile(r"^\d+\.\s+", re.MULTILINE)
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def clean_markdown(text: str | None) -> str | None:
    """Strip markdown the model adds despite being asked for plain prose.

    Paragraph breaks (one blank line) are kept.
    """
    if not text:
        return text
    text = _BOLD_RE.sub(r"\1", text)
    text = _ITALIC_RE.sub(r"\1", text)
    text = _HEADER_RE.sub("", text)
    text = _BULLET_RE.sub("", text)
    text = _NUMBERED_RE.sub("", text)
    text = _BLANK_RUN_RE.sub("\n\n", text)
    return text.strip()


class LLMGateway:
    """Model-agnostic LLM interface. Backed by LiteLLM for 100+ model support."""

    def __init__(self, config: LLMConfig, call_repo: LLMCallRepository | None = None):
        self.config = config
        self.call_repo = call_repo
        # Suppress litellm verbose logging
        litellm.suppress_debug_info = True

    def describe(self, prompt: str, max_tokens: int, call_type: str, **kwargs: Any) -> str | None:
        """Generate a plain-prose description.

        Returns None on any failure so callers can fall back to fixed text.

        Args:
            prompt: Single user prompt
            max_tokens: Completion budget
            call_type: Label stored with the call log (e.g. ``art_de``)
            **kwargs: Optional subject_type and subject_id for logging
        """
        subject_type = kwargs.get("subject_type")
        subject_id = kwargs.get("subject_id")
        start_time = time.monotonic()

        try:
            response = litellm.completion(
                model=self.config.description_model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=max_tokens,
                temperature=self.config.temperature,
            )
            latency_ms = int((time.monotonic() - start_time) * 1000)

            # Extract token usage
            usage = getattr(response, "usage", None)
            prompt_tokens = getattr(usage, "prompt_tokens", 0) if usage else 0
            completion_tokens = getattr(usage, "completion_tokens", 0) if usage else 0
            total_tokens = getattr(usage, "total_tokens", 0) if usage else 0

            response_text = (response.choices[0].message.content or "").strip()

            if self.call_repo:
                self.call_repo.log(
                    call_type=call_type,
                    model=self.config.description_model,
                    subject_type=subject_type,
                    subject_id=subject_id,
                    prompt=prompt,
                    response_text=response_text,
                    prompt_tokens=prompt_tokens,
                    completion_tokens=completion_tokens,
                    total_tokens=total_tokens,
                    latency_ms=latency_ms,
                )

            return clean_markdown(response_text) or None
        except Exception as e:
            logger.error("LLM %s call failed: %s", call_type, e)
            latency_ms = int((time.monotonic() - start_time) * 1000)

            if self.call_repo:
                self.call_repo.log(
                    call_type=call_type,
                    model=self.config.description_model,
                    subject_type=subject_type,
                    subject_id=subject_id,
                    prompt=prompt,
                    latency_ms=latency_ms,
                    error=str(e),
                )

            return None

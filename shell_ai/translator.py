"""
Translation service for Shell AI.

Builds the mode prompt, makes one backend call, and returns a normalized
TranslationResult with its danger marker.
"""

import logging
import re
from typing import Optional

from .prompts import build_system_prompt
from .llm.manager import LLMManager
from .models import Mode, TranslationResult, ERROR_SENTINEL, danger_marker
from .safety import denylist_match
from .errors import ValidationFailure
from . import config_file

logger = logging.getLogger(__name__)


class TranslationService:
    """
    Translates natural language to shell commands and back.

    Stateless apart from the injected LLM manager.
    """

    def __init__(
        self,
        manager: LLMManager,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        local_denylist: Optional[bool] = None,
    ):
        self.manager = manager
        self.max_tokens = max_tokens if max_tokens is not None else config_file.get("max_tokens")
        self.temperature = temperature if temperature is not None else config_file.get("temperature")
        self.local_denylist = (
            local_denylist if local_denylist is not None else config_file.get("local_denylist")
        )

    async def translate(self, prompt: str, mode: Mode = Mode.GENERATE) -> TranslationResult:
        """
        Translate a prompt in the given mode.

        Args:
            prompt: Natural language request (generate) or a shell command (explain)
            mode: Translation direction

        Returns:
            TranslationResult; its text is the error sentinel when the
            backend replied with nothing usable.

        Raises:
            ValidationFailure: prompt is empty (raised before any backend call)
            BackendUnavailable, InvalidResponse: backend call failed
        """
        mode = Mode(mode) if mode else Mode.GENERATE
        prompt = (prompt or "").strip()
        if not prompt:
            raise ValidationFailure("Prompt is required")

        raw = await self.manager.generate(
            messages=[{"role": "user", "content": prompt}],
            system_prompt=build_system_prompt(mode),
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )

        text = normalize_output(raw, mode)
        if not text:
            logger.warning(f"Empty {mode.value} response for prompt: {prompt[:80]}")
            return TranslationResult(ERROR_SENTINEL, mode)

        if self.local_denylist:
            text = self._apply_denylist(text, prompt, mode)

        return TranslationResult(text, mode)

    def _apply_denylist(self, text: str, prompt: str, mode: Mode) -> str:
        marker = danger_marker(mode)
        if text.startswith(marker) or text.startswith("#"):
            return text
        # explain mode checks the command the user gave us
        subject = prompt if mode == Mode.EXPLAIN else text
        reason = denylist_match(subject)
        if reason:
            logger.warning(f"Backend omitted danger marker ({reason}): {subject[:80]}")
            return marker + text
        return text


def _clean_command(text: str) -> str:
    """
    Clean LLM output to ensure it's a bare command.
    Strip markdown fences, backticks and "$ " prompt markers.
    """
    text = text.strip()

    # Remove code block wrappers
    if text.startswith("```") and text.endswith("```"):
        lines = text.split("\n")
        lines = lines[1:-1] if len(lines) > 2 else [text.strip("`")]
        text = "\n".join(lines).strip()

    # Remove single-line backtick wrapping
    if text.startswith("`") and text.endswith("`") and "\n" not in text:
        text = text.strip("`")

    # Remove leading "$ " prompt markers
    if text.startswith("$ "):
        text = text[2:]

    return text.strip()


def normalize_output(raw: str, mode: Mode = Mode.GENERATE) -> str:
    """
    Trim backend output and put any danger marker into canonical form.

    Returns an empty string when nothing usable is left.
    """
    text = (raw or "").strip()
    if mode == Mode.GENERATE:
        # the marker may sit inside a code fence
        text = _clean_command(text)
    if not text:
        return ""

    marker = danger_marker(mode)
    label = marker.strip()
    flagged = False
    match = re.match(re.escape(label) + r"\s*", text, re.IGNORECASE)
    if match:
        flagged = True
        text = text[match.end():]

    if mode == Mode.GENERATE:
        text = _clean_command(text)
    else:
        text = text.strip()

    if not text:
        return ""
    return marker + text if flagged else text

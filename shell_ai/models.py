"""
Core value types for Shell AI.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class Mode(str, Enum):
    """Translation direction."""
    GENERATE = "generate"
    EXPLAIN = "explain"


class Scope(str, Enum):
    """History feed selector."""
    GLOBAL = "global"
    MINE = "mine"


# Canonical danger markers, one per mode
DANGER_MARKERS = {
    Mode.GENERATE: "WARNING: ",
    Mode.EXPLAIN: "DANGER: ",
}

# Substituted when the backend returns nothing usable
ERROR_SENTINEL = "# Error"

# Replies starting with this are comments, not commands
COMMENT_MARKER = "#"


def danger_marker(mode: Mode) -> str:
    return DANGER_MARKERS[Mode(mode)]


@dataclass(frozen=True)
class TranslationResult:
    """Normalized backend output. `dangerous` is derived from the text."""
    text: str
    mode: Mode = Mode.GENERATE

    @property
    def dangerous(self) -> bool:
        return self.text.startswith(danger_marker(self.mode))

    @property
    def is_error(self) -> bool:
        """True for the error sentinel and any comment-style reply."""
        return self.text == ERROR_SENTINEL or self.text.startswith(COMMENT_MARKER)


@dataclass(frozen=True)
class HistoryRecord:
    id: int
    prompt: str
    command: str
    mode: Mode
    user_id: Optional[str]
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "prompt": self.prompt,
            "command": self.command,
            "mode": self.mode.value,
            "user_id": self.user_id,
            "created_at": self.created_at.isoformat(),
        }

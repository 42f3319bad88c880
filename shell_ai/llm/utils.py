"""
Utility functions for LLM providers.

Message conversion and text extraction.
"""

import logging
from typing import Dict, Any, Optional, List

logger = logging.getLogger(__name__)


def convert_to_standard_messages(
    messages: List[Dict[str, Any]], system_prompt: Optional[str] = None
) -> List[Dict[str, Any]]:
    """
    Prepend the system prompt unless one is already present.

    Standard format:
    [
        {"role": "system", "content": "..."},
        {"role": "user", "content": "..."},
        {"role": "assistant", "content": "..."}
    ]
    """
    result = []
    has_system = any(
        msg.get("role") == "system" for msg in messages if isinstance(msg, dict)
    )
    if system_prompt and not has_system:
        result.append({"role": "system", "content": system_prompt})
    for msg in messages:
        if isinstance(msg, dict):
            result.append(msg)
        else:
            logger.warning(f"Invalid message format: {msg}")
    return result


def extract_text_from_content(content: Optional[str]) -> str:
    """Message content as a string; the API reports missing content as None."""
    return "" if content is None else str(content)

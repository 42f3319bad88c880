"""LLM Provider modules for Shell AI."""

from .base_provider import BaseProvider
from .groq_provider import GroqProvider
from .cerebras_provider import CerebrasProvider

__all__ = ["BaseProvider", "GroqProvider", "CerebrasProvider"]

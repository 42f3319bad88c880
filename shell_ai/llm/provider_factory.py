"""
Provider Factory for Shell AI.

Creates LLM provider instances based on configuration.
"""

import logging
from enum import Enum
from typing import Optional, Dict, Any

from .providers.base_provider import BaseProvider
from .providers.groq_provider import GroqProvider
from .providers.cerebras_provider import CerebrasProvider
from . import config

logger = logging.getLogger(__name__)


class LLMType(str, Enum):
    """Available LLM provider types."""
    GROQ = "groq"
    CEREBRAS = "cerebras"


_PROVIDER_CLASSES = {
    LLMType.GROQ: GroqProvider,
    LLMType.CEREBRAS: CerebrasProvider,
}


class ProviderFactory:
    """Factory for creating LLM provider instances."""

    @staticmethod
    def create_provider(
        llm_type: LLMType,
        api_key: str,
        model: str,
        provider_config: Optional[Dict[str, Any]] = None,
    ) -> BaseProvider:
        """
        Create an LLM provider instance.

        Args:
            llm_type: Which provider to create
            api_key: API key for the provider
            model: Model name to use
            provider_config: Additional provider configuration

        Returns:
            Configured provider instance
        """
        provider_config = provider_config or {}

        try:
            provider_cls = _PROVIDER_CLASSES[LLMType(llm_type)]
        except ValueError:
            raise ValueError(f"Unknown LLM type: {llm_type}")

        return provider_cls(
            api_key=api_key,
            model=model,
            timeout=provider_config.get("timeout", config.HTTP_TIMEOUT),
            **{k: v for k, v in provider_config.items() if k != "timeout"},
        )

    @staticmethod
    def create_default_provider() -> BaseProvider:
        """
        Create the configured primary provider.

        Raises:
            ValueError: If the API key for the primary provider is not set
        """
        llm_type = LLMType(config.PRIMARY_PROVIDER or LLMType.GROQ.value)

        if llm_type == LLMType.CEREBRAS:
            api_key, model = config.CEREBRAS_API_KEY, config.CEREBRAS_MODEL
        else:
            api_key, model = config.GROQ_API_KEY, config.GROQ_MODEL

        if not api_key:
            raise ValueError(
                f"{llm_type.value.upper()}_API_KEY not set. Configure it in .env file."
            )

        logger.debug(f"Creating default provider: {llm_type.value} ({model})")
        return ProviderFactory.create_provider(llm_type, api_key, model)

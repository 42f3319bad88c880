"""
Base Provider Abstract Class for LLM APIs.

Single-shot text generation plus model listing.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Any
import logging

logger = logging.getLogger(__name__)


class BaseProvider(ABC):
    """
    Abstract base class for all LLM providers.

    Implementations raise BackendUnavailable when the API call fails and
    InvalidResponse when the reply carries no message.
    """

    def __init__(self, api_key: str, model: str, timeout: float = 30.0, **kwargs):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.config = kwargs
        self.client = None

    @abstractmethod
    async def initialize(self) -> bool:
        """Initialize the provider client. Returns True on success."""
        pass

    @abstractmethod
    async def generate(
        self,
        messages: List[Dict[str, Any]],
        system_prompt: Optional[str] = None,
        model_id: Optional[str] = None,
        max_tokens: int = 200,
        temperature: float = 0.1,
        **kwargs,
    ) -> str:
        """Generate a text completion. May return an empty string."""
        pass

    @abstractmethod
    async def list_models(self) -> List[str]:
        """Return the model identifiers available to the configured key."""
        pass

    @abstractmethod
    def format_messages(
        self,
        messages: List[Dict[str, Any]],
        system_prompt: Optional[str] = None,
    ) -> Any:
        """Convert standard messages to provider-specific format."""
        pass

    async def cleanup(self):
        """Clean up resources."""
        if hasattr(self.client, "close") and self.client:
            await self.client.close()

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(model='{self.model}')"

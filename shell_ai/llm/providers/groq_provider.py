"""
Groq Provider Implementation.

OpenAI-compatible provider. Primary provider for Shell AI due to fast
inference on small models.
"""

import logging
from typing import Dict, List, Optional, Any

import openai
from openai import AsyncOpenAI

from .base_provider import BaseProvider
from ..utils import convert_to_standard_messages, extract_text_from_content
from ...errors import BackendUnavailable, InvalidResponse

logger = logging.getLogger(__name__)


class GroqProvider(BaseProvider):
    """
    Groq provider using their OpenAI-compatible API.

    Default model: llama-3.1-8b-instant
    """

    default_base_url = "https://api.groq.com/openai/v1"
    label = "Groq"

    def __init__(self, api_key: str, model: str = "llama-3.1-8b-instant",
                 timeout: float = 30.0, **kwargs):
        super().__init__(api_key, model, timeout, **kwargs)
        self.base_url = kwargs.get("base_url", self.default_base_url)

    async def initialize(self) -> bool:
        """Initialize the API client."""
        try:
            self.client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
            logger.debug(f"Initialized {self.label} client with model: {self.model}")
            return True
        except Exception as e:
            logger.error(f"Failed to initialize {self.label} client: {e}")
            return False

    def format_messages(
        self,
        messages: List[Dict[str, Any]],
        system_prompt: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Convert standard messages to OpenAI ChatCompletion format."""
        standard_messages = convert_to_standard_messages(messages, system_prompt)
        chat_messages = []

        for msg in standard_messages:
            role = msg.get("role")
            content = msg.get("content")

            if role in ("system", "user", "assistant"):
                chat_messages.append({"role": role, "content": extract_text_from_content(content)})
            else:
                logger.warning(f"Dropping message with unsupported role: {role}")

        return chat_messages

    def _ensure_client(self):
        if not self.client:
            raise RuntimeError(f"{self.label} client not initialized. Call initialize() first.")

    async def generate(
        self,
        messages: List[Dict[str, Any]],
        system_prompt: Optional[str] = None,
        model_id: Optional[str] = None,
        max_tokens: int = 200,
        temperature: float = 0.1,
        **kwargs,
    ) -> str:
        """
        Generate a completion with a single request (no retry, no streaming).

        Raises:
            BackendUnavailable: the API call failed.
            InvalidResponse: the reply had no message.
        """
        self._ensure_client()

        model_name = model_id or self.model
        chat_params = {
            "model": model_name,
            "messages": self.format_messages(messages, system_prompt),
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        logger.debug(f"{self.label} request: model={model_name}, max_tokens={max_tokens}")

        try:
            response = await self.client.chat.completions.create(**chat_params)
        except openai.APIError as e:
            logger.error(f"{self.label} generate error: {e}")
            raise BackendUnavailable(str(e)) from e

        if not response.choices or response.choices[0].message is None:
            raise InvalidResponse(f"No message in {self.label} response")

        return extract_text_from_content(response.choices[0].message.content)

    async def list_models(self) -> List[str]:
        """List model ids visible to the API key."""
        self._ensure_client()
        try:
            page = await self.client.models.list()
        except openai.APIError as e:
            logger.error(f"{self.label} list models error: {e}")
            raise BackendUnavailable(str(e)) from e
        return sorted(m.id for m in page.data)

    async def cleanup(self):
        """Clean up client resources."""
        if self.client:
            await self.client.close()
        self.client = None

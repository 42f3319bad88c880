"""
LLM Manager for Shell AI.

Owns one provider for the lifetime of the process and exposes single-shot
generation and model listing.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional, List

from .provider_factory import ProviderFactory
from .providers.base_provider import BaseProvider
from .. import config_file
from ..errors import BackendUnavailable

logger = logging.getLogger(__name__)

# Debug log directory
_DEBUG_LOG_DIR = Path.home() / ".local" / "share" / "shell-ai"
_DEBUG_LOG_FILE = _DEBUG_LOG_DIR / "debug.log"


def _debug_enabled() -> bool:
    return bool(config_file.get("debug"))


def _debug_log(label: str, data: Any) -> None:
    """Append a timestamped entry to the debug log file."""
    if not _debug_enabled():
        return
    try:
        _DEBUG_LOG_DIR.mkdir(parents=True, exist_ok=True)
        with open(_DEBUG_LOG_FILE, "a") as f:
            ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
            f.write(f"\n{'='*72}\n")
            f.write(f"[{ts}] {label}\n")
            f.write(f"{'='*72}\n")
            if isinstance(data, (dict, list)):
                f.write(json.dumps(data, indent=2, default=str))
            else:
                f.write(str(data))
            f.write("\n")
    except Exception:
        pass  # never break a request for debug logging


class LLMManager:
    """
    Manages the provider lifecycle.

    The provider is injected; when omitted the configured default is built.
    """

    def __init__(self, provider: Optional[BaseProvider] = None):
        self.provider = provider or ProviderFactory.create_default_provider()
        self._ready = False

    async def initialize(self) -> bool:
        """Initialize the provider client."""
        try:
            self._ready = await self.provider.initialize()
        except Exception as e:
            logger.error(f"Error initializing {self.provider}: {e}")
            self._ready = False
        if not self._ready:
            logger.error(f"Failed to initialize {self.provider}")
        return self._ready

    def _check_ready(self):
        if not self._ready:
            raise BackendUnavailable(f"{self.provider} is not initialized")

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
        Send exactly one request to the provider and return its text.

        Raises:
            BackendUnavailable, InvalidResponse: propagated from the provider.
        """
        self._check_ready()

        _debug_log("REQUEST", {
            "provider": str(self.provider),
            "system_prompt": system_prompt,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })

        try:
            response = await self.provider.generate(
                messages=messages,
                system_prompt=system_prompt,
                model_id=model_id,
                max_tokens=max_tokens,
                temperature=temperature,
                **kwargs,
            )
        except Exception as e:
            _debug_log("ERROR", repr(e))
            raise

        _debug_log("RESPONSE", response)
        return response

    async def list_models(self) -> List[str]:
        self._check_ready()
        return await self.provider.list_models()

    async def cleanup(self):
        """Clean up the provider."""
        try:
            await self.provider.cleanup()
        except Exception as e:
            logger.error(f"Cleanup error: {e}")
        self._ready = False

"""
Cerebras Provider Implementation.

Cerebras also exposes an OpenAI-compatible API, so this only swaps the
endpoint and default model.
"""

from .groq_provider import GroqProvider


class CerebrasProvider(GroqProvider):
    """Cerebras provider. Default model: llama-3.3-70b"""

    default_base_url = "https://api.cerebras.ai/v1"
    label = "Cerebras"

    def __init__(self, api_key: str, model: str = "llama-3.3-70b",
                 timeout: float = 30.0, **kwargs):
        super().__init__(api_key, model, timeout, **kwargs)

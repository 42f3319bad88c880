"""
Configuration for Shell AI services.

Loads API keys, model settings and the history database URL from .env,
with optional overrides from ~/.config/shell-ai/config.toml.
"""

import os
import logging
from pathlib import Path
from dotenv import load_dotenv

from .. import config_file

logger = logging.getLogger(__name__)

# Load .env from project root (shell_ai/llm/config.py -> shell_ai/ -> project root)
_env_paths = [
    Path(__file__).parent.parent.parent / ".env",  # project_root/.env
    Path.cwd() / ".env",
]

_env_loaded = False
for _env_path in _env_paths:
    if _env_path.exists():
        load_dotenv(dotenv_path=_env_path)
        logger.debug(f"Loaded .env from {_env_path}")
        _env_loaded = True
        break

if not _env_loaded:
    logger.debug(".env not found; using environment variables if set.")

# API Keys
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
CEREBRAS_API_KEY = os.getenv("CEREBRAS_API_KEY")

# Model defaults: config.toml overrides env vars, which override hardcoded defaults
_cfg_model = config_file.get("model")
GROQ_MODEL = _cfg_model or os.getenv("SHELL_AI_GROQ_MODEL", "llama-3.1-8b-instant")
CEREBRAS_MODEL = _cfg_model or os.getenv("SHELL_AI_CEREBRAS_MODEL", "llama-3.3-70b")

# Primary provider from config
PRIMARY_PROVIDER = config_file.get("provider")

HTTP_TIMEOUT = int(os.getenv("SHELL_AI_TIMEOUT", "30"))

# History store (hosted Postgres); unset disables history
DATABASE_URL = os.getenv("DATABASE_URL")

# HTTP server bind
HOST = os.getenv("SHELL_AI_HOST", "127.0.0.1")
PORT = int(os.getenv("SHELL_AI_PORT", "8000"))

"""
Request/response schemas for the Shell AI HTTP API.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import Mode


class TranslateRequest(BaseModel):
    """Body of POST /api/translate. Accepts `userId` or `user_id`."""
    model_config = ConfigDict(populate_by_name=True)

    prompt: str = ""
    mode: Optional[Mode] = None
    user_id: Optional[str] = Field(default=None, alias="userId")


class TranslateResponse(BaseModel):
    command: str
    dangerous: bool


class ErrorResponse(BaseModel):
    error: str


class ModelsResponse(BaseModel):
    count: int
    available_models: List[str]

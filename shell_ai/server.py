"""
HTTP surface for Shell AI.

POST /api/translate     translate a prompt (generate or explain)
GET  /api/history       recent translations, global or per user
GET  /api/check-models  models visible to the configured key (diagnostic)
GET  /health
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .errors import ShellAIError, ValidationFailure
from .history import HistoryRelay, create_history_relay
from .llm import config
from .llm.manager import LLMManager
from .models import Mode, Scope
from .schemas import ErrorResponse, ModelsResponse, TranslateRequest, TranslateResponse
from .translator import TranslationService

logger = logging.getLogger(__name__)

TRANSLATE_FAILURE = "Failed to generate command"
MODELS_FAILURE = "Failed to list models"

router = APIRouter()


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(ErrorResponse(error=message).model_dump(), status_code=status_code)


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.post(
    "/api/translate",
    response_model=TranslateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def translate(body: TranslateRequest, request: Request, background_tasks: BackgroundTasks):
    translator: TranslationService = request.app.state.translator
    history: HistoryRelay = request.app.state.history
    mode = body.mode or Mode.GENERATE

    try:
        result = await translator.translate(body.prompt, mode)
    except ValidationFailure as e:
        return _error(str(e), 400)
    except ShellAIError as e:
        logger.error(f"Translate failed ({type(e).__name__}): {e}")
        return _error(TRANSLATE_FAILURE, 500)
    except Exception:
        logger.exception("Unexpected translate failure")
        return _error(TRANSLATE_FAILURE, 500)

    # Runs after the response is sent
    background_tasks.add_task(history.record, result, body.prompt, mode, body.user_id)

    return TranslateResponse(command=result.text, dangerous=result.dangerous)


@router.get("/api/history")
async def list_history(
    request: Request,
    scope: Scope = Scope.GLOBAL,
    user_id: Optional[str] = Query(default=None, alias="userId"),
    limit: Optional[int] = None,
):
    history: HistoryRelay = request.app.state.history
    records = await history.list(scope, user_id=user_id, limit=limit)
    return {"history": [r.to_dict() for r in records]}


@router.get(
    "/api/check-models",
    response_model=ModelsResponse,
    responses={500: {"model": ErrorResponse}},
)
async def check_models(request: Request):
    manager: LLMManager = request.app.state.manager
    try:
        models = await manager.list_models()
    except ShellAIError as e:
        logger.error(f"Model listing failed: {e}")
        return _error(MODELS_FAILURE, 500)
    return ModelsResponse(count=len(models), available_models=models)


async def _validation_error(request: Request, exc: RequestValidationError):
    logger.debug(f"Rejected request to {request.url.path}: {exc.errors()}")
    return _error("Invalid request", 400)


def create_app(
    manager: Optional[LLMManager] = None,
    history: Optional[HistoryRelay] = None,
) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        manager: LLM manager; the configured default provider when omitted
        history: History relay; built from DATABASE_URL when omitted
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        llm = manager or LLMManager()
        await llm.initialize()
        app.state.manager = llm
        app.state.translator = TranslationService(llm)
        app.state.history = history or create_history_relay(config.DATABASE_URL)
        logger.info(
            f"Shell AI ready: provider={llm.provider}, history={'on' if app.state.history.enabled else 'off'}"
        )
        try:
            yield
        finally:
            await llm.cleanup()

    app = FastAPI(title="Shell AI", lifespan=lifespan)
    app.include_router(router)
    app.add_exception_handler(RequestValidationError, _validation_error)
    return app

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from wp_assistant.api.schemas import AskRequest, AskResponse, AssistResponse, ThemeArchiveRequest
from wp_assistant.config import get_settings
from wp_assistant.errors import (
    INVALID_FILES_MESSAGE,
    CompletionError,
    EmptyFileSetError,
    InvalidRequestError,
    OutOfScopeError,
    PackagingError,
)
from wp_assistant.service.assistant import AssistantService
from wp_assistant.theme.packager import ARCHIVE_FILE_NAME

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

ASK_PATH = "/api/ask-wordpress"
ASSIST_PATH = "/api/assist"
ARCHIVE_PATH = "/api/theme-archive"
ASK_FAILED_MESSAGE = "Error generating response. Please try again later."

app = FastAPI(title="wp-assistant", version="0.1.0")
service = AssistantService()


def _message(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, **extra})


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code == 405:
        return _message(405, "Method not allowed")
    return await http_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    if request.url.path == ARCHIVE_PATH:
        return _message(400, INVALID_FILES_MESSAGE)
    return _message(400, InvalidRequestError.default_message)


@app.get("/healthz")
async def healthz() -> dict:
    return {"status": "ok"}


@app.post(ASK_PATH, response_model=AskResponse)
async def ask_wordpress(req: AskRequest):
    try:
        result = await service.ask(req.prompt)
    except (InvalidRequestError, OutOfScopeError) as exc:
        return _message(400, exc.message)
    except CompletionError as exc:
        logger.error("ask.error detail=%s", exc.message)
        extra = {} if get_settings().is_production else {"error": exc.message}
        return _message(500, ASK_FAILED_MESSAGE, **extra)
    return AskResponse(**result)


@app.post(ASSIST_PATH, response_model=AssistResponse)
async def assist(req: AskRequest):
    result = await service.assist(req.prompt)
    if isinstance(result.error, (InvalidRequestError, OutOfScopeError)):
        return _message(400, result.error.message)
    if result.error is not None:
        return _message(500, result.error.message)
    return AssistResponse(**result.as_payload())


@app.post(ARCHIVE_PATH)
def theme_archive(req: ThemeArchiveRequest) -> Response:
    try:
        blob = service.build_theme_archive(req.files)
    except EmptyFileSetError as exc:
        return _message(400, exc.message)
    except PackagingError:
        logger.exception("archive.error")
        return _message(500, PackagingError.default_message)
    return Response(
        content=blob,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{ARCHIVE_FILE_NAME}"'},
    )


def main() -> None:
    settings = get_settings()
    uvicorn.run("wp_assistant.api.app:app", host=settings.host, port=settings.port)

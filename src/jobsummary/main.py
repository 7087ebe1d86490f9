import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict

import uvicorn
from fastapi import Body, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from jobsummary.agents.summarizer import JobSummarizerAgent
from jobsummary.errors import InvalidSummaryRequest, SummaryError
from jobsummary.llm import build_chat_llm, build_http_client, require_api_key
from jobsummary.logger import configure_logging
from jobsummary.models import SummaryMetadata, SummaryResponse
from jobsummary.settings import settings
from jobsummary.validation import validate_summary_request

SERVICE_NAME = "1-Click Job Summary API"
SERVICE_VERSION = "1.0.0"
ENDPOINTS = {
    "health": "GET /health",
    "summarize": "POST /summarize",
}

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    # no key, no service: fail the startup instead of every request
    require_api_key()
    # one chat model and connection pool for the whole process
    http_client = build_http_client()
    app.state.llm = build_chat_llm(http_async_client=http_client)
    logger.info("%s running, model %s", SERVICE_NAME, settings.model_name)
    try:
        yield
    finally:
        await http_client.aclose()
        logger.info("%s shutting down", SERVICE_NAME)


BODY_TOO_LARGE = "Request body too large"


class BodySizeLimitMiddleware:
    """Reject bodies over `settings.max_body_bytes`, declared or streamed."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        limit = settings.max_body_bytes
        length = Headers(scope=scope).get("content-length")
        if length and length.isdigit() and int(length) > limit:
            response = JSONResponse(status_code=413, content={"error": BODY_TOO_LARGE})
            await response(scope, receive, send)
            return

        # chunked bodies carry no length, so count what actually arrives
        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > limit:
                    raise HTTPException(status_code=413, detail=BODY_TOO_LARGE)
            return message

        await self.app(scope, limited_receive, send)


app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION, lifespan=lifespan)
app.add_middleware(BodySizeLimitMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)


def get_summarizer(request: Request) -> JobSummarizerAgent:
    return JobSummarizerAgent(llm=request.app.state.llm)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _summary_failed(exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": "Failed to generate summary", "message": str(exc)},
    )


@app.exception_handler(InvalidSummaryRequest)
async def invalid_request_handler(request: Request, exc: InvalidSummaryRequest):
    logger.info("Rejected summarize request: %s", exc)
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def body_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Request body must be a JSON object"})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # a known path with the wrong method is still no endpoint
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content={"error": "Endpoint not found", "availableEndpoints": ENDPOINTS},
        )
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(Exception)
async def server_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled server error")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": str(exc)},
    )


@app.get("/")
async def root():
    return {"message": SERVICE_NAME, "version": SERVICE_VERSION, "endpoints": ENDPOINTS}


@app.get("/health")
async def health():
    return {"status": "healthy", "timestamp": _now().isoformat(), "service": SERVICE_NAME}


@app.post("/summarize")
async def summarize_endpoint(
    payload: Dict[str, Any] = Body(...),
    agent: JobSummarizerAgent = Depends(get_summarizer),
):
    request = validate_summary_request(payload)
    logger.info(
        "Summarizing %d chars (length=%s, focus=%s, format=%s)",
        len(request.job_text), request.length, request.focus, request.format,
    )
    try:
        summary = await agent.run(request)
    except SummaryError as exc:
        logger.error("Summarize failed: %s", exc)
        return _summary_failed(exc)
    except Exception as exc:
        logger.exception("Unexpected summarize failure")
        return _summary_failed(exc)
    response = SummaryResponse(
        summary=summary,
        metadata=SummaryMetadata(**request.options.model_dump(), timestamp=_now()),
    )
    return response.to_wire()


def run(host: str = None, port: int = None, reload: bool = False):
    configure_logging(settings.log_level)
    uvicorn.run(
        "jobsummary.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


if __name__ == "__main__":
    run()

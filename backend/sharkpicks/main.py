import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from sharkpicks.api.router import api_router
from sharkpicks.config import settings

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
logger = logging.getLogger(__name__)

LOG_LINE_MAX_LENGTH = 80


def format_request_log_line(method: str, path: str, status_code: int, duration_ms: int, body: str | None = None) -> str:
    line = f"{method} {path} {status_code} in {duration_ms}ms"
    if body:
        line += f" :: {body}"
    if len(line) > LOG_LINE_MAX_LENGTH:
        line = line[: LOG_LINE_MAX_LENGTH - 1] + "…"
    return line


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.odds_api_key:
        logger.error("ODDS_API_KEY is missing; odds and shark picks endpoints will return 500")
    logger.info("%s started", settings.app_name)
    yield
    logger.info("%s stopped", settings.app_name)


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_api_requests(request: Request, call_next):
    if not request.url.path.startswith("/api"):
        return await call_next(request)

    start = time.perf_counter()
    status_code = 500
    body: str | None = None
    try:
        response = await call_next(request)
        status_code = response.status_code
        if response.headers.get("content-type", "").startswith("application/json"):
            raw = b"".join([chunk async for chunk in response.body_iterator])
            body = raw.decode("utf-8", errors="replace")
            response = Response(content=raw, status_code=status_code, headers=dict(response.headers))
        return response
    finally:
        # unhandled errors leave call_next by raising; they still get a 500 line
        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.info("%s", format_request_log_line(request.method, request.url.path, status_code, duration_ms, body))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404 and exc.detail == "Not Found":
        error = "API endpoint not found" if request.url.path.startswith("/api") else "Page not found"
        return JSONResponse(status_code=404, content={"error": error})
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": str(exc) or "Internal Server Error"})


app.include_router(api_router, prefix="/api")

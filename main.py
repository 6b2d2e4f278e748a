# main.py

import logging
import traceback
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.openapi.docs import get_redoc_html, get_swagger_ui_html
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import DEBUG_MODE, HOST, LOG_DB_PATH, MAX_LOG_ENTRIES, PORT, WEBHOOK_SECRET
from logging_config import setup_logging

# Routers
from routers.health import router as health_router
from routers.webhook import router as webhook_router

# Initialize logging once
setup_logging(DEBUG_MODE, LOG_DB_PATH, MAX_LOG_ENTRIES)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"HookScout started on port {PORT} "
        f"(debug={DEBUG_MODE}, webhook secret configured={bool(WEBHOOK_SECRET)})"
    )
    yield
    logger.info("HookScout shutting down gracefully.")


app = FastAPI(
    title="HookScout",
    description="Signed GitHub push receiver that classifies changed files",
    version="1.0.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(webhook_router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        logger.warning(
            f"404 - Route not found: {request.method} {request.url.path} "
            f"(user agent: {request.headers.get('User-Agent')})"
        )
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Not Found", "message": "Route not found"},
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    error_trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}\n{error_trace}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error", "message": "An unexpected error occurred"},
    )


@app.get("/openapi.json", include_in_schema=False)
def get_open_api_endpoint():
    return get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes
    )


@app.get("/docs", include_in_schema=False)
def custom_swagger_ui():
    return get_swagger_ui_html(
        openapi_url="/openapi.json",
        title=app.title,
        swagger_ui_parameters={"syntaxHighlight.theme": "obsidian"},
    )


@app.get("/redoc", include_in_schema=False)
def custom_redoc_ui():
    return get_redoc_html(
        openapi_url="/openapi.json",
        title=app.title
    )


def run():
    uvicorn.run(app, host=HOST, port=PORT, log_config=None)


if __name__ == "__main__":
    run()

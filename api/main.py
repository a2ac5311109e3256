from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

import aiosqlite
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from codes import router as codes_router
from core import db
from core.logging_config import setup_logging
from incidents import router as incidents_router
from neighborhoods import router as neighborhoods_router

setup_logging()

logger = logging.getLogger(__name__)


def cors_allow_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOW_ORIGINS", "").strip() or "*"
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Open the database once per process; a failed open is logged, not fatal.
    app.state.store = await db.open_store()
    try:
        yield
    finally:
        await app.state.store.close()


app = FastAPI(lifespan=lifespan)

# The public dataset is readable from any origin unless CORS_ALLOW_ORIGINS narrows it.
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allow_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def plain_text_http_error(_: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    # Errors are plain text; clients never get a JSON error body.
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


# A body that is not a JSON object fails the same way a rejected write does.
BODY_ERROR_MESSAGES = {
    "/new-incident": "Error inserting incident",
    "/remove-incident": "Error deleting incident",
}


@app.exception_handler(RequestValidationError)
async def plain_text_validation_error(request: Request, exc: RequestValidationError) -> PlainTextResponse:
    message = BODY_ERROR_MESSAGES.get(request.url.path)
    logger.error("request_rejected path=%s errors=%s", request.url.path, exc.errors())
    if message is None:
        return PlainTextResponse("Invalid request", status_code=422)
    return PlainTextResponse(message, status_code=500)


app.include_router(codes_router.router, tags=["codes"])
app.include_router(neighborhoods_router.router, tags=["neighborhoods"])
app.include_router(incidents_router.router, tags=["incidents"])


@app.get("/health")
async def health(request: Request) -> dict:
    store = db.get_store(request)
    if not store.is_open:
        return {"status": "ok", "database": False}
    try:
        row = await store.fetch_one("SELECT 1 AS ok")
    except aiosqlite.Error:
        logger.exception("health_check_failed")
        row = None
    return {"status": "ok", "database": row is not None}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", "8000")))

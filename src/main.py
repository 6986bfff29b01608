from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.adapters.api.controllers.feeds import router as feeds_router
from src.adapters.api.controllers.realtime import router as realtime_router
from src.adapters.api.dependencies import (
    build_feed_store,
    build_realtime_view_service,
)
from src.domain.exceptions import FeedDecodeError, TransitDataError

app = FastAPI(title="RTD Transit")
app.include_router(feeds_router)
app.include_router(realtime_router)

app.state.feed_store = build_feed_store()
app.state.realtime_view_service = build_realtime_view_service(app.state.feed_store)


@app.exception_handler(FeedDecodeError)
async def feed_decode_error_handler(
    request: Request, exc: FeedDecodeError
) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(TransitDataError)
async def transit_data_error_handler(
    request: Request, exc: TransitDataError
) -> JSONResponse:
    # Stop table problems: the service cannot answer until the file is fixed.
    logging.getLogger("uvicorn.error").error(
        "Transit data unavailable: %s", exc, extra={"path": str(request.url.path)}
    )
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Ensure API errors are JSON so map clients can display them."""

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    reveal = (os.getenv("RTD_REVEAL_ERRORS") or "").strip().lower() in {
        "1",
        "true",
        "yes",
        "on",
    }

    if reveal:
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}

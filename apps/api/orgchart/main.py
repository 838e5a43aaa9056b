from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from orgchart.api import router as api_router
from orgchart.core.config import get_settings
from orgchart.core.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)
    app = FastAPI(title="Org Chart API", version="0.1.0")

    @app.middleware("http")
    async def limit_request_size(request: Request, call_next):
        length = request.headers.get("content-length")
        if length and length.isdigit() and int(length) > settings.max_request_bytes:
            return JSONResponse(status_code=413, content={"detail": "Request body too large"})
        return await call_next(request)

    # CORS stays outermost so 413 responses carry CORS headers too.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    # Photos are served from the root, after every API route.
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/", StaticFiles(directory=settings.upload_dir), name="photos")

    logger.info("Serving photos from %s at %s", settings.upload_dir, settings.public_base_url)
    return app


app = create_app()

"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from graylab import __version__
from graylab.config import settings
from graylab.engine.registry import register_steps

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.graylab_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="graylab",
        description="Grayscale raster analysis — Otsu thresholding, region labeling, moments, template matching",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all step modules to trigger registration
    register_steps()

    from graylab.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()

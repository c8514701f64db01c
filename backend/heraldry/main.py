"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from heraldry.config import settings
from heraldry.errors import AssetError, ShieldOutlineError, ValidationError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.heraldry_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Heraldry Engine",
        description="Procedural coats of arms: compositions to shield SVG and blazon",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)

    from heraldry.api.router import api_router

    app.include_router(api_router)

    return app


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _invalid_composition(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.problems})

    @app.exception_handler(ShieldOutlineError)
    async def _shield_outline(request: Request, exc: ShieldOutlineError) -> JSONResponse:
        logger.error("Shield outline %s unavailable: %s", exc.asset_id, exc)
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    @app.exception_handler(AssetError)
    async def _asset(request: Request, exc: AssetError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})


app = create_app()

"""Allie relay server - Main entry point."""
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from allie.api.dependencies import Services, build_services
from allie.api.routes import error_response, router
from allie.core.config import Settings, get_config_source, settings as default_settings
from allie.core.errors import ErrorKind
from allie.core.logging import logger


def create_app(settings: Optional[Settings] = None, services: Optional[Services] = None) -> FastAPI:
    """Build the FastAPI app; tests pass their own ``services``."""
    settings = settings or default_settings

    app = FastAPI(
        title="Allie",
        description="Artificial Language Learning & Interaction Engine relay server",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.services = services or build_services(settings)
    app.include_router(router)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Rejected request to {request.url.path}: {exc.errors()}")
        return error_response("Invalid request body", ErrorKind.VALIDATION)

    @app.on_event("startup")
    async def startup_event():
        logger.info("=" * 60)
        logger.info("Allie relay server starting up")
        logger.info(f"LLM model: {settings.openai.chat_model} (from {get_config_source('openai.chat_model')})")
        logger.info(f"Uploads directory: {settings.uploads.directory}")
        logger.info(f"Schedule collection: {settings.firebase.collection}")
        logger.info("=" * 60)

    return app


def run():
    """Console entry point."""
    import os
    import uvicorn

    reload = os.getenv("ALLIE_DEV_MODE", "false").lower() == "true"
    uvicorn.run(
        "allie.main:create_app",
        factory=True,
        host=default_settings.server.host,
        port=default_settings.server.port,
        reload=reload,
        log_level="info",
    )


if __name__ == "__main__":
    run()

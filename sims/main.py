from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from sims.config.settings import settings
from sims.utils.logging import get_logger
from sims.routers import main_router
from sims.utils.errors import setup_error_handlers
from sims.middlewares import (
    RequestIDMiddleware,
    DevSecurityMiddleware,
    ProdSecurityMiddleware,
)

PUBLIC_DIR = Path(__file__).resolve().parent / "public"

# Initialize the logger
logger = get_logger()


@asynccontextmanager
async def lifespan(_: FastAPI):
    logger.info(f"{settings.NAME} is starting up...")
    logger.info(f"Data file: {settings.DATA_FILE.resolve()}")
    logger.info(
        f"LLM config: configured={settings.chat_settings().is_configured} model={settings.LLM_MODEL}"
    )
    yield
    logger.info(f"{settings.NAME} is shutting down...")


def create_application() -> FastAPI:
    """Initialize the FastAPI application with settings and lifespan events."""
    application = FastAPI(
        title=settings.NAME, version=settings.VERSION, lifespan=lifespan
    )

    # Setup error handlers
    setup_error_handlers(application)

    # Add CORS middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_HOSTS,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )

    # Add custom middlewares
    application.add_middleware(
        DevSecurityMiddleware
        if settings.ENVIRONMENT == "development"
        else ProdSecurityMiddleware
    )
    application.add_middleware(RequestIDMiddleware)

    # Routers
    application.include_router(main_router)

    # Static UI; the catch-all must be registered last
    application.mount("/static", StaticFiles(directory=PUBLIC_DIR), name="static")

    @application.get("/{full_path:path}", include_in_schema=False)
    async def single_page_app(full_path: str):
        return FileResponse(PUBLIC_DIR / "index.html")

    return application


app = create_application()


def run():
    import uvicorn

    uvicorn.run(
        "sims.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_config=None,
        log_level=None,
    )


if __name__ == "__main__":
    run()

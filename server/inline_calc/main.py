from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inline_calc.api.routes import calculator, completion
from inline_calc.core.config import get_settings
from inline_calc.core.exceptions import register_exception_handlers
from inline_calc.core.logging import configure_logging
from inline_calc.core.middleware import RequestContextMiddleware


def create_app() -> FastAPI:
    """
    Application factory for the inline calculator backend.
    Routes are attached in their respective modules and imported here.
    """

    configure_logging()
    settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        description="Evaluates arithmetic expressions and suggests their literal result.",
        version=settings.api_version,
    )

    cors_origins = settings.resolved_cors_origins
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)
    app.add_middleware(RequestContextMiddleware)

    app.include_router(calculator.router)
    app.include_router(completion.router)

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()

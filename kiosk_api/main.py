"""
This module creates and configures the main FastAPI application for the
kiosk electricity API.

Features:
    - Appliance run-time recommendations from labeled price windows
    - Price ingestion with day-ahead / real-time / simulated fallback
    - Same-weekday hourly averages and daily summaries
    - Optional periodic ingestion bound to the app lifespan
    - CORS-enabled for the kiosk web UI

API Categories:
    - System Information: health and API metadata
    - Recommendations: best appliance window and today's windows
    - Ingestion: manual ingestion and scheduler status
    - Historical Trends: hourly averages and daily summary
"""

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .controllers import electricity_controller
from .config import app_config
from .services import lifespan


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application with all routes under /api.
    """
    configure_logging(logging.DEBUG if app_config.is_debug else logging.INFO)

    app = FastAPI(
        title=app_config.api.title,
        description=app_config.api.description,
        version=app_config.api.version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "System Information",
                "description": "API health and version info"
            },
            {
                "name": "Recommendations",
                "description": "Best appliance run windows and today's labeled windows"
            },
            {
                "name": "Ingestion",
                "description": "Price fetching, window rebuilding and the periodic scheduler"
            },
            {
                "name": "Historical Trends",
                "description": "Same-weekday hourly averages and today's summary"
            }
        ]
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_config.api.allow_origins,
        allow_credentials=app_config.api.allow_credentials,
        allow_methods=app_config.api.allow_methods,
        allow_headers=app_config.api.allow_headers,
    )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        # Clients expect {"error": message} bodies
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        return JSONResponse(status_code=422, content={"error": f"Invalid request: {problems}"})

    app.include_router(
        electricity_controller.router,
        prefix="/api",
    )

    return app


# Create the app instance
app = create_app()


def run():
    """Console entry point: serve the API with uvicorn."""
    import uvicorn
    uvicorn.run(
        "kiosk_api.main:app",
        host=app_config.api.host,
        port=app_config.api.port,
        reload=app_config.api.reload
    )


if __name__ == "__main__":
    run()

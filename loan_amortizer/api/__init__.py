"""
Loan Amortizer API Application Factory
"""

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .schedules import router as schedules_router
from .frequencies import router as frequencies_router
from .. import __version__
from ..config import get_config
from ..logging_config import setup_logging


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title="Loan Amortizer API",
        description="Loan amortization schedules with insurance and extra payments",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(schedules_router, prefix="/schedules", tags=["Schedules"])
    app.include_router(frequencies_router, prefix="/frequencies", tags=["Frequencies"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "loan_amortizer_api",
            "version": __version__
        }

    @app.get("/")
    async def get_api_info():
        """Get API information"""
        return {
            "name": "Loan Amortizer API",
            "version": __version__,
            "endpoints": {
                "docs": "/docs",
                "health": "/health",
                "schedules": "/schedules",
                "export": "/schedules/export",
                "frequencies": "/frequencies",
            }
        }

    return app


def run_server(host: str = None, port: int = None):
    """Run the API with uvicorn using configured host/port"""
    settings = get_config()
    setup_logging(settings.log_level, log_format=settings.log_format, log_file=settings.log_file)
    uvicorn.run(
        create_app(),
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_level=settings.log_level.lower()
    )

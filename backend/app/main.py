"""Main FastAPI application."""
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.api import auth, categories, contact, site_config, videos
from app.database import init_db
from app.utils.exceptions import register_exception_handlers
from app.utils.logger import logger
from app.utils.rate_limit import RateLimiter, rate_limit_middleware

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"Video portfolio API started ({settings.environment})")
    yield


def create_app(rate_limiter: Optional[RateLimiter] = None) -> FastAPI:
    """
    Build the application.

    Args:
        rate_limiter: Limiter to enforce; defaults to the configured per-address window

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Video Portfolio API",
        description="Backend API for the video portfolio website",
        version="1.0.0",
        lifespan=lifespan,
    )

    limiter = rate_limiter or RateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.state.rate_limiter = limiter

    # Middleware registered later wraps earlier ones, so rejected requests
    # still pass through the access log below
    app.middleware("http")(rate_limit_middleware(limiter))

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers.update(SECURITY_HEADERS)
        logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms")
        return response

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth.router)
    app.include_router(videos.router)
    app.include_router(categories.router)
    app.include_router(contact.router)
    app.include_router(site_config.router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Video portfolio API is running",
            "version": "1.0.0",
            "docs": "/docs",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.api_host, port=settings.api_port, reload=settings.is_development)

from contextlib import asynccontextmanager
import time
from typing import Iterable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from auth import AuthConfig, Authentik, load_config
from auth.guard import DEFAULT_PUBLIC_PATHS
from logging_config import get_colorful_logger
from routers import include_routers

logger = get_colorful_logger(__name__)


async def log_requests(request: Request, call_next):
    start_time = time.time()
    logger.info(f"Request: {request.method} {request.url.path}")

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(f"Response: {response.status_code} ({process_time:.2f}s)")
    return response


def create_app(
    config: Optional[AuthConfig] = None,
    public_paths: Iterable[str] = DEFAULT_PUBLIC_PATHS,
    cors_origins: Iterable[str] = ("*",),
) -> FastAPI:
    """
    Build the API. Without an explicit config, load it from auth.json / env
    once at startup.
    """
    if config is None:
        config = load_config()
    authentik = Authentik(config)
    logger.info("Auth config: %s", config.snapshot())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Auth system ready (basic_auth=%s)", config.basic_auth_configured)
        yield
        logger.info("Shutting down")

    app = include_routers(FastAPI(lifespan=lifespan))
    app.state.authentik = authentik

    # Starlette runs the last added middleware first: CORS, logging, then the guard
    authentik.install(app, public_paths=public_paths)
    app.add_middleware(BaseHTTPMiddleware, dispatch=log_requests)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:create_app", factory=True, host="0.0.0.0", port=1145, workers=1)

import asyncio
import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.router import api_router
from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.limiter import limiter
from app.db import init_db

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)
http_logger = logging.getLogger("app.http")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_db()
    logger.info("%s started (environment=%s)", settings.PROJECT_NAME, settings.ENVIRONMENT)
    yield


def create_application() -> FastAPI:
    app = FastAPI(title=settings.PROJECT_NAME, version="0.1.0", lifespan=lifespan)

    origins = list(dict.fromkeys([*settings.BACKEND_CORS_ORIGINS, settings.FRONTEND_URL]))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        try:
            if settings.REQUEST_TIMEOUT_SECONDS > 0:
                response = await asyncio.wait_for(
                    call_next(request), timeout=settings.REQUEST_TIMEOUT_SECONDS
                )
            else:
                response = await call_next(request)
        except asyncio.TimeoutError:
            http_logger.error(
                "%s %s timed out after %.1fs",
                request.method,
                request.url.path,
                settings.REQUEST_TIMEOUT_SECONDS,
            )
            return JSONResponse(
                status_code=status.HTTP_504_GATEWAY_TIMEOUT,
                content={"message": "Request timed out"},
            )
        elapsed_ms = (time.perf_counter() - started) * 1000
        http_logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    app.state.limiter = limiter
    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    return app


app = create_application()

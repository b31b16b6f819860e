from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config.settings import settings
import time
import uuid
import logging

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

def setup_middleware(app: FastAPI):
    """Configure all middleware for the application"""

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
        max_age=3600
    )

    @app.middleware("http")
    async def log_requests(request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        start_time = time.perf_counter()

        response = await call_next(request)

        # Matched route template, e.g. /api/v1/products/{product_id}
        route = request.scope.get("route")
        path = getattr(route, "path", request.url.path)
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            f"[{request_id}] {request.method} {path} -> {response.status_code} "
            f"({elapsed_ms:.1f} ms)"
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

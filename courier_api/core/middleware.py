# courier_api/core/middleware.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import time
import logging

from courier_api.config.settings import settings

logger = logging.getLogger(__name__)

def setup_middleware(app: FastAPI):
    """Configure all middleware for the application"""

    # CORS - the UI is served from a different origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        # Route template groups /couriers/7 and /couriers/8 under one line
        route = request.scope.get("route")
        route_path = getattr(route, "path", request.url.path)

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f"{request.method} {route_path} ({request.url.path}) - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response

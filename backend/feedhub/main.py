# FILE: backend/feedhub/main.py
# Middleware registration is reversed: the last one added runs first.
# Effective order: CORS -> token validation -> security headers -> gzip -> access log -> unhandled errors -> routes.

from fastapi import FastAPI, status
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles
import logging
import uvicorn

from feedhub.core.config import settings
from feedhub.core.errors import AppError, app_error_handler, unhandled_error_handler
from feedhub.core.lifespan import lifespan
from feedhub.core.middleware import (
    AccessLogMiddleware,
    CORSHeadersMiddleware,
    SecurityHeadersMiddleware,
    TokenValidationMiddleware,
    UnhandledErrorMiddleware,
)

# --- Router Imports ---
from feedhub.api.endpoints.images import router as images_router
from feedhub.api.endpoints.websockets import router as websockets_router
from feedhub.graphql.schema import graphql_router

logger = logging.getLogger(__name__)

def create_app() -> FastAPI:
    app = FastAPI(title="Feedhub API", lifespan=lifespan)

    # --- MIDDLEWARE ---
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(TokenValidationMiddleware)
    app.add_middleware(CORSHeadersMiddleware)

    # --- ERROR HANDLERS ---
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # --- ROUTES ---
    # The directory is created in lifespan; it may not exist at import time.
    app.mount("/images", StaticFiles(directory=settings.IMAGES_DIR, check_dir=False), name="images")
    app.include_router(images_router)
    app.include_router(websockets_router)
    app.include_router(graphql_router, prefix="/graphql")

    @app.get("/health", status_code=status.HTTP_200_OK, tags=["Health Check"])
    def health_check():
        return {"status": "ok", "version": "1.0.0"}

    return app

app = create_app()

def run():
    uvicorn.run("feedhub.main:app", host="0.0.0.0", port=settings.PORT)

if __name__ == "__main__":
    run()

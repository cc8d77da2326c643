from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Optional
import uvicorn
import logging

from image_dashboard.storage.s3 import S3Service
from image_dashboard.settings import Settings, settings as default_settings
from image_dashboard.routers.images import router as images_router
from image_dashboard.exceptions import add_exception_handlers

log = logging.getLogger("image-dashboard")

def create_app(
    settings: Optional[Settings] = None,
    s3: Optional[S3Service] = None,
) -> FastAPI:
    """
        Builds the gateway application.
        The S3 service is created from `settings` at startup unless one
        is passed in, and is closed on shutdown only when the app owns it.
    """
    settings = settings or default_settings
    logging.basicConfig(level=settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Initialize resources
        owned = s3 is None
        app.state.s3 = S3Service(settings) if owned else s3
        log.info("Serving bucket %s", app.state.s3.bucket)
        yield
        # Cleanup resources
        if owned:
            app.state.s3.close()

    app = FastAPI(
        title=settings.app_title,
        lifespan=lifespan,
        description="Image dashboard storage gateway",
    )
    app.state.settings = settings

    # Add exception handlers
    add_exception_handlers(app)

    # CORS - Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add the routers
    app.include_router(images_router)

    # Check Health
    @app.get("/")
    def read_root():
        """
            Default end point
        """
        return "Image Dashboard gateway is running."

    return app

app = create_app()

if __name__ == "__main__":
    uvicorn.run("image_dashboard.main:app", host="0.0.0.0", port=8000, reload=True)

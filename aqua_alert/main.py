from contextlib import asynccontextmanager
from time import time
import asyncio
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from .api import auth, notifications, hazards, sensors, alerts, reports, community, education, profile, home
from .core.config import settings
from .core.context import AppContext

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


def validate_config():
    """Validate configuration settings on startup."""
    if not 0.0 <= settings.SUBMISSION_FAILURE_RATE <= 1.0:
        raise RuntimeError(
            f"SUBMISSION_FAILURE_RATE must be between 0 and 1 (current: {settings.SUBMISSION_FAILURE_RATE})"
        )

    for name in ("NOTIFICATION_TIMEOUT_SECONDS", "SENSOR_REFRESH_SECONDS"):
        if getattr(settings, name) <= 0:
            raise RuntimeError(f"{name} must be positive (current: {getattr(settings, name)})")

    for name in ("REPORT_SUBMISSION_DELAY_SECONDS", "TRANSCRIPTION_DELAY_SECONDS"):
        if getattr(settings, name) < 0:
            raise RuntimeError(f"{name} must not be negative (current: {getattr(settings, name)})")

    if settings.is_production:
        localhost_origins = [o for o in settings.BACKEND_CORS_ORIGINS if "localhost" in o]
        if localhost_origins:
            logger.warning(
                f"WARNING: CORS origins contain localhost URLs in production: {localhost_origins}. "
                "Consider removing localhost from BACKEND_CORS_ORIGINS env var."
            )

    logger.info(f"Config validation passed. Production mode: {settings.is_production}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan events for startup and shutdown."""
    # Startup
    logger.info("Starting Aqua Alert API...")
    validate_config()

    context = AppContext(settings, loop=asyncio.get_running_loop())
    context.start()
    app.state.context = context

    if context.auth.is_authenticated:
        logger.info(f"Restored signed-in user {context.auth.user.email}")

    yield

    # Shutdown
    logger.info("Shutting down Aqua Alert API...")
    context.shutdown()
    logger.info("Application context torn down")


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        start = time()
        response = await call_next(request)
        duration_ms = int((time() - start) * 1000)
        logger.info("%s %s -> %s (%d ms)", request.method, request.url.path, response.status_code, duration_ms)
        return response


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

# Set all CORS enabled origins
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.add_middleware(RequestLoggerMiddleware)

api = settings.API_PREFIX
app.include_router(home.router, prefix=f"{api}/home", tags=["home"])
app.include_router(auth.router, prefix=f"{api}/auth", tags=["authentication"])
app.include_router(notifications.router, prefix=f"{api}/notifications", tags=["notifications"])
app.include_router(hazards.router, prefix=f"{api}/hazards", tags=["hazards"])
app.include_router(sensors.router, prefix=f"{api}/sensors", tags=["sensors"])
app.include_router(alerts.router, prefix=f"{api}/alerts", tags=["alerts"])
app.include_router(reports.router, prefix=f"{api}/reports", tags=["reports"])
app.include_router(community.router, prefix=f"{api}/community", tags=["community"])
app.include_router(education.router, prefix=f"{api}/education", tags=["education"])
app.include_router(profile.router, prefix=f"{api}/profile", tags=["profile"])

@app.get("/health")
def health_check():
    return {"status": "healthy"}

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from authgate.core.config import get_settings
from authgate.monitoring import MetricsMiddleware, router as monitoring_router
from authgate.routers import auth, health


logger = logging.getLogger(__name__)
settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(title=settings.app_name, version=settings.app_version)

app.add_middleware(MetricsMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.resolved_cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(health.router)
app.include_router(monitoring_router)

logger.info("%s %s ready", settings.app_name, settings.app_version)

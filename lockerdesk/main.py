import sys

from fastapi import FastAPI
from loguru import logger

from lockerdesk.infrastructure.config import settings
from lockerdesk.infrastructure.database import Base, engine
from lockerdesk.infrastructure.models import models  # noqa: F401  (registers tables)
from lockerdesk.presentation.routers import router

# ------------------------------------------------------------
# LOGURU CONFIGURATION
# ------------------------------------------------------------
logger.remove()
logger.add(
    sys.stdout,
    level=settings.log_level,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
           "<level>{level}</level> | "
           "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
           "<level>{message}</level>",
    backtrace=True,
    diagnose=False,
)

app = FastAPI(
    title="Lockerdesk",
    description="Locker key custody and loan history console.",
)


@app.on_event("startup")
def _log_startup() -> None:
    logger.info("Lockerdesk started (database: {})", engine.url.render_as_string(hide_password=True))


Base.metadata.create_all(bind=engine)
app.include_router(router)

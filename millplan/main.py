from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from . import __version__
from .config import settings
from .routers import projection, scenarios

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("millplan")

app = FastAPI(
    title=settings.APP_NAME,
    description="Annual financial projection for a paddy-to-poha mill",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(projection.router, prefix="/api")
app.include_router(scenarios.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "millplan", "version": __version__}


logger.info("%s %s ready", settings.APP_NAME, __version__)

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from orbit import __version__
from orbit.core.config import settings
from orbit.core.logger import setup_logging
from orbit.core.database import engine, Base
from orbit.models import user, task, reflection, message, focus_session  # noqa: F401 (tables)
from orbit.routers import health, tasks, reflections, contextual, messages, sessions

setup_logging()
logger = logging.getLogger(__name__)

# Init DB
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Orbit API",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",")],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    # jamais de stack trace côté client
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Routes
app.include_router(health.router)
app.include_router(tasks.router)
app.include_router(reflections.router)
app.include_router(contextual.router)
app.include_router(messages.router)
app.include_router(sessions.router)

# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.core.config import get_settings
from app.core.logging_config import configure_logging
from app.schemas.ticket import SaveTicketError

# Routers
from app.routers.tickets import router as tickets_router

settings = get_settings()

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Report where tickets are logged and which static dir is served.

    Shutdown:
      - Nothing to clean up; every save opens and closes the manifest.
    """
    logger.info("Ticket log: %s", settings.MANIFEST_PATH)
    if settings.STATIC_DIR.is_dir():
        logger.info("Serving static files from %s", settings.STATIC_DIR)
    else:
        logger.warning("Static dir %s not found, only the API is served", settings.STATIC_DIR)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME or "Dessert POS",
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=SaveTicketError().model_dump(exclude_none=True),
    )


app.include_router(tickets_router)


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok", "service": "dessert-pos"}


# Catch-all static files, mounted last so the API routes win.
# html=True serves index.html for "/".
if settings.STATIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")

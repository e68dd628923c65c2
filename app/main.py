import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .database.dynamodb import create_table_if_not_exists, get_db_connection
from .logging_config import setup_logging
from .routers import events

settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.backend == "dynamodb" and settings.create_table_on_startup:
        try:
            create_table_if_not_exists(get_db_connection(settings), settings.table_name)
        except Exception as e:
            logger.error(f"Startup failed: {e}")
            raise
    yield


app = FastAPI(
    title="Event Registry API",
    version="1.0.0",
    description="Owner-gated event records with attendance",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Configure CORS for docs UI
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(events.router)


@app.get("/")
def read_root():
    return {"message": "Event Registry API", "status": "running"}

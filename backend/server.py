"""Intent Registry Backend — entry point.

Intents, their default/owned visibility, and per-tenant links and
exclusions. The persistence handle is opened in the lifespan and closed
at shutdown.
"""
from contextlib import asynccontextmanager
from pathlib import Path
import logging

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI, APIRouter, Request
from starlette.middleware.cors import CORSMiddleware

# Load env before anything else
ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / ".env")

from config.settings import get_settings
from config.validators import validate_startup_config
from core.logging_config import setup_logging
from core.database import connect, get_database, init_indexes, close_db
from api.errors import register_error_handlers
from api.intents import router as intents_router
from intents.service import IntentService
from intents.storage.memory import InMemoryIntentRepository
from intents.storage.mongo import MongoIntentRepository
from tenants.orchestrator import build_scope_directory

# ---- Setup logging ----
setup_logging()
logger = logging.getLogger(__name__)


# ---- Lifespan ----
@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info("Intent Registry starting — env=%s storage=%s", settings.ENV, settings.STORAGE_BACKEND)
    validate_startup_config(settings)

    client = None
    if settings.STORAGE_BACKEND == "mongo":
        client = connect(settings)
        db = get_database(client, settings)
        await init_indexes(db)
        repository = MongoIntentRepository(db)
    else:
        repository = InMemoryIntentRepository()

    http_client = None
    if not settings.MOCK_TENANT_DIRECTORY:
        # One pool for every tenant lookup
        http_client = httpx.AsyncClient(timeout=settings.TENANT_SERVICE_TIMEOUT_S)
    directory = build_scope_directory(settings, client=http_client)
    app.state.intent_service = IntentService(repository, directory)
    logger.info("Intent Registry ready")
    yield
    if http_client is not None:
        await http_client.aclose()
    if client is not None:
        await close_db(client)
    logger.info("Intent Registry shutdown complete")


# ---- App ----
app = FastAPI(
    title="Intent Registry",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

api_router = APIRouter(prefix="/api")


# ---- Health ----
@api_router.get("/health")
async def health(request: Request):
    settings = get_settings()
    service: IntentService = request.app.state.intent_service
    return {
        "status": "ok",
        "env": settings.ENV,
        "version": "0.1.0",
        "storage": type(service.repository).__name__,
        "tenant_directory": type(service.directory).__name__,
        "tenant_directory_healthy": await service.directory.is_healthy(),
        "mock_tenant_directory": settings.MOCK_TENANT_DIRECTORY,
    }


api_router.include_router(intents_router)
app.include_router(api_router)

"""Centralized settings module — single source of truth for all config.

Values come from env vars or backend/.env. Nothing here is read at import time
by other modules; call get_settings().
"""
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    # ── Environment ──────────────────────────────────────────────
    ENV: Literal["dev", "staging", "prod"] = Field(default="dev")

    # ── Persistence ──────────────────────────────────────────────
    MONGO_URL: str = Field(default="mongodb://localhost:27017")
    DB_NAME: str = Field(default="intent_registry_dev")
    STORAGE_BACKEND: Literal["mongo", "memory"] = Field(default="mongo")

    # ── Tenant service ───────────────────────────────────────────
    # GET {TENANT_SERVICE_URL}/{tenant_id} answers {"success": bool, "data": {"id", "name"}}
    TENANT_SERVICE_URL: str = Field(default="")
    TENANT_SERVICE_TIMEOUT_S: float = Field(default=5.0)
    # raise | fail_closed | fail_open — what exists() answers when the service is unreachable
    TENANT_LOOKUP_FAILURE_POLICY: Literal["raise", "fail_closed", "fail_open"] = Field(default="raise")

    # ── Observability ────────────────────────────────────────────
    LOG_LEVEL: str = Field(default="INFO")

    # ── Feature Flags ────────────────────────────────────────────
    MOCK_TENANT_DIRECTORY: bool = Field(default=True)
    # Comma-separated ids known to the mock directory. Empty → every id exists.
    DEV_TENANT_IDS: str = Field(default="")

    model_config = {
        "env_file": str(_ROOT / ".env"),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

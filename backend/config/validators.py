"""Startup configuration validation guardrails."""

import logging


logger = logging.getLogger(__name__)


def _require_tenant_service_url(settings) -> None:
    """Fail closed if the HTTP tenant directory has nowhere to call."""
    if settings.MOCK_TENANT_DIRECTORY:
        return
    if not settings.TENANT_SERVICE_URL or not settings.TENANT_SERVICE_URL.strip():
        raise RuntimeError(
            "STARTUP FAILED — TENANT_SERVICE_URL is required when MOCK_TENANT_DIRECTORY is false. "
            "Set it in backend/.env or container environment and restart the server."
        )


def validate_startup_config(settings) -> None:
    """Centralized startup guardrails for required and warning-level config."""
    _require_tenant_service_url(settings)

    if settings.ENV == "prod":
        if settings.MOCK_TENANT_DIRECTORY:
            raise RuntimeError(
                "STARTUP FAILED — MOCK_TENANT_DIRECTORY must be False in production."
            )
        if settings.STORAGE_BACKEND != "mongo":
            raise RuntimeError(
                "STARTUP FAILED — STORAGE_BACKEND must be 'mongo' in production."
            )

    if settings.TENANT_LOOKUP_FAILURE_POLICY == "fail_open":
        logger.warning(
            "CONFIG WARNING: TENANT_LOOKUP_FAILURE_POLICY=fail_open — "
            "non-default intents may bind to tenants that were never verified"
        )
    if settings.MOCK_TENANT_DIRECTORY and not settings.DEV_TENANT_IDS:
        logger.warning("CONFIG WARNING: DEV_TENANT_IDS is not set — every tenant id is accepted")

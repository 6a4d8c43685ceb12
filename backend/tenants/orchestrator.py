"""Scope directory selection — mock or HTTP, per settings."""
import logging
from typing import Optional

import httpx

from tenants.provider.http import HttpTenantDirectory
from tenants.provider.interface import LookupFailurePolicy, ScopeDirectory
from tenants.provider.mock import StaticScopeDirectory

logger = logging.getLogger(__name__)


def build_scope_directory(settings, client: Optional[httpx.AsyncClient] = None) -> ScopeDirectory:
    """Mock directory when MOCK_TENANT_DIRECTORY is set, otherwise the tenant service via client."""
    if settings.MOCK_TENANT_DIRECTORY:
        known = [i for i in settings.DEV_TENANT_IDS.split(",") if i.strip()] or None
        logger.info(
            "[Directory] Provider=StaticScopeDirectory known=%s",
            "any" if known is None else len(known),
        )
        return StaticScopeDirectory(known)

    policy = LookupFailurePolicy(settings.TENANT_LOOKUP_FAILURE_POLICY)
    logger.info(
        "[Directory] Provider=HttpTenantDirectory url=%s policy=%s",
        settings.TENANT_SERVICE_URL, policy.value,
    )
    return HttpTenantDirectory(
        settings.TENANT_SERVICE_URL,
        timeout_s=settings.TENANT_SERVICE_TIMEOUT_S,
        failure_policy=policy,
        client=client,
    )

"""Tenant service client — HTTP existence checks for tenants.

Endpoint: GET {TENANT_SERVICE_URL}/{tenant_id}
  200 {"success": true, "data": {"id", "name"}} → tenant, if data.id matches
  404 → no such tenant
  other status / transport error → ScopeLookupError, then the failure
  policy decides what exists() answers.

The id is sent as a single percent-encoded path segment.
"""
import logging
from typing import Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import ScopeLookupError
from intents.scope import ScopeId
from schemas.tenant import Tenant, TenantLookupResponse
from tenants.provider.interface import LookupFailurePolicy, ScopeDirectory

logger = logging.getLogger(__name__)


class HttpTenantDirectory(ScopeDirectory):
    """Scope directory backed by the tenant service's REST API.

    Pass a shared httpx.AsyncClient to reuse one connection pool; the
    owner of that client closes it.
    """

    def __init__(
        self,
        base_url: str,
        timeout_s: float = 5.0,
        failure_policy: LookupFailurePolicy = LookupFailurePolicy.RAISE,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._policy = LookupFailurePolicy(failure_policy)
        self._client = client

    @property
    def failure_policy(self) -> LookupFailurePolicy:
        return self._policy

    def _url_for(self, scope: ScopeId) -> str:
        return f"{self._base_url}/{quote(scope.value, safe='')}"

    async def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url, timeout=self._timeout_s)
        async with httpx.AsyncClient(timeout=self._timeout_s) as client:
            return await client.get(url)

    async def find_by_id(self, scope: ScopeId) -> Optional[Tenant]:
        try:
            response = await self._get(self._url_for(scope))
        except httpx.HTTPError as e:
            logger.error("[TenantAPI] Request failed: scope=%s error=%s", scope.value, str(e))
            raise ScopeLookupError(f"Failed to fetch tenant {scope.value}: {e}") from e

        if response.status_code == 404:
            return None
        if response.status_code >= 400:
            logger.error(
                "[TenantAPI] Error fetching tenant: scope=%s status=%d body=%s",
                scope.value, response.status_code, response.text[:200],
            )
            raise ScopeLookupError(
                f"Failed to fetch tenant {scope.value}: HTTP {response.status_code}"
            )

        try:
            payload = TenantLookupResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError):
            logger.warning("[TenantAPI] Invalid tenant data format: scope=%s", scope.value)
            return None

        if not payload.success or payload.data is None:
            return None
        if not payload.data.id or not payload.data.name:
            logger.warning("[TenantAPI] Incomplete tenant data: scope=%s", scope.value)
            return None
        if payload.data.id != scope.value:
            logger.warning(
                "[TenantAPI] Tenant id mismatch: scope=%s returned=%s", scope.value, payload.data.id
            )
            return None
        return payload.data

    async def exists(self, scope: ScopeId) -> bool:
        try:
            return await self.find_by_id(scope) is not None
        except ScopeLookupError:
            if self._policy == LookupFailurePolicy.FAIL_CLOSED:
                logger.warning("[TenantAPI] Lookup failed, treating as absent: scope=%s", scope.value)
                return False
            if self._policy == LookupFailurePolicy.FAIL_OPEN:
                logger.warning("[TenantAPI] Lookup failed, treating as present: scope=%s", scope.value)
                return True
            raise

    async def is_healthy(self) -> bool:
        """Reachable and not answering 5xx at the base URL."""
        try:
            response = await self._get(self._base_url)
        except httpx.HTTPError as e:
            logger.warning("[TenantAPI] Health check failed: error=%s", str(e))
            return False
        return response.status_code < 500

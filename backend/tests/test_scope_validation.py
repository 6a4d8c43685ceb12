"""Tests for the scope existence policy."""
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from unittest.mock import AsyncMock

import pytest

from core.exceptions import NotFoundError, ScopeLookupError
from intents.scope import ScopeId
from intents.scope_validation import ensure_scope_exists_for_non_default_intent
from tenants.provider.mock import StaticScopeDirectory


@pytest.mark.asyncio
async def test_existing_scope_passes():
    directory = StaticScopeDirectory({"tenant-1"})
    await ensure_scope_exists_for_non_default_intent(directory, ScopeId.tenant("tenant-1"))


@pytest.mark.asyncio
async def test_missing_tenant_raises_not_found():
    directory = StaticScopeDirectory({"tenant-1"})
    with pytest.raises(NotFoundError, match='Tenant with id "tenant-9" does not exist'):
        await ensure_scope_exists_for_non_default_intent(directory, ScopeId.tenant("tenant-9"))


@pytest.mark.asyncio
async def test_missing_client_names_client():
    directory = StaticScopeDirectory(set())
    with pytest.raises(NotFoundError, match="Client with id"):
        await ensure_scope_exists_for_non_default_intent(directory, ScopeId.client("c-1"))


@pytest.mark.asyncio
async def test_lookup_failure_propagates():
    directory = AsyncMock()
    directory.exists.side_effect = ScopeLookupError("down")
    with pytest.raises(ScopeLookupError):
        await ensure_scope_exists_for_non_default_intent(directory, ScopeId.tenant("tenant-1"))


@pytest.mark.asyncio
async def test_directory_without_known_ids_accepts_everything():
    directory = StaticScopeDirectory()
    await ensure_scope_exists_for_non_default_intent(directory, ScopeId.tenant("anything"))

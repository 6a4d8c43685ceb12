"""Tests for the link / exclude state machine and scope rebinding."""
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest

from core.exceptions import BusinessRuleError, ConflictError, NotFoundError
from intents import relationships
from intents.entity import Intent
from intents.relationships import RelationshipState, diff_scopes
from intents.scope import ScopeId, ScopeKind
from intents.storage.memory import InMemoryIntentRepository
from tenants.provider.mock import StaticScopeDirectory

T1 = ScopeId.tenant("tenant-1")
T2 = ScopeId.tenant("tenant-2")
T3 = ScopeId.tenant("tenant-3")


def _intent(intent_id="intent-1", is_default=False):
    return Intent.create(intent_id, f"label-{intent_id}", "", "ACTIVE", is_default=is_default)


# ── Rules ───────────────────────────────────────────────────────────────────

def test_ensure_can_be_excluded_rejects_non_default():
    with pytest.raises(BusinessRuleError, match="Can only exclude default intents"):
        relationships.ensure_can_be_excluded(_intent(is_default=False))


def test_ensure_can_be_excluded_accepts_default():
    relationships.ensure_can_be_excluded(_intent(is_default=True))


def test_requires_explicit_linking():
    assert relationships.requires_explicit_linking(_intent(is_default=False)) is True
    assert relationships.requires_explicit_linking(_intent(is_default=True)) is False


# ── link / exclude ──────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_link_twice_stores_one_record():
    repo = InMemoryIntentRepository()
    await relationships.link(repo, "intent-1", T1)
    await relationships.link(repo, "intent-1", T1)
    assert repo.link_count == 1
    assert await relationships.relationship_state(repo, "intent-1", T1) == RelationshipState.LINKED


@pytest.mark.asyncio
async def test_link_clears_existing_exclusion():
    repo = InMemoryIntentRepository()
    await relationships.exclude(repo, "intent-1", T1)
    await relationships.link(repo, "intent-1", T1)
    assert await repo.is_excluded("intent-1", T1) is False
    assert await repo.is_linked("intent-1", T1) is True


@pytest.mark.asyncio
async def test_exclude_twice_conflicts_and_keeps_one_record():
    repo = InMemoryIntentRepository()
    await relationships.exclude(repo, "intent-1", T1)
    with pytest.raises(ConflictError, match="already excluded"):
        await relationships.exclude(repo, "intent-1", T1)
    assert repo.exclusion_count == 1
    assert await relationships.relationship_state(repo, "intent-1", T1) == RelationshipState.EXCLUDED


@pytest.mark.asyncio
async def test_unlink_returns_pair_to_unrelated():
    repo = InMemoryIntentRepository()
    await relationships.link(repo, "intent-1", T1)
    await relationships.unlink(repo, "intent-1", T1)
    assert await relationships.relationship_state(repo, "intent-1", T1) == RelationshipState.UNRELATED


@pytest.mark.asyncio
async def test_tenant_and_client_relationships_are_separate():
    repo = InMemoryIntentRepository()
    await relationships.link(repo, "intent-1", ScopeId.client("same"))
    assert await repo.is_linked("intent-1", ScopeId.tenant("same")) is False


# ── Rebinding ───────────────────────────────────────────────────────────────

def test_diff_scopes_symmetric_difference():
    diff = diff_scopes([T1, T2], [T2, T3])
    assert diff.to_unlink == [T1]
    assert diff.to_link == [T3]
    assert diff.unchanged == [T2]
    assert not diff.is_empty


def test_diff_scopes_no_change():
    assert diff_scopes([T1], [T1]).is_empty


@pytest.mark.asyncio
async def test_rebind_scopes_applies_diff():
    repo = InMemoryIntentRepository()
    intent = await repo.create(_intent())
    await repo.link(intent.id, T1)
    await repo.link(intent.id, T2)

    directory = StaticScopeDirectory({"tenant-1", "tenant-2", "tenant-3"})
    diff = await relationships.rebind_scopes(repo, directory, intent, ["tenant-2", "tenant-3", "tenant-3"])

    assert [s.value for s in diff.to_link] == ["tenant-3"]
    assert [s.value for s in diff.to_unlink] == ["tenant-1"]
    scopes = await repo.scope_ids_for_intent(intent.id, ScopeKind.TENANT)
    assert sorted(s.value for s in scopes) == ["tenant-2", "tenant-3"]


@pytest.mark.asyncio
async def test_plan_rebind_validates_new_scopes_without_writing():
    repo = InMemoryIntentRepository()
    intent = await repo.create(_intent())
    await repo.link(intent.id, T1)

    directory = StaticScopeDirectory({"tenant-1"})
    with pytest.raises(NotFoundError):
        await relationships.plan_rebind(repo, directory, intent, ["tenant-missing"])

    assert await repo.is_linked(intent.id, T1) is True
    assert repo.link_count == 1


@pytest.mark.asyncio
async def test_rebind_default_intent_skips_existence_check():
    repo = InMemoryIntentRepository()
    intent = await repo.create(_intent(is_default=True))

    directory = StaticScopeDirectory(set())
    await relationships.rebind_scopes(repo, directory, intent, ["tenant-unknown"])

    assert await repo.is_linked(intent.id, ScopeId.tenant("tenant-unknown")) is True

"""Link / exclude state machine between an intent and a scope.

States per (scope, intent) pair:

  non-default intent:  UNRELATED ⇄ LINKED
  default intent:      UNRELATED ⇄ EXCLUDED

Linking is an "ensure" operation and repeats silently. Excluding is a
one-shot transition; a second exclude raises ConflictError.

Rebinding an intent to a new scope set diffs the current and desired
sets: scopes only in the old set are unlinked, scopes only in the new
set are validated (non-default intents) and linked, the rest is left
alone.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence

from core.exceptions import BusinessRuleError, ConflictError
from intents.entity import Intent
from intents.repository import IntentRepository
from intents.scope import ScopeId, ScopeKind, ScopeLike, dedupe_scope_ids
from intents.scope_validation import ensure_scope_exists_for_non_default_intent
from tenants.provider.interface import ScopeDirectory

logger = logging.getLogger(__name__)


class RelationshipState(str, Enum):
    UNRELATED = "UNRELATED"
    LINKED = "LINKED"
    EXCLUDED = "EXCLUDED"


async def relationship_state(
    repository: IntentRepository, intent_id: str, scope: ScopeId
) -> RelationshipState:
    if await repository.is_excluded(intent_id, scope):
        return RelationshipState.EXCLUDED
    if await repository.is_linked(intent_id, scope):
        return RelationshipState.LINKED
    return RelationshipState.UNRELATED


def ensure_can_be_excluded(intent: Intent) -> None:
    if not intent.is_default:
        raise BusinessRuleError("Can only exclude default intents from tenants")


def requires_explicit_linking(intent: Intent) -> bool:
    """Default intents are visible everywhere already."""
    return not intent.is_default


async def link(repository: IntentRepository, intent_id: str, scope: ScopeId) -> None:
    """Ensure intent_id is linked to scope, clearing any exclusion first. Idempotent."""
    if await repository.is_excluded(intent_id, scope):
        await repository.remove_exclusion(intent_id, scope)
        logger.info("Exclusion removed: intent=%s scope=%s", intent_id, scope.value)

    if not await repository.is_linked(intent_id, scope):
        await repository.link(intent_id, scope)
        logger.info("Intent linked: intent=%s scope=%s kind=%s", intent_id, scope.value, scope.kind.value)


async def exclude(repository: IntentRepository, intent_id: str, scope: ScopeId) -> None:
    if await repository.is_excluded(intent_id, scope):
        raise ConflictError("Intent is already excluded from this tenant")

    await repository.exclude(intent_id, scope)
    logger.info("Intent excluded: intent=%s scope=%s kind=%s", intent_id, scope.value, scope.kind.value)


async def unlink(repository: IntentRepository, intent_id: str, scope: ScopeId) -> None:
    await repository.unlink(intent_id, scope)
    logger.info("Intent unlinked: intent=%s scope=%s kind=%s", intent_id, scope.value, scope.kind.value)


# ── Rebinding ────────────────────────────────────────────────────


@dataclass(frozen=True)
class ScopeDiff:
    to_unlink: List[ScopeId]
    to_link: List[ScopeId]
    unchanged: List[ScopeId]

    @property
    def is_empty(self) -> bool:
        return not self.to_unlink and not self.to_link


def diff_scopes(current: Sequence[ScopeId], desired: Sequence[ScopeId]) -> ScopeDiff:
    """Symmetric difference keyed by identifier string, order preserved."""
    current_values = {s.value for s in current}
    desired_values = {s.value for s in desired}
    return ScopeDiff(
        to_unlink=[s for s in current if s.value not in desired_values],
        to_link=[s for s in desired if s.value not in current_values],
        unchanged=[s for s in desired if s.value in current_values],
    )


async def plan_rebind(
    repository: IntentRepository,
    directory: ScopeDirectory,
    intent: Intent,
    desired: Iterable[ScopeLike],
    kind: ScopeKind = ScopeKind.TENANT,
) -> ScopeDiff:
    """Compute the diff and validate every added scope. Writes nothing."""
    current = await repository.scope_ids_for_intent(intent.id, kind)
    diff = diff_scopes(current, dedupe_scope_ids(desired, kind))
    if requires_explicit_linking(intent):
        for scope in diff.to_link:
            await ensure_scope_exists_for_non_default_intent(directory, scope)
    return diff


async def apply_rebind(repository: IntentRepository, intent_id: str, diff: ScopeDiff) -> None:
    for scope in diff.to_unlink:
        await unlink(repository, intent_id, scope)
    for scope in diff.to_link:
        await link(repository, intent_id, scope)
    if not diff.is_empty:
        logger.info(
            "Intent rebound: intent=%s linked=%d unlinked=%d unchanged=%d",
            intent_id, len(diff.to_link), len(diff.to_unlink), len(diff.unchanged),
        )


async def rebind_scopes(
    repository: IntentRepository,
    directory: ScopeDirectory,
    intent: Intent,
    desired: Iterable[ScopeLike],
    kind: ScopeKind = ScopeKind.TENANT,
) -> ScopeDiff:
    diff = await plan_rebind(repository, directory, intent, desired, kind)
    await apply_rebind(repository, intent.id, diff)
    return diff

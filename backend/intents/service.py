"""Intent workflows — creation, update, listing and scope binding.

IntentService wires the domain policies to a repository and a scope
directory. Checks that can fail (uniqueness, scope existence) run before
anything is written, so a rejected creation leaves no intent behind.
"""
import logging
import uuid
from typing import Any, Iterable, List, Optional

from core.exceptions import NotFoundError, ValidationError
from intents import relationships
from intents.entity import Intent
from intents.repository import IntentRepository
from intents.scope import ScopeId, ScopeKind, ScopeLike, dedupe_scope_ids, to_scope_id
from intents.scope_validation import ensure_scope_exists_for_non_default_intent
from intents.uniqueness import ensure_label_is_unique, ensure_label_is_unique_for_update
from intents.validation import (
    IntentStatus,
    validate_intent_id,
    validate_label,
)
from tenants.provider.interface import ScopeDirectory

logger = logging.getLogger(__name__)


class IntentService:
    """Application-level operations over intents and their scope relationships."""

    def __init__(self, repository: IntentRepository, directory: ScopeDirectory):
        self.repository = repository
        self.directory = directory

    # ── Creation ─────────────────────────────────────────────────

    async def create_default_intent(
        self,
        label: str,
        description: Optional[str] = "",
        status: Any = IntentStatus.ACTIVE,
        synonyms: Optional[Iterable[str]] = None,
        example_phrases: Optional[Iterable[str]] = None,
    ) -> Intent:
        return await self.create_intent(
            label, description, status, synonyms, example_phrases, is_default=True
        )

    async def create_scoped_intent(
        self,
        scope_ids: Iterable[ScopeLike],
        label: str,
        description: Optional[str] = "",
        status: Any = IntentStatus.ACTIVE,
        synonyms: Optional[Iterable[str]] = None,
        example_phrases: Optional[Iterable[str]] = None,
        kind: ScopeKind = ScopeKind.TENANT,
    ) -> Intent:
        return await self.create_intent(
            label, description, status, synonyms, example_phrases,
            is_default=False, scope_ids=scope_ids, kind=kind,
        )

    async def create_intent(
        self,
        label: str,
        description: Optional[str] = "",
        status: Any = IntentStatus.ACTIVE,
        synonyms: Optional[Iterable[str]] = None,
        example_phrases: Optional[Iterable[str]] = None,
        is_default: bool = False,
        scope_ids: Optional[Iterable[ScopeLike]] = None,
        kind: ScopeKind = ScopeKind.TENANT,
    ) -> Intent:
        """Create an intent and bind it to scope_ids.

        Non-default intents need at least one scope, and every scope must
        exist. Scopes given for a default intent are linked unchecked.
        """
        # Build the entity first so malformed input fails before any lookup
        intent = Intent.create_for_creation(
            str(uuid.uuid4()), label, description, status, synonyms, example_phrases, is_default
        )
        scopes = dedupe_scope_ids(scope_ids or [], kind)

        if not is_default:
            if not scopes:
                noun = "clientId" if kind == ScopeKind.CLIENT else "tenantIds"
                raise ValidationError(f"{noun} is required for a non-default intent")
            for scope in scopes:
                await ensure_scope_exists_for_non_default_intent(self.directory, scope)

        await ensure_label_is_unique(self.repository, intent.label)

        created = await self.repository.create(intent)
        for scope in scopes:
            await relationships.link(self.repository, created.id, scope)

        logger.info(
            "Intent created: intent=%s label=%r default=%s scopes=%d",
            created.id, created.label, created.is_default, len(scopes),
        )
        return created

    # ── Reads ────────────────────────────────────────────────────

    async def get_intent(self, intent_id: str) -> Intent:
        validate_intent_id(intent_id)
        intent = await self.repository.find_by_id(intent_id)
        if intent is None:
            raise NotFoundError(f"Intent with id {intent_id} not found")
        return intent

    async def list_all_intents(self) -> List[Intent]:
        return await self.repository.find_all()

    async def list_default_intents(self) -> List[Intent]:
        return await self.repository.find_all_default()

    async def list_intents_for_scope(self, scope: ScopeLike, kind: ScopeKind = ScopeKind.TENANT) -> List[Intent]:
        return await self.repository.find_intents_for_scope(to_scope_id(scope, kind))

    async def scopes_for_intent(self, intent_id: str, kind: ScopeKind = ScopeKind.TENANT) -> List[ScopeId]:
        intent = await self.get_intent(intent_id)
        return await self.repository.scope_ids_for_intent(intent.id, kind)

    # ── Update / delete ──────────────────────────────────────────

    async def update_intent(
        self,
        intent_id: str,
        label: Optional[str] = None,
        description: Optional[str] = None,
        status: Any = None,
        synonyms: Optional[Iterable[str]] = None,
        example_phrases: Optional[Iterable[str]] = None,
        scope_ids: Optional[Iterable[ScopeLike]] = None,
        kind: ScopeKind = ScopeKind.TENANT,
    ) -> Intent:
        """Apply the given fields; when scope_ids is given, rebind to exactly that set."""
        existing = await self.get_intent(intent_id)

        if label is not None and label != existing.label:
            await ensure_label_is_unique_for_update(self.repository, validate_label(label), existing.id)

        # Validate the whole change before writing any of it
        updated = existing.update(label, description, status, synonyms, example_phrases)
        diff = None
        if scope_ids is not None:
            diff = await relationships.plan_rebind(
                self.repository, self.directory, existing, scope_ids, kind
            )

        saved = await self.repository.update(updated)
        if diff is not None:
            await relationships.apply_rebind(self.repository, saved.id, diff)

        logger.info("Intent updated: intent=%s status=%s", saved.id, saved.status.value)
        return saved

    async def delete_intent(self, intent_id: str) -> None:
        intent = await self.get_intent(intent_id)
        await self.repository.delete(intent.id)

    # ── Scope relationships ──────────────────────────────────────

    async def link_intent_to_scope(
        self, intent_id: str, scope: ScopeLike, kind: ScopeKind = ScopeKind.TENANT
    ) -> None:
        """Give scope access to the intent.

        Default intents are already visible, so this only lifts an exclusion.
        """
        intent = await self.get_intent(intent_id)
        scope_id = to_scope_id(scope, kind)

        if not relationships.requires_explicit_linking(intent):
            if await self.repository.is_excluded(intent.id, scope_id):
                await self.repository.remove_exclusion(intent.id, scope_id)
                logger.info("Exclusion removed: intent=%s scope=%s", intent.id, scope_id.value)
            return

        await ensure_scope_exists_for_non_default_intent(self.directory, scope_id)
        await relationships.link(self.repository, intent.id, scope_id)

    async def unlink_intent_from_scope(
        self, intent_id: str, scope: ScopeLike, kind: ScopeKind = ScopeKind.TENANT
    ) -> None:
        intent = await self.get_intent(intent_id)
        await relationships.unlink(self.repository, intent.id, to_scope_id(scope, kind))

    async def exclude_intent_from_scope(
        self, intent_id: str, scope: ScopeLike, kind: ScopeKind = ScopeKind.TENANT
    ) -> None:
        intent = await self.get_intent(intent_id)
        relationships.ensure_can_be_excluded(intent)
        await relationships.exclude(self.repository, intent.id, to_scope_id(scope, kind))

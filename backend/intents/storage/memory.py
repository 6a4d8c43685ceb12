"""In-process intent store for dev (STORAGE_BACKEND=memory) and tests.

Mirrors the Mongo store's constraints: unique label, one link and one
exclusion per pair, cascading delete.
"""
import logging
from typing import Dict, List, Optional, Set, Tuple

from core.exceptions import ConflictError, NotFoundError
from intents.entity import Intent
from intents.repository import IntentRepository
from intents.scope import ScopeId, ScopeKind

logger = logging.getLogger(__name__)

_PairKey = Tuple[str, str, str]  # (scope_kind, scope_id, intent_id)


def _key(intent_id: str, scope: ScopeId) -> _PairKey:
    return (scope.kind.value, scope.value, intent_id)


class InMemoryIntentRepository(IntentRepository):
    """Dict-backed IntentRepository."""

    def __init__(self):
        self._intents: Dict[str, Intent] = {}
        # dicts keep insertion order, which scope_ids_for_intent relies on
        self._links: Dict[_PairKey, None] = {}
        self._exclusions: Dict[_PairKey, None] = {}

    # ── Intents ──────────────────────────────────────────────────

    def _label_taken(self, label: str, intent_id: str) -> bool:
        return any(i.label == label and i.id != intent_id for i in self._intents.values())

    async def create(self, intent: Intent) -> Intent:
        if intent.id in self._intents or self._label_taken(intent.label, intent.id):
            raise ConflictError(f'Intent with label "{intent.label}" already exists')
        self._intents[intent.id] = intent
        logger.info("Intent stored: intent=%s default=%s", intent.id, intent.is_default)
        return intent

    async def find_by_id(self, intent_id: str) -> Optional[Intent]:
        return self._intents.get(intent_id)

    async def find_by_label(self, label: str) -> Optional[Intent]:
        for intent in self._intents.values():
            if intent.label == label:
                return intent
        return None

    async def find_all(self) -> List[Intent]:
        return sorted(self._intents.values(), key=lambda i: i.created_at, reverse=True)

    async def find_all_default(self) -> List[Intent]:
        return [i for i in await self.find_all() if i.is_default]

    async def update(self, intent: Intent) -> Intent:
        if intent.id not in self._intents:
            raise NotFoundError(f"Intent with id {intent.id} not found")
        if self._label_taken(intent.label, intent.id):
            raise ConflictError(f'Intent with label "{intent.label}" already exists')
        self._intents[intent.id] = intent
        return intent

    async def delete(self, intent_id: str) -> None:
        self._intents.pop(intent_id, None)
        links = [k for k in self._links if k[2] == intent_id]
        exclusions = [k for k in self._exclusions if k[2] == intent_id]
        for k in links:
            del self._links[k]
        for k in exclusions:
            del self._exclusions[k]
        logger.info(
            "Intent deleted: intent=%s links_removed=%d exclusions_removed=%d",
            intent_id, len(links), len(exclusions),
        )

    # ── Relationships ────────────────────────────────────────────

    async def link(self, intent_id: str, scope: ScopeId) -> None:
        self._links.setdefault(_key(intent_id, scope), None)

    async def unlink(self, intent_id: str, scope: ScopeId) -> None:
        self._links.pop(_key(intent_id, scope), None)

    async def exclude(self, intent_id: str, scope: ScopeId) -> None:
        key = _key(intent_id, scope)
        if key in self._exclusions:
            raise ConflictError("Intent is already excluded from this tenant")
        self._exclusions[key] = None

    async def remove_exclusion(self, intent_id: str, scope: ScopeId) -> None:
        self._exclusions.pop(_key(intent_id, scope), None)

    async def is_linked(self, intent_id: str, scope: ScopeId) -> bool:
        return _key(intent_id, scope) in self._links

    async def is_excluded(self, intent_id: str, scope: ScopeId) -> bool:
        return _key(intent_id, scope) in self._exclusions

    async def linked_ids(self, scope: ScopeId) -> Set[str]:
        return {k[2] for k in self._links if k[0] == scope.kind.value and k[1] == scope.value}

    async def excluded_ids(self, scope: ScopeId) -> Set[str]:
        return {k[2] for k in self._exclusions if k[0] == scope.kind.value and k[1] == scope.value}

    async def scope_ids_for_intent(
        self, intent_id: str, kind: ScopeKind = ScopeKind.TENANT
    ) -> List[ScopeId]:
        return [ScopeId(k[1], kind) for k in self._links if k[2] == intent_id and k[0] == kind.value]

    # ── Test helpers ─────────────────────────────────────────────

    @property
    def link_count(self) -> int:
        return len(self._links)

    @property
    def exclusion_count(self) -> int:
        return len(self._exclusions)

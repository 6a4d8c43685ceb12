"""IntentRepository — the persistence boundary the services are written against.

Implementations: intents.storage.mongo (motor) and intents.storage.memory.
Relationship methods are keyed on ScopeId, whose kind selects the client
or tenant namespace.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Set

from intents.access import filter_by_access
from intents.entity import Intent
from intents.scope import ScopeId, ScopeKind


class IntentRepository(ABC):
    """Abstract intent store."""

    # ── Intents ──────────────────────────────────────────────────

    @abstractmethod
    async def create(self, intent: Intent) -> Intent:
        """Persist a new intent. Raises ConflictError if the label is taken."""
        ...

    @abstractmethod
    async def find_by_id(self, intent_id: str) -> Optional[Intent]:
        ...

    @abstractmethod
    async def find_by_label(self, label: str) -> Optional[Intent]:
        """Exact, case-sensitive match."""
        ...

    @abstractmethod
    async def find_all(self) -> List[Intent]:
        """All intents, newest first."""
        ...

    @abstractmethod
    async def find_all_default(self) -> List[Intent]:
        ...

    @abstractmethod
    async def update(self, intent: Intent) -> Intent:
        """Replace a stored intent. NotFoundError if absent, ConflictError on a taken label."""
        ...

    @abstractmethod
    async def delete(self, intent_id: str) -> None:
        """Remove the intent together with its links and exclusions."""
        ...

    # ── Relationships ────────────────────────────────────────────

    @abstractmethod
    async def link(self, intent_id: str, scope: ScopeId) -> None:
        """Record a link. A repeated link is a no-op."""
        ...

    @abstractmethod
    async def unlink(self, intent_id: str, scope: ScopeId) -> None:
        ...

    @abstractmethod
    async def exclude(self, intent_id: str, scope: ScopeId) -> None:
        """Record an exclusion. ConflictError if it already exists."""
        ...

    @abstractmethod
    async def remove_exclusion(self, intent_id: str, scope: ScopeId) -> None:
        """Delete an exclusion. Missing exclusions are ignored."""
        ...

    @abstractmethod
    async def is_linked(self, intent_id: str, scope: ScopeId) -> bool:
        ...

    @abstractmethod
    async def is_excluded(self, intent_id: str, scope: ScopeId) -> bool:
        ...

    @abstractmethod
    async def linked_ids(self, scope: ScopeId) -> Set[str]:
        ...

    @abstractmethod
    async def excluded_ids(self, scope: ScopeId) -> Set[str]:
        ...

    @abstractmethod
    async def scope_ids_for_intent(
        self, intent_id: str, kind: ScopeKind = ScopeKind.TENANT
    ) -> List[ScopeId]:
        """Scopes of the given kind the intent is linked to."""
        ...

    # ── Composed queries ─────────────────────────────────────────

    async def find_intents_for_scope(self, scope: ScopeId) -> List[Intent]:
        """Intents visible to scope: full population filtered by its link/exclusion sets."""
        intents = await self.find_all()
        linked = await self.linked_ids(scope)
        excluded = await self.excluded_ids(scope)
        return filter_by_access(intents, scope, linked, excluded)

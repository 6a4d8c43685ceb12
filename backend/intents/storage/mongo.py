"""Intent persistence — MongoDB.

Collections:
  intents            one document per intent (unique intent_id, unique label)
  intent_links       (scope_kind, scope_id, intent_id), unique per pair
  intent_exclusions  (scope_kind, scope_id, intent_id), unique per pair

Indexes are created by core.database.init_indexes.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional, Set

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from core.exceptions import ConflictError, NotFoundError
from intents.entity import Intent
from intents.repository import IntentRepository
from intents.scope import ScopeId, ScopeKind

logger = logging.getLogger(__name__)


def intent_to_doc(intent: Intent) -> dict:
    return {
        "intent_id": intent.id,
        "label": intent.label,
        "description": intent.description,
        "status": intent.status.value,
        "synonyms": list(intent.synonyms),
        "example_phrases": list(intent.example_phrases),
        "is_default": intent.is_default,
        "created_at": intent.created_at,
        "updated_at": intent.updated_at,
    }


def intent_from_doc(doc: dict) -> Intent:
    return Intent.reconstitute(
        id=doc["intent_id"],
        label=doc["label"],
        description=doc.get("description", ""),
        status=doc["status"],
        synonyms=doc.get("synonyms") or [],
        example_phrases=doc.get("example_phrases") or [],
        is_default=doc.get("is_default", False),
        created_at=doc["created_at"],
        updated_at=doc["updated_at"],
    )


def _pair(intent_id: str, scope: ScopeId) -> dict:
    return {"scope_kind": scope.kind.value, "scope_id": scope.value, "intent_id": intent_id}


class MongoIntentRepository(IntentRepository):
    """motor-backed IntentRepository."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self._db = db

    # ── Intents ──────────────────────────────────────────────────

    async def create(self, intent: Intent) -> Intent:
        try:
            await self._db.intents.insert_one(intent_to_doc(intent))
        except DuplicateKeyError:
            raise ConflictError(f'Intent with label "{intent.label}" already exists')
        logger.info("Intent stored: intent=%s default=%s", intent.id, intent.is_default)
        return intent

    async def find_by_id(self, intent_id: str) -> Optional[Intent]:
        doc = await self._db.intents.find_one({"intent_id": intent_id}, {"_id": 0})
        return intent_from_doc(doc) if doc else None

    async def find_by_label(self, label: str) -> Optional[Intent]:
        doc = await self._db.intents.find_one({"label": label}, {"_id": 0})
        return intent_from_doc(doc) if doc else None

    async def find_all(self) -> List[Intent]:
        return await self._find({})

    async def find_all_default(self) -> List[Intent]:
        return await self._find({"is_default": True})

    async def _find(self, query: dict) -> List[Intent]:
        cursor = self._db.intents.find(query, {"_id": 0}).sort("created_at", -1)
        results = []
        async for doc in cursor:
            results.append(intent_from_doc(doc))
        return results

    async def update(self, intent: Intent) -> Intent:
        try:
            result = await self._db.intents.replace_one(
                {"intent_id": intent.id}, intent_to_doc(intent)
            )
        except DuplicateKeyError:
            raise ConflictError(f'Intent with label "{intent.label}" already exists')
        if result.matched_count == 0:
            raise NotFoundError(f"Intent with id {intent.id} not found")
        return intent

    async def delete(self, intent_id: str) -> None:
        await self._db.intents.delete_one({"intent_id": intent_id})
        links = await self._db.intent_links.delete_many({"intent_id": intent_id})
        exclusions = await self._db.intent_exclusions.delete_many({"intent_id": intent_id})
        logger.info(
            "Intent deleted: intent=%s links_removed=%d exclusions_removed=%d",
            intent_id, links.deleted_count, exclusions.deleted_count,
        )

    # ── Relationships ────────────────────────────────────────────

    async def link(self, intent_id: str, scope: ScopeId) -> None:
        doc = {**_pair(intent_id, scope), "created_at": datetime.now(timezone.utc)}
        try:
            await self._db.intent_links.insert_one(doc)
        except DuplicateKeyError:
            pass  # already linked

    async def unlink(self, intent_id: str, scope: ScopeId) -> None:
        await self._db.intent_links.delete_one(_pair(intent_id, scope))

    async def exclude(self, intent_id: str, scope: ScopeId) -> None:
        doc = {**_pair(intent_id, scope), "created_at": datetime.now(timezone.utc)}
        try:
            await self._db.intent_exclusions.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError("Intent is already excluded from this tenant")

    async def remove_exclusion(self, intent_id: str, scope: ScopeId) -> None:
        await self._db.intent_exclusions.delete_one(_pair(intent_id, scope))

    async def is_linked(self, intent_id: str, scope: ScopeId) -> bool:
        return await self._db.intent_links.count_documents(_pair(intent_id, scope), limit=1) > 0

    async def is_excluded(self, intent_id: str, scope: ScopeId) -> bool:
        return await self._db.intent_exclusions.count_documents(_pair(intent_id, scope), limit=1) > 0

    async def linked_ids(self, scope: ScopeId) -> Set[str]:
        return await self._intent_ids(self._db.intent_links, scope)

    async def excluded_ids(self, scope: ScopeId) -> Set[str]:
        return await self._intent_ids(self._db.intent_exclusions, scope)

    @staticmethod
    async def _intent_ids(collection, scope: ScopeId) -> Set[str]:
        cursor = collection.find(
            {"scope_kind": scope.kind.value, "scope_id": scope.value},
            {"_id": 0, "intent_id": 1},
        )
        return {doc["intent_id"] async for doc in cursor}

    async def scope_ids_for_intent(
        self, intent_id: str, kind: ScopeKind = ScopeKind.TENANT
    ) -> List[ScopeId]:
        cursor = self._db.intent_links.find(
            {"intent_id": intent_id, "scope_kind": kind.value},
            {"_id": 0, "scope_id": 1},
        ).sort("created_at", 1)
        return [ScopeId(doc["scope_id"], kind) async for doc in cursor]

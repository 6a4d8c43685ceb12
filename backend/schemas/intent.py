"""Intent API schemas — request and response bodies."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from intents.entity import Intent
from intents.scope import ScopeKind
from intents.validation import IntentStatus


class CreateDefaultIntentRequest(BaseModel):
    label: str
    description: str = ""
    status: IntentStatus
    synonyms: List[str] = Field(default_factory=list)
    example_phrases: List[str] = Field(default_factory=list)


class CreateIntentRequest(CreateDefaultIntentRequest):
    is_default: bool = False
    tenant_ids: List[str] = Field(default_factory=list)
    # Client-owned intent; use instead of tenant_ids, not together
    client_ids: List[str] = Field(default_factory=list)


class UpdateIntentRequest(BaseModel):
    label: Optional[str] = None
    description: Optional[str] = None
    status: Optional[IntentStatus] = None
    synonyms: Optional[List[str]] = None
    example_phrases: Optional[List[str]] = None
    # None leaves bindings alone; a list rebinds to exactly that set
    tenant_ids: Optional[List[str]] = None
    client_ids: Optional[List[str]] = None


class ScopeBindingRequest(BaseModel):
    """Exactly one of tenant_id / client_id."""
    tenant_id: Optional[str] = None
    client_id: Optional[str] = None


class IntentResponse(BaseModel):
    id: str
    label: str
    description: str
    status: IntentStatus
    synonyms: List[str]
    example_phrases: List[str]
    is_default: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_intent(cls, intent: Intent) -> "IntentResponse":
        return cls(
            id=intent.id,
            label=intent.label,
            description=intent.description,
            status=intent.status,
            synonyms=list(intent.synonyms),
            example_phrases=list(intent.example_phrases),
            is_default=intent.is_default,
            created_at=intent.created_at,
            updated_at=intent.updated_at,
        )


class IntentListResponse(BaseModel):
    items: List[IntentResponse]
    total: int

    @classmethod
    def from_intents(cls, intents: List[Intent]) -> "IntentListResponse":
        return cls(items=[IntentResponse.from_intent(i) for i in intents], total=len(intents))


class ScopeListResponse(BaseModel):
    intent_id: str
    kind: ScopeKind
    scope_ids: List[str]


class MessageResponse(BaseModel):
    message: str

"""Scope identifiers — the client or tenant an intent is visible to.

One generic type with the kind as a tag. Equality is by identifier
string; storage keys on (kind, value) so client and tenant relationships
stay apart.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Union

from core.exceptions import ValidationError


class ScopeKind(str, Enum):
    CLIENT = "client"
    TENANT = "tenant"


@dataclass(frozen=True)
class ScopeId:
    value: str
    kind: ScopeKind = field(default=ScopeKind.TENANT, compare=False)

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            label = "ClientId" if self.kind == ScopeKind.CLIENT else "TenantId"
            raise ValidationError(f"{label} cannot be empty")
        object.__setattr__(self, "value", self.value.strip())
        object.__setattr__(self, "kind", ScopeKind(self.kind))

    @classmethod
    def tenant(cls, value: str) -> "ScopeId":
        return cls(value, ScopeKind.TENANT)

    @classmethod
    def client(cls, value: str) -> "ScopeId":
        return cls(value, ScopeKind.CLIENT)

    def __str__(self) -> str:
        return self.value


ScopeLike = Union[ScopeId, str]


def to_scope_id(raw: ScopeLike, kind: ScopeKind = ScopeKind.TENANT) -> ScopeId:
    if isinstance(raw, ScopeId):
        return raw
    return ScopeId(raw, kind)


def dedupe_scope_ids(raw_ids: Iterable[ScopeLike], kind: ScopeKind = ScopeKind.TENANT) -> List[ScopeId]:
    """Build ScopeIds, dropping repeats by identifier string. First occurrence wins."""
    seen = set()
    result: List[ScopeId] = []
    for raw in raw_ids:
        scope = to_scope_id(raw, kind)
        if scope.value in seen:
            continue
        seen.add(scope.value)
        result.append(scope)
    return result

"""Scope directory interface — answers whether a tenant or client exists.

The directory provides ONLY an existence predicate. It does not own
intent relationships.
"""
from abc import ABC, abstractmethod
from enum import Enum

from intents.scope import ScopeId


class LookupFailurePolicy(str, Enum):
    """What exists() answers when the backing service cannot be reached."""
    RAISE = "raise"
    FAIL_CLOSED = "fail_closed"  # treat as absent
    FAIL_OPEN = "fail_open"  # treat as present


class ScopeDirectory(ABC):
    """Abstract scope existence capability."""

    @abstractmethod
    async def exists(self, scope: ScopeId) -> bool:
        ...

    @abstractmethod
    async def is_healthy(self) -> bool:
        """Whether the directory can currently answer existence checks."""
        ...

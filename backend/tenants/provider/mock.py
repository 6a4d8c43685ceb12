"""Static scope directory — deterministic existence answers for dev and tests."""
import logging
from typing import Iterable, Optional

from intents.scope import ScopeId
from tenants.provider.interface import ScopeDirectory

logger = logging.getLogger(__name__)


class StaticScopeDirectory(ScopeDirectory):
    """Knows a fixed set of ids. known_ids=None means every id exists."""

    def __init__(self, known_ids: Optional[Iterable[str]] = None):
        self._known = None if known_ids is None else {i.strip() for i in known_ids if i.strip()}

    def add(self, scope_id: str) -> None:
        if self._known is not None:
            self._known.add(scope_id.strip())

    async def exists(self, scope: ScopeId) -> bool:
        found = self._known is None or scope.value in self._known
        logger.debug("[MockDirectory] exists: scope=%s found=%s", scope.value, found)
        return found

    async def is_healthy(self) -> bool:
        return True

"""Scope existence policy for non-default intents."""
import logging

from core.exceptions import NotFoundError
from intents.scope import ScopeId, ScopeKind
from tenants.provider.interface import ScopeDirectory

logger = logging.getLogger(__name__)


async def ensure_scope_exists_for_non_default_intent(
    directory: ScopeDirectory,
    scope: ScopeId,
) -> None:
    """Raise NotFoundError unless the directory knows scope.

    Lookup failures are not caught here; the directory's failure policy
    decides whether they surface.
    """
    if await directory.exists(scope):
        return
    noun = "Client" if scope.kind == ScopeKind.CLIENT else "Tenant"
    logger.warning("Scope missing: scope=%s kind=%s", scope.value, scope.kind.value)
    raise NotFoundError(f'{noun} with id "{scope.value}" does not exist')

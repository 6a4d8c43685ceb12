"""Label uniqueness policy.

Labels are unique across the whole intent population, case-sensitive,
compared after trimming. This check rejects early; the store's unique
index on label is what settles concurrent creations.
"""
import logging
from typing import Optional

from core.exceptions import ConflictError
from intents.repository import IntentRepository

logger = logging.getLogger(__name__)


async def ensure_label_is_unique(
    repository: IntentRepository,
    label: str,
    exclude_id: Optional[str] = None,
) -> None:
    existing = await repository.find_by_label(label.strip())
    if existing and (not exclude_id or existing.id != exclude_id):
        logger.warning("Label conflict: label=%r intent=%s", label, existing.id)
        raise ConflictError(f'Intent with label "{label}" already exists')


async def ensure_label_is_unique_for_update(
    repository: IntentRepository,
    label: str,
    current_id: str,
) -> None:
    """An intent may keep its own label."""
    await ensure_label_is_unique(repository, label, exclude_id=current_id)

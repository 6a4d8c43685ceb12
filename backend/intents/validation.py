"""Intent field validation — the one place these rules live.

Used by the Intent factories and by any caller that wants to pre-check
input before building an entity.
"""
from enum import Enum
from typing import Any, Iterable, Optional, Tuple

from core.exceptions import ValidationError


class IntentStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUGGESTED = "SUGGESTED"


# INACTIVE is only reachable through an update
CREATION_STATUSES = frozenset({IntentStatus.ACTIVE, IntentStatus.SUGGESTED})


def is_valid_status(value: Any) -> bool:
    if isinstance(value, IntentStatus):
        return True
    return isinstance(value, str) and value in IntentStatus._value2member_map_


def validate_label(label: Any) -> str:
    """Return the trimmed label; reject missing or blank labels."""
    if not isinstance(label, str) or not label.strip():
        raise ValidationError("Label cannot be empty")
    return label.strip()


def validate_status(status: Any) -> IntentStatus:
    if not status or not is_valid_status(status):
        raise ValidationError("Status must be ACTIVE, INACTIVE, or SUGGESTED")
    return IntentStatus(status)


def validate_status_for_creation(status: Any) -> IntentStatus:
    resolved = validate_status(status)
    if resolved not in CREATION_STATUSES:
        raise ValidationError("Status must be ACTIVE or SUGGESTED when creating")
    return resolved


def validate_string_list(values: Optional[Iterable[Any]], field_name: str) -> Tuple[str, ...]:
    """Validate a homogeneous string collection. None → empty.

    A bare string is rejected rather than split into characters.
    """
    if values is None:
        return ()
    if isinstance(values, (str, bytes)) or not isinstance(values, (list, tuple)):
        raise ValidationError(f"{field_name} must be an array of strings")
    if any(not isinstance(item, str) for item in values):
        raise ValidationError(f"All items in {field_name} must be strings")
    return tuple(values)


def validate_description(description: Any) -> str:
    if description is None:
        return ""
    if not isinstance(description, str):
        raise ValidationError("description must be a string")
    return description


def validate_intent_id(intent_id: Any) -> str:
    if not isinstance(intent_id, str) or not intent_id.strip():
        raise ValidationError("Intent id is required")
    return intent_id

"""Intent entity — an immutable, self-validating classification label.

Every factory validates before construction, so a partially-invalid
Intent never exists. Mutators return a new instance; the original is
left untouched. is_default is fixed for the entity's life.
"""
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Iterable, Optional, Tuple

from intents.validation import (
    IntentStatus,
    validate_description,
    validate_label,
    validate_status,
    validate_status_for_creation,
    validate_string_list,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _advance(previous: datetime) -> datetime:
    """A fresh timestamp that never goes backwards relative to previous."""
    now = _utcnow()
    return now if now >= previous else previous


@dataclass(frozen=True)
class Intent:
    id: str
    label: str
    description: str
    status: IntentStatus
    synonyms: Tuple[str, ...]
    example_phrases: Tuple[str, ...]
    is_default: bool
    created_at: datetime
    updated_at: datetime

    # ── Factories ────────────────────────────────────────────────

    @classmethod
    def create(
        cls,
        id: str,
        label: str,
        description: Optional[str] = "",
        status: Any = IntentStatus.ACTIVE,
        synonyms: Optional[Iterable[str]] = None,
        example_phrases: Optional[Iterable[str]] = None,
        is_default: bool = False,
    ) -> "Intent":
        now = _utcnow()
        return cls(
            id=id,
            label=validate_label(label),
            description=validate_description(description),
            status=validate_status(status),
            synonyms=validate_string_list(synonyms, "synonyms"),
            example_phrases=validate_string_list(example_phrases, "examplePhrases"),
            is_default=bool(is_default),
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_for_creation(
        cls,
        id: str,
        label: str,
        description: Optional[str] = "",
        status: Any = IntentStatus.ACTIVE,
        synonyms: Optional[Iterable[str]] = None,
        example_phrases: Optional[Iterable[str]] = None,
        is_default: bool = False,
    ) -> "Intent":
        """Like create(), but only ACTIVE or SUGGESTED are accepted."""
        validate_status_for_creation(status)
        return cls.create(id, label, description, status, synonyms, example_phrases, is_default)

    @classmethod
    def reconstitute(
        cls,
        id: str,
        label: str,
        description: Optional[str],
        status: Any,
        synonyms: Optional[Iterable[str]],
        example_phrases: Optional[Iterable[str]],
        is_default: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Intent":
        """Rebuild a stored intent. Fields are validated again on the way in."""
        return cls(
            id=id,
            label=validate_label(label),
            description=validate_description(description),
            status=validate_status(status),
            synonyms=validate_string_list(synonyms, "synonyms"),
            example_phrases=validate_string_list(example_phrases, "examplePhrases"),
            is_default=bool(is_default),
            created_at=created_at,
            updated_at=updated_at,
        )

    # ── Mutators (copy-on-write) ─────────────────────────────────

    def update(
        self,
        label: Optional[str] = None,
        description: Optional[str] = None,
        status: Any = None,
        synonyms: Optional[Iterable[str]] = None,
        example_phrases: Optional[Iterable[str]] = None,
    ) -> "Intent":
        """Overwrite only the fields that are given; always advance updated_at."""
        return replace(
            self,
            label=validate_label(label) if label is not None else self.label,
            description=validate_description(description) if description is not None else self.description,
            status=validate_status(status) if status is not None else self.status,
            synonyms=validate_string_list(synonyms, "synonyms") if synonyms is not None else self.synonyms,
            example_phrases=(
                validate_string_list(example_phrases, "examplePhrases")
                if example_phrases is not None
                else self.example_phrases
            ),
            updated_at=_advance(self.updated_at),
        )

    def update_label(self, label: str) -> "Intent":
        return replace(self, label=validate_label(label), updated_at=_advance(self.updated_at))

    def update_description(self, description: Optional[str]) -> "Intent":
        return replace(
            self, description=validate_description(description), updated_at=_advance(self.updated_at)
        )

    def update_status(self, status: Any) -> "Intent":
        return replace(self, status=validate_status(status), updated_at=_advance(self.updated_at))

    def update_synonyms(self, synonyms: Optional[Iterable[str]]) -> "Intent":
        return replace(
            self,
            synonyms=validate_string_list(synonyms, "synonyms"),
            updated_at=_advance(self.updated_at),
        )

    def update_example_phrases(self, example_phrases: Optional[Iterable[str]]) -> "Intent":
        return replace(
            self,
            example_phrases=validate_string_list(example_phrases, "examplePhrases"),
            updated_at=_advance(self.updated_at),
        )

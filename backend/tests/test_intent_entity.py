"""Tests for the Intent entity — factories, copy-on-write updates, validation."""
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from core.exceptions import ValidationError
from intents.entity import Intent
from intents.validation import IntentStatus


def _intent(**overrides):
    fields = {
        "id": "intent-1",
        "label": "greeting",
        "description": "Say hello",
        "status": IntentStatus.ACTIVE,
        "synonyms": ["hi", "hello"],
        "example_phrases": ["hi there"],
        "is_default": True,
    }
    fields.update(overrides)
    return Intent.create(**fields)


# ── create ──────────────────────────────────────────────────────────────────

def test_create_reads_back_trimmed_label_and_fields():
    intent = _intent(label="  greeting  ")
    assert intent.id == "intent-1"
    assert intent.label == "greeting"
    assert intent.description == "Say hello"
    assert intent.status == IntentStatus.ACTIVE
    assert intent.synonyms == ("hi", "hello")
    assert intent.example_phrases == ("hi there",)
    assert intent.is_default is True
    assert intent.created_at == intent.updated_at


def test_create_defaults_description_and_collections():
    intent = Intent.create("intent-2", "farewell", None, "SUGGESTED")
    assert intent.description == ""
    assert intent.synonyms == ()
    assert intent.example_phrases == ()
    assert intent.status == IntentStatus.SUGGESTED
    assert intent.is_default is False


@pytest.mark.parametrize("label", ["", "   ", None])
def test_create_rejects_empty_label(label):
    with pytest.raises(ValidationError, match="Label cannot be empty"):
        _intent(label=label)


def test_create_rejects_unknown_status():
    with pytest.raises(ValidationError, match="ACTIVE, INACTIVE, or SUGGESTED"):
        _intent(status="ARCHIVED")


def test_create_accepts_inactive_outside_creation_flow():
    assert _intent(status="INACTIVE").status == IntentStatus.INACTIVE


def test_create_rejects_non_string_synonym():
    with pytest.raises(ValidationError, match="All items in synonyms must be strings"):
        _intent(synonyms=["ok", 3])


def test_create_rejects_non_list_example_phrases():
    with pytest.raises(ValidationError, match="examplePhrases must be an array of strings"):
        _intent(example_phrases="hi there")


# ── create_for_creation ─────────────────────────────────────────────────────

@pytest.mark.parametrize("status", ["ACTIVE", "SUGGESTED"])
def test_create_for_creation_accepts_active_and_suggested(status):
    intent = Intent.create_for_creation("i", "label", "", status)
    assert intent.status.value == status


def test_create_for_creation_rejects_inactive():
    with pytest.raises(ValidationError, match="ACTIVE or SUGGESTED when creating"):
        Intent.create_for_creation("i", "label", "", IntentStatus.INACTIVE)


# ── reconstitute ────────────────────────────────────────────────────────────

def test_reconstitute_keeps_stored_timestamps():
    created = datetime(2024, 1, 1, tzinfo=timezone.utc)
    updated = datetime(2024, 2, 1, tzinfo=timezone.utc)
    intent = Intent.reconstitute("i", "label", "d", "INACTIVE", ["a"], [], False, created, updated)
    assert intent.created_at == created
    assert intent.updated_at == updated
    assert intent.status == IntentStatus.INACTIVE


def test_reconstitute_revalidates():
    now = datetime.now(timezone.utc)
    with pytest.raises(ValidationError):
        Intent.reconstitute("i", "", "d", "ACTIVE", [], [], False, now, now)


# ── update ──────────────────────────────────────────────────────────────────

def test_update_with_no_fields_only_advances_updated_at():
    original = _intent()
    updated = original.update()
    assert updated is not original
    assert updated.updated_at >= original.updated_at
    for field in ("id", "label", "description", "status", "synonyms", "example_phrases",
                  "is_default", "created_at"):
        assert getattr(updated, field) == getattr(original, field)


def test_update_overwrites_only_given_fields():
    original = _intent()
    updated = original.update(label=" hello ", status="INACTIVE")
    assert updated.label == "hello"
    assert updated.status == IntentStatus.INACTIVE
    assert updated.description == original.description
    assert updated.synonyms == original.synonyms
    # original untouched
    assert original.label == "greeting"
    assert original.status == IntentStatus.ACTIVE


def test_update_can_clear_collections_and_description():
    updated = _intent().update(description="", synonyms=[], example_phrases=[])
    assert updated.description == ""
    assert updated.synonyms == ()
    assert updated.example_phrases == ()


def test_update_rejects_blank_label():
    with pytest.raises(ValidationError):
        _intent().update(label="  ")


def test_update_rejects_invalid_status():
    with pytest.raises(ValidationError):
        _intent().update(status="DELETED")


def test_update_keeps_is_default():
    assert _intent(is_default=True).update(label="x").is_default is True
    assert _intent(is_default=False).update(label="x").is_default is False


def test_intent_is_immutable():
    intent = _intent()
    with pytest.raises(FrozenInstanceError):
        intent.label = "changed"


# ── single-field updates ────────────────────────────────────────────────────

def test_single_field_updates():
    intent = _intent()
    assert intent.update_label("  bye ").label == "bye"
    assert intent.update_description(None).description == ""
    assert intent.update_status("SUGGESTED").status == IntentStatus.SUGGESTED
    assert intent.update_synonyms(None).synonyms == ()
    assert intent.update_example_phrases(["x"]).example_phrases == ("x",)


def test_single_field_updates_validate():
    intent = _intent()
    with pytest.raises(ValidationError):
        intent.update_label("")
    with pytest.raises(ValidationError):
        intent.update_status("nope")
    with pytest.raises(ValidationError):
        intent.update_synonyms([None])
    with pytest.raises(ValidationError):
        intent.update_example_phrases([1.5])

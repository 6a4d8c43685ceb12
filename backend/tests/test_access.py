"""Tests for access resolution — full truth table and order-preserving filter."""
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest

from intents.access import filter_by_access, has_access
from intents.entity import Intent
from intents.scope import ScopeId

SCOPE = ScopeId.tenant("tenant-1")


def _intent(intent_id, is_default, status="ACTIVE"):
    return Intent.create(intent_id, f"label-{intent_id}", "", status, is_default=is_default)


@pytest.mark.parametrize("is_default", [True, False])
@pytest.mark.parametrize("is_linked", [True, False])
@pytest.mark.parametrize("is_excluded", [True, False])
def test_has_access_truth_table(is_default, is_linked, is_excluded):
    intent = _intent("x", is_default)
    expected = (not is_excluded) if is_default else is_linked
    assert has_access(intent, SCOPE, is_linked, is_excluded) is expected


def test_status_does_not_gate_access():
    inactive = _intent("x", True, status="INACTIVE")
    assert has_access(inactive, SCOPE, False, False) is True


def test_filter_by_access_preserves_order():
    intents = [
        _intent("d1", True),
        _intent("n1", False),
        _intent("d2", True),
        _intent("n2", False),
        _intent("d3", True),
    ]
    visible = filter_by_access(intents, SCOPE, linked_ids={"n2"}, excluded_ids={"d2"})
    assert [i.id for i in visible] == ["d1", "n2", "d3"]


def test_filter_by_access_empty():
    assert filter_by_access([], SCOPE, set(), set()) == []

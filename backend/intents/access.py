"""Access resolution — which intents a scope can see.

A default intent is visible unless the scope excluded it; a non-default
intent is visible only where it is linked. Status does not gate visibility.
"""
from typing import AbstractSet, List, Sequence

from intents.entity import Intent
from intents.scope import ScopeId


def has_access(intent: Intent, scope: ScopeId, is_linked: bool, is_excluded: bool) -> bool:
    if intent.is_default:
        return not is_excluded
    return is_linked


def filter_by_access(
    intents: Sequence[Intent],
    scope: ScopeId,
    linked_ids: AbstractSet[str],
    excluded_ids: AbstractSet[str],
) -> List[Intent]:
    """Keep the intents scope can see, in input order."""
    return [
        intent
        for intent in intents
        if has_access(intent, scope, intent.id in linked_ids, intent.id in excluded_ids)
    ]

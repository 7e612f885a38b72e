"""Two-phase local mutations: apply a tentative value, then settle it.

A write is issued only after the tentative state is visible locally. When the
write returns, ``settle`` picks the state to keep: the tentative one on
success, the prior one on failure.
"""

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(frozen=True)
class Pending:
    prior: Any
    tentative: Any


def begin(prior, tentative):
    return Pending(prior=prior, tentative=tentative)


def settle(pending, succeeded):
    return pending.tentative if succeeded else pending.prior


def find_item(items, item_id, id_key="id"):
    if item_id is None:
        return None
    for item in items:
        if item.get(id_key) == item_id:
            return item
    return None


def patch_item(items: List[Dict[str, Any]], item_id, patch, id_key="id") -> List[Dict[str, Any]]:
    return [{**item, **patch} if item.get(id_key) == item_id else item for item in items]


def patch_mapping(mapping: Dict[str, Any], key, value) -> Dict[str, Any]:
    return {**mapping, key: value}

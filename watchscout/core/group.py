# core/group.py
from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Mapping, Sequence
from typing import TypeVar

from watchscout.core.models import EnrichedOffer
from watchscout.core.tracking import grouping_key

T = TypeVar("T")

# Strategia kolejności grup: (słownik grup) -> posortowane klucze
GroupOrder = Callable[[Mapping[str, Sequence[T]]], list[str]]


def by_key(groups: Mapping[str, Sequence[T]]) -> list[str]:
    return sorted(groups)


def by_size_then_key(groups: Mapping[str, Sequence[T]]) -> list[str]:
    return sorted(groups, key=lambda k: (-len(groups[k]), k))


def by_rank(ranks: Mapping[str, float]) -> GroupOrder:
    """Rosnąco po zewnętrznej randze; klucze bez rangi na końcu, remisy po kluczu."""
    def order(groups: Mapping[str, Sequence[T]]) -> list[str]:
        return sorted(groups, key=lambda k: (k not in ranks, ranks.get(k, 0), k))
    return order


ORDERS: dict[str, GroupOrder] = {
    "key": by_key,
    "size": by_size_then_key,
}


def group_items(
    items: Iterable[T],
    key: Callable[[T], str],
    order: GroupOrder = by_key,
) -> tuple[list[str], dict[str, list[T]]]:
    groups: dict[str, list[T]] = {}
    for it in items:
        groups.setdefault(key(it), []).append(it)
    return order(groups), groups


def group_by_url(
    offers: Iterable[EnrichedOffer],
    order: GroupOrder = by_key,
) -> tuple[list[str], dict[str, list[EnrichedOffer]]]:
    """Grupuje po kluczu z grouping_key; w grupie kolejność napływu."""
    return group_items(offers, lambda e: grouping_key(e.offer.url), order)


def filter_offers(offers: Iterable[EnrichedOffer], accepted: Collection[str]) -> list[EnrichedOffer]:
    # pusty zbiór = pusty wynik; brak filtra to pominięcie tego etapu
    accepted = frozenset(accepted)
    return [e for e in offers if e.offer.monetization_type in accepted]


def parse_filters(raw: str) -> frozenset[str]:
    return frozenset(s.strip() for s in raw.split(",") if s.strip())

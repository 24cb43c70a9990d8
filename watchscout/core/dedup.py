# core/dedup.py
from __future__ import annotations

from collections.abc import Iterable

from watchscout.core.models import EnrichedOffer

OfferKey = tuple[str, str, int, str]


def offer_key(e: EnrichedOffer) -> OfferKey:
    """Klucz równości: dwa rekordy są duplikatami wtw. gdy klucze są równe."""
    return (
        e.offer.url,
        e.offer.monetization_type,
        e.offer.element_count,
        e.locale.full_locale,
    )


def deduplicate(offers: Iterable[EnrichedOffer]) -> list[EnrichedOffer]:
    """
    Sortuje po kluczu (porównanie po code pointach, bez collation),
    potem zwija kolejne równe elementy, zostawiając pierwszy z serii.
    """
    out: list[EnrichedOffer] = []
    last: OfferKey | None = None
    for e in sorted(offers, key=offer_key):
        k = offer_key(e)
        if k == last:
            continue
        out.append(e)
        last = k
    return out

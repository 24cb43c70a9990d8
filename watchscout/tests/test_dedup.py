# tests/test_dedup.py
from __future__ import annotations

from watchscout.core.dedup import deduplicate, offer_key
from watchscout.core.locales import resolve_locale
from watchscout.core.models import EnrichedOffer, Offer


def _eo(url: str, kind: str = "BUY", count: int = 0, tag: str = "en_US") -> EnrichedOffer:
    return EnrichedOffer(
        offer=Offer(url=url, monetization_type=kind, element_count=count),
        locale=resolve_locale(tag),
    )


def test_empty_input():
    assert deduplicate([]) == []


def test_value_equal_distinct_instances_are_collapsed():
    a = _eo("https://p.test/x")
    b = _eo("https://p.test/x")
    assert a is not b
    out = deduplicate([a, b])
    assert len(out) == 1
    assert out[0] is a


def test_each_field_breaks_equality():
    base = _eo("https://p.test/x", "BUY", 0, "en_US")
    others = [
        _eo("https://p.test/y", "BUY", 0, "en_US"),
        _eo("https://p.test/x", "RENT", 0, "en_US"),
        _eo("https://p.test/x", "BUY", 2, "en_US"),
        _eo("https://p.test/x", "BUY", 0, "en_GB"),
    ]
    assert len(deduplicate([base, *others])) == 5


def test_output_sorted_by_composite_key():
    items = [
        _eo("https://b.test/", "RENT"),
        _eo("https://a.test/", "RENT"),
        _eo("https://a.test/", "BUY", tag="fr_FR"),
        _eo("https://a.test/", "BUY", tag="de_DE"),
    ]
    keys = [offer_key(e) for e in deduplicate(items)]
    assert keys == sorted(keys)
    assert keys[0] == ("https://a.test/", "BUY", 0, "de_DE")


def test_idempotent_and_complete():
    items = [
        _eo("https://a.test/", "BUY"),
        _eo("https://a.test/", "BUY"),
        _eo("https://a.test/", "RENT"),
        _eo("https://b.test/", "BUY", 3),
        _eo("https://b.test/", "BUY", 3),
        _eo("https://b.test/", "BUY", 3, "en_GB"),
    ]
    once = deduplicate(items)
    assert deduplicate(once) == once
    # liczba klas równoważności
    assert len(once) == len({offer_key(e) for e in items}) == 4
    assert {offer_key(e) for e in once} == {offer_key(e) for e in items}

# core/tracking.py
from __future__ import annotations

from typing import NamedTuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


class RemovalRule(NamedTuple):
    date: str  # kiedy reguła doszła; tylko informacyjnie
    key: str
    value: str


# Parametr usuwamy tylko przy dokładnym dopasowaniu wartości (pierwszego wystąpienia).
REMOVAL_RULES: list[RemovalRule] = [
    RemovalRule("2026-02-26", "autoplay", "1"),
    RemovalRule("2026-02-26", "searchReferral", "publisher"),
    RemovalRule("2026-02-26", "source", "bing"),
    RemovalRule("2026-02-26", "source", "search-feeds"),
    RemovalRule("2026-02-26", "utm_campaign", "vod_feed"),
    RemovalRule("2026-02-26", "utm_content", ""),
    RemovalRule("2026-02-26", "utm_medium", "deeplink"),
    RemovalRule("2026-02-26", "utm_medium", "partner"),
    RemovalRule("2026-02-26", "utm_source", "justWatch-v2-catalog"),
    RemovalRule("2026-02-26", "utm_source", "justwatch"),
    RemovalRule("2026-02-26", "utm_source", "universal_search"),
    RemovalRule("2026-02-26", "utm_term", ""),
]


def _first(params: list[tuple[str, str]], key: str) -> str:
    for k, v in params:
        if k == key:
            return v
    return ""


def grouping_key(url: str, rules: list[RemovalRule] = REMOVAL_RULES) -> str:
    """
    Kanoniczny klucz grupowania URL-a: bez znanych parametrów śledzących,
    pozostałe parametry posortowane po kluczu. Niepoprawny URL jest swoim kluczem.
    """
    trimmed = url.removesuffix("\n")
    try:
        parts = urlsplit(trimmed)
    except ValueError:
        return trimmed
    if not parts.query:
        return urlunsplit(parts)

    params = parse_qsl(parts.query, keep_blank_values=True)
    for rule in rules:
        if _first(params, rule.key) == rule.value:
            params = [(k, v) for k, v in params if k != rule.key]

    # sorted() jest stabilny, więc powtórzone klucze zachowują kolejność
    query = urlencode(sorted(params, key=lambda kv: kv[0]))
    return urlunsplit(parts._replace(query=query))

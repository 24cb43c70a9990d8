# adapters/base.py
from __future__ import annotations

from typing import Protocol

from watchscout.core.models import HrefLangTag, Locale, Offer


class Content(Protocol):
    path: str
    href_lang_tags: list[HrefLangTag]


class CatalogAdapter(Protocol):
    """
    Kontrakt adaptera katalogu.
    Pipeline woła fetch_content raz, potem offers dla każdej lokalizacji po kolei.
    """
    source: str  # np. "justwatch"

    def fetch_content(self, path: str) -> Content:
        """Pobiera stronę tytułu i zwraca wskazówki lokalizacji (href-lang)."""
        ...

    def offers(self, tag: HrefLangTag, locale: Locale) -> list[Offer]:
        """Oferty tytułu na rynku `locale`; błąd pobrania to TransportError."""
        ...

    def provider_slugs(self, country: str, provider_filter: set[str] | None = None) -> list[str]:
        """Slugi providerów z tytułami w danym kraju, w kolejności ze strony."""
        ...

# core/errors.py
from __future__ import annotations


class WatchscoutError(Exception):
    """Bazowy wyjątek pipeline'u."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MarkerNotFound(WatchscoutError):
    """Brak znacznika początku albo końca osadzonego payloadu w stronie."""
    def __init__(self, marker: bytes | str):
        if isinstance(marker, bytes):
            marker = marker.decode("utf-8", "replace")
        super().__init__(f"marker not found: {marker!r}")
        self.marker = marker


class UnknownLocale(WatchscoutError):
    """Wskazówka lokalizacji spoza tabeli. Przerywa cały run, nie jest pomijana."""
    def __init__(self, hint: str):
        super().__init__(f"unknown locale: {hint!r}")
        self.hint = hint


class TransportError(WatchscoutError):
    """Nieudane pobranie: status spoza 2xx, błąd połączenia albo dekodowania."""
    def __init__(self, message: str, *, url: str | None = None, status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


class PayloadDecodeError(TransportError):
    """Wycięty payload nie jest poprawnym JSON-em."""

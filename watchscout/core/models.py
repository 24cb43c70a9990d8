# core/models.py
from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Offer(BaseModel):
    """Pojedyncza oferta (BUY/RENT/FLATRATE...) dla tytułu pod danym URL."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(..., alias="standardWebURL")
    monetization_type: str = Field(..., alias="monetizationType")
    # 0 = nie dotyczy (np. film zamiast sezonu)
    element_count: int = Field(default=0, ge=0, alias="elementCount")

    @field_validator("element_count", mode="before")
    @classmethod
    def null_count(cls, v: int | None) -> int:
        return 0 if v is None else v

    @field_validator("url", "monetization_type", mode="before")
    @classmethod
    def null_text(cls, v: str | None) -> str:
        return "" if v is None else v


class Locale(BaseModel):
    model_config = ConfigDict(frozen=True)

    full_locale: str
    country: str
    country_name: str

    def __str__(self) -> str:
        return f"{self.full_locale} {self.country} {self.country_name}"


class HrefLangTag(BaseModel):
    """Alternatywna wersja strony tytułu dla innego rynku."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    href: str
    href_lang: str = Field(default="", alias="hrefLang")
    locale: str = ""

    @property
    def hint(self) -> str:
        return self.locale or self.href_lang


class EnrichedOffer(BaseModel):
    model_config = ConfigDict(frozen=True)

    offer: Offer
    locale: Locale


def enrich(offers: Iterable[Offer], locale: Locale) -> list[EnrichedOffer]:
    return [EnrichedOffer(offer=o, locale=locale) for o in offers]

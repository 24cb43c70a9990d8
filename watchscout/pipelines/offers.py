# pipelines/offers.py
from __future__ import annotations

from collections.abc import Collection
from pathlib import Path

from watchscout.adapters.base import CatalogAdapter
from watchscout.adapters.justwatch import JustWatchAdapter, get_path
from watchscout.core.dedup import deduplicate
from watchscout.core.group import GroupOrder, by_key, filter_offers, group_by_url
from watchscout.core.http import HttpClient, Throttle, build_proxies
from watchscout.core.locales import resolve_locale
from watchscout.core.log import get_logger
from watchscout.core.models import EnrichedOffer, enrich
from watchscout.core.report import render_report
from watchscout.core.storage import report_path, write_text_atomic

log = get_logger("watchscout.offers")


def collect_offers(adapter: CatalogAdapter, url_path: str, sleep_s: float) -> list[EnrichedOffer]:
    """
    Fold po lokalizacjach w kolejności odkrycia. Nieznana lokalizacja
    albo nieudane pobranie przerywa cały run.
    """
    plog = log.bind(path=url_path)
    content = adapter.fetch_content(url_path)
    throttle = Throttle(sleep_s)
    out: list[EnrichedOffer] = []
    for tag in content.href_lang_tags:
        locale = resolve_locale(tag.hint)
        throttle.wait()
        offers = adapter.offers(tag, locale)
        plog.info("locale_done", extra={"locale": locale.full_locale, "country": locale.country, "offers": len(offers)})
        out.extend(enrich(offers, locale))
    return out


def build_report(
    offers: list[EnrichedOffer],
    *,
    accepted: Collection[str] | None,
    order: GroupOrder = by_key,
) -> str:
    """dedup -> filtr (None = bez filtra) -> grupowanie -> tekst"""
    unique = deduplicate(offers)
    if accepted is not None:
        unique = filter_offers(unique, accepted)
    keys, groups = group_by_url(unique, order)
    log.info("report_built", extra={"raw": len(offers), "unique": len(unique), "groups": len(keys)})
    return render_report(keys, groups)


def run_address(
    *,
    address: str,
    out_dir: Path,
    user_agent: str,
    timeout_s: int,
    sleep_s: float,
    accepted: Collection[str] | None,
    order: GroupOrder = by_key,
    http_proxy: str | None = None,
    https_proxy: str | None = None,
    adapter: CatalogAdapter | None = None,
) -> Path:
    url_path = get_path(address)
    http = None
    if adapter is None:
        http = HttpClient(
            user_agent=user_agent,
            timeout_s=timeout_s,
            proxies=build_proxies(http_proxy, https_proxy),
        )
        adapter = JustWatchAdapter().with_deps(http=http)
    try:
        offers = collect_offers(adapter, url_path, sleep_s)
        text = build_report(offers, accepted=accepted, order=order)
        path = write_text_atomic(report_path(out_dir, url_path), text)
        log.info("report_written", extra={"path": str(path)})
        return path
    finally:
        if http is not None:
            http.close()

# pipelines/providers.py
from __future__ import annotations

from pathlib import Path
from typing import NamedTuple
from urllib.parse import urlsplit

from watchscout.adapters.base import CatalogAdapter
from watchscout.adapters.justwatch import JustWatchAdapter
from watchscout.core.errors import WatchscoutError
from watchscout.core.group import by_size_then_key, group_items
from watchscout.core.http import HttpClient, build_proxies
from watchscout.core.log import get_logger
from watchscout.core.storage import read_url_list

log = get_logger("watchscout.providers")


class ProviderRef(NamedTuple):
    country: str
    slug: str


def parse_provider_url(url: str) -> ProviderRef | None:
    """'https://www.justwatch.com/us/provider/netflix' -> ('us', 'netflix')"""
    try:
        parts = urlsplit(url)
    except ValueError:
        log.warning("provider_url_parse_fail", extra={"url": url})
        return None
    segments = parts.path.strip("/").split("/")
    if len(segments) != 3 or not segments[0] or not segments[2]:
        log.warning("provider_url_bad_format", extra={"url": url})
        return None
    return ProviderRef(country=segments[0], slug=segments[2])


def list_country(adapter: CatalogAdapter, country: str) -> list[ProviderRef]:
    """Jeden kraj, bez filtra; błąd leci wyżej."""
    return [ProviderRef(country, s) for s in adapter.provider_slugs(country)]


def resolve_provider_urls(adapter: CatalogAdapter, urls: list[str]) -> list[ProviderRef]:
    """
    Tryb wsadowy: kraje od największej liczby providerów, remis po kodzie.
    Kraj z jednym providerem nie wymaga zapytania; błąd kraju = log i dalej.
    """
    refs = [r for r in (parse_provider_url(u) for u in urls) if r is not None]
    countries, grouped = group_items(refs, lambda r: r.country, by_size_then_key)

    results: list[ProviderRef] = []
    for country in countries:
        slugs = [r.slug for r in grouped[country]]
        if len(slugs) == 1:
            results.append(ProviderRef(country, slugs[0]))
            continue
        try:
            found = adapter.provider_slugs(country, set(slugs))
        except WatchscoutError as e:
            log.bind(country=country).warning("provider_country_fail", extra={"err": type(e).__name__, "msg": e.message})
            continue
        results.extend(ProviderRef(country, s) for s in found)
    return results


def format_refs(refs: list[ProviderRef]) -> str:
    return "".join(f"{i}. ({r.country}) {r.slug}\n" for i, r in enumerate(refs, 1))


def _with_adapter(user_agent, timeout_s, http_proxy, https_proxy, fn):
    http = HttpClient(
        user_agent=user_agent,
        timeout_s=timeout_s,
        proxies=build_proxies(http_proxy, https_proxy),
    )
    try:
        return fn(JustWatchAdapter().with_deps(http=http))
    finally:
        http.close()


def run_country(
    *,
    country: str,
    user_agent: str,
    timeout_s: int,
    http_proxy: str | None = None,
    https_proxy: str | None = None,
) -> list[ProviderRef]:
    return _with_adapter(user_agent, timeout_s, http_proxy, https_proxy,
                         lambda a: list_country(a, country))


def run_provider_file(
    *,
    json_file: Path,
    user_agent: str,
    timeout_s: int,
    http_proxy: str | None = None,
    https_proxy: str | None = None,
) -> list[ProviderRef]:
    urls = read_url_list(json_file)
    log.info("provider_file_read", extra={"path": str(json_file), "urls": len(urls)})
    return _with_adapter(user_agent, timeout_s, http_proxy, https_proxy,
                         lambda a: resolve_provider_urls(a, urls))

# adapters/justwatch.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

from pydantic import ValidationError

from watchscout.core.errors import TransportError
from watchscout.core.http import HttpClient, join_url
from watchscout.core.log import get_logger
from watchscout.core.models import HrefLangTag, Locale, Offer
from watchscout.core.parse import deepget, find_href_lang_links, find_key
from watchscout.core.payload import decode_payload, extract_payload

BASE = "https://www.justwatch.com"
GRAPHQL = "https://apis.justwatch.com/graphql"

TITLE_OFFERS_QUERY = """
query GetUrlTitleDetails(
  $fullPath: String!
  $country: Country!
  $language: Language!
  $platform: Platform! = WEB
) {
  urlV2(fullPath: $fullPath) {
    node {
      ... on MovieOrShowOrSeason {
        offers(country: $country, platform: $platform) {
          elementCount
          monetizationType
          standardWebURL
        }
      }
    }
  }
}
"""

log = get_logger("watchscout.justwatch")


def get_path(address: str) -> str:
    """
    Adres -> ścieżka względna serwisu.
    'https://www.justwatch.com/us/movie/dune' i 'us/movie/dune' -> '/us/movie/dune'
    """
    address = address.strip()
    parts = urlsplit(address)
    path = parts.path if parts.netloc else address.split("?", 1)[0]
    path = "/" + path.strip("/")
    if path == "/":
        raise ValueError(f"address has no path: {address!r}")
    return path


@dataclass
class TitleContent:
    path: str
    href_lang_tags: list[HrefLangTag] = field(default_factory=list)


def parse_title_page(path: str, body: bytes | str) -> TitleContent:
    """Payload window.__DATA__ jest obowiązkowy; hreflang z payloadu, a jak brak to z <link>."""
    data = decode_payload(extract_payload(body))
    raw_tags = find_key(data, "hrefLangTags")
    if not isinstance(raw_tags, list) or not raw_tags:
        raw_tags = find_href_lang_links(body)

    tags: list[HrefLangTag] = []
    for raw in raw_tags:
        if not isinstance(raw, dict):
            continue
        try:
            tag = HrefLangTag.model_validate(raw)
        except ValidationError:
            log.warning("hreflang_invalid_skip", extra={"path": path, "raw": raw})
            continue
        if tag.href_lang.lower() == "x-default" and not tag.locale:
            continue
        try:
            href = get_path(tag.href)
        except ValueError:
            log.warning("hreflang_no_path_skip", extra={"path": path, "raw": raw})
            continue
        tags.append(tag.model_copy(update={"href": href}))
    return TitleContent(path=path, href_lang_tags=tags)


def parse_offers(resp: Any) -> list[Offer]:
    if not isinstance(resp, dict):
        raise TransportError("graphql response is not an object")
    if resp.get("errors"):
        msgs = [e.get("message", "") for e in resp["errors"] if isinstance(e, dict)]
        raise TransportError(f"graphql errors: {'; '.join(msgs) or resp['errors']}")
    node = deepget(resp, ["data", "urlV2", "node"])
    if not isinstance(node, dict):
        raise TransportError("graphql response has no urlV2.node")
    try:
        return [Offer.model_validate(o) for o in node.get("offers") or []]
    except ValidationError as e:
        raise TransportError(f"graphql offer decode failed: {e.error_count()} errors") from e


def parse_providers(body: bytes | str, provider_filter: set[str] | None = None) -> list[str]:
    data = decode_payload(extract_payload(body))
    providers = deepget(data, ["state", "constant", "providers"], default=[]) or []
    out: list[str] = []
    for p in providers:
        if not isinstance(p, dict) or not p.get("hasTitles"):
            continue
        slug = p.get("slug")
        if isinstance(slug, str) and slug and (provider_filter is None or slug in provider_filter):
            out.append(slug)
    return out


class JustWatchAdapter:
    source = "justwatch"

    def __init__(self):
        self.http: HttpClient | None = None

    def with_deps(self, *, http: HttpClient) -> "JustWatchAdapter":
        self.http = http
        return self

    def fetch_content(self, path: str) -> TitleContent:
        resp = self.http.get(join_url(BASE, path), accept="text/html")
        content = parse_title_page(path, resp.content)
        log.info("content_fetched", extra={"path": path, "tags": len(content.href_lang_tags)})
        return content

    def offers(self, tag: HrefLangTag, locale: Locale) -> list[Offer]:
        language = locale.full_locale.split("_", 1)[0]
        payload = {
            "operationName": "GetUrlTitleDetails",
            "query": TITLE_OFFERS_QUERY,
            "variables": {
                "fullPath": tag.href,
                "country": locale.country,
                "language": language,
                "platform": "WEB",
            },
        }
        return parse_offers(self.http.post_json(GRAPHQL, payload))

    def provider_slugs(self, country: str, provider_filter: set[str] | None = None) -> list[str]:
        resp = self.http.get(join_url(BASE, "/" + country.strip("/")), accept="text/html")
        return parse_providers(resp.content, provider_filter)

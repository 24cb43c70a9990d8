# tests/test_justwatch_adapter.py
from __future__ import annotations

import json
import types

import pytest

from watchscout.adapters.justwatch import (
    GRAPHQL,
    JustWatchAdapter,
    get_path,
    parse_offers,
    parse_providers,
    parse_title_page,
)
from watchscout.core.errors import MarkerNotFound, TransportError
from watchscout.core.locales import resolve_locale
from watchscout.core.models import HrefLangTag

TITLE_DATA = {
    "state": {
        "seo": {
            "hrefLangTags": [
                {"href": "/us/movie/dune", "hrefLang": "en-US", "locale": "en_US"},
                {"href": "https://www.justwatch.com/uk/movie/dune", "hrefLang": "en-GB", "locale": "en_GB"},
            ]
        }
    }
}

HTML_TITLE = (
    "<html><head><script>window.__DATA__=" + json.dumps(TITLE_DATA) + "</script></head><body></body></html>"
)

HTML_TITLE_LINKS = """
<html><head>
<link rel="alternate" hreflang="x-default" href="https://www.justwatch.com/us/movie/dune">
<link rel="alternate" hreflang="de-DE" href="https://www.justwatch.com/de/Film/dune">
<link rel="canonical" href="https://www.justwatch.com/us/movie/dune">
<script>window.__DATA__={"state": {}}</script>
</head></html>
"""

HTML_COUNTRY = (
    "<html><script>window.__DATA__="
    + json.dumps({"state": {"constant": {"providers": [
        {"slug": "netflix", "hasTitles": True},
        {"slug": "dead-service", "hasTitles": False},
        {"slug": "amazon-prime-video", "hasTitles": True},
        {"slug": "hulu", "hasTitles": True},
    ]}}})
    + "</script></html>"
)

GRAPHQL_OK = {
    "data": {
        "urlV2": {
            "node": {
                "offers": [
                    {"elementCount": 0, "monetizationType": "BUY", "standardWebURL": "https://tv.test/dune?utm_source=justwatch"},
                    {"elementCount": None, "monetizationType": "FLATRATE", "standardWebURL": "https://stream.test/dune"},
                ]
            }
        }
    }
}


class _Resp:
    def __init__(self, text):
        self.text = text
        self.content = text.encode("utf-8")


def test_get_path():
    assert get_path("https://www.justwatch.com/us/movie/dune") == "/us/movie/dune"
    assert get_path("us/movie/dune/") == "/us/movie/dune"
    assert get_path("/us/tv-show/severance?x=1") == "/us/tv-show/severance"
    with pytest.raises(ValueError):
        get_path("https://www.justwatch.com/")


def test_title_page_hreflang_from_payload():
    content = parse_title_page("/us/movie/dune", HTML_TITLE)
    assert [t.hint for t in content.href_lang_tags] == ["en_US", "en_GB"]
    assert [t.href for t in content.href_lang_tags] == ["/us/movie/dune", "/uk/movie/dune"]


def test_title_page_hreflang_fallback_to_link_tags():
    content = parse_title_page("/us/movie/dune", HTML_TITLE_LINKS)
    assert len(content.href_lang_tags) == 1
    tag = content.href_lang_tags[0]
    assert tag.hint == "de-DE"
    assert tag.href == "/de/Film/dune"


def test_title_page_without_payload_fails():
    with pytest.raises(MarkerNotFound):
        parse_title_page("/us/movie/dune", "<html><head></head></html>")


def test_parse_offers():
    offers = parse_offers(GRAPHQL_OK)
    assert [o.monetization_type for o in offers] == ["BUY", "FLATRATE"]
    assert offers[1].element_count == 0
    assert offers[0].url.endswith("utm_source=justwatch")


def test_parse_offers_errors():
    with pytest.raises(TransportError):
        parse_offers({"errors": [{"message": "bad country"}]})
    with pytest.raises(TransportError):
        parse_offers({"data": {"urlV2": None}})
    with pytest.raises(TransportError):
        parse_offers({"data": {"urlV2": {"node": {"offers": [{"monetizationType": "BUY"}]}}}})


def test_parse_providers_with_and_without_filter():
    assert parse_providers(HTML_COUNTRY) == ["netflix", "amazon-prime-video", "hulu"]
    assert parse_providers(HTML_COUNTRY, {"hulu", "netflix", "dead-service"}) == ["netflix", "hulu"]


def test_adapter_with_mock_http():
    calls = []

    def get(url, accept=None):
        calls.append(("GET", url))
        return _Resp(HTML_COUNTRY if url.endswith("/us") else HTML_TITLE)

    def post_json(url, payload):
        calls.append(("POST", url, payload["variables"]))
        return GRAPHQL_OK

    http = types.SimpleNamespace(get=get, post_json=post_json)
    adapter = JustWatchAdapter().with_deps(http=http)

    content = adapter.fetch_content("/us/movie/dune")
    assert calls[0] == ("GET", "https://www.justwatch.com/us/movie/dune")
    assert len(content.href_lang_tags) == 2

    tag = HrefLangTag(href="/uk/movie/dune", hrefLang="en-GB", locale="en_GB")
    offers = adapter.offers(tag, resolve_locale("en_GB"))
    assert len(offers) == 2
    assert calls[1] == ("POST", GRAPHQL, {"fullPath": "/uk/movie/dune", "country": "GB", "language": "en", "platform": "WEB"})

    assert adapter.provider_slugs("us", {"hulu"}) == ["hulu"]
    assert calls[2] == ("GET", "https://www.justwatch.com/us")


def test_parse_offers_null_text_fields_do_not_fail_batch():
    resp = {"data": {"urlV2": {"node": {"offers": [
        {"elementCount": 0, "monetizationType": "BUY", "standardWebURL": "https://tv.test/dune"},
        {"elementCount": 0, "monetizationType": "CINEMA", "standardWebURL": None},
        {"elementCount": 2, "monetizationType": None, "standardWebURL": "https://tv.test/s1"},
    ]}}}}
    offers = parse_offers(resp)
    assert len(offers) == 3
    assert offers[1].url == ""
    assert offers[1].monetization_type == "CINEMA"
    assert offers[2].monetization_type == ""


def test_parse_providers_skips_non_string_slugs():
    body = (
        "<html><script>window.__DATA__="
        + json.dumps({"state": {"constant": {"providers": [
            {"slug": ["netflix"], "hasTitles": True},
            {"slug": {"name": "hulu"}, "hasTitles": True},
            {"slug": 42, "hasTitles": True},
            {"slug": "mubi", "hasTitles": True},
        ]}}})
        + "</script></html>"
    )
    assert parse_providers(body) == ["mubi"]
    assert parse_providers(body, {"mubi", "hulu"}) == ["mubi"]

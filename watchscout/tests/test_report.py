from __future__ import annotations

from watchscout.core.locales import resolve_locale
from watchscout.core.models import EnrichedOffer, Offer
from watchscout.core.report import render_report
from watchscout.core.storage import read_url_list, report_path, write_text_atomic


def _eo(url, kind, count, tag):
    return EnrichedOffer(
        offer=Offer(url=url, monetization_type=kind, element_count=count),
        locale=resolve_locale(tag),
    )


def test_render_report_layout():
    groups = {
        "https://a.test/x": [_eo("https://a.test/x", "BUY", 0, "en_US"), _eo("https://a.test/x", "RENT", 2, "en_GB")],
        "https://b.test/y": [_eo("https://b.test/y", "FAST", 0, "de_DE")],
    }
    text = render_report(["https://a.test/x", "https://b.test/y"], groups)
    assert text == (
        "## https://a.test/x\n"
        "\n"
        "country = US\n"
        "name = United States\n"
        "monetization = BUY\n"
        "\n"
        "country = GB\n"
        "name = United Kingdom\n"
        "monetization = RENT\n"
        "count = 2\n"
        "\n"
        "## https://b.test/y\n"
        "\n"
        "country = DE\n"
        "name = Germany\n"
        "monetization = FAST\n"
    )


def test_render_empty_report():
    assert render_report([], {}) == ""


def test_report_path_and_atomic_write(tmp_path):
    p = report_path(tmp_path, "/us/movie/dune-part-two")
    assert p == tmp_path / "dune-part-two.md"
    write_text_atomic(p, "## x\n")
    assert p.read_text(encoding="utf-8") == "## x\n"
    assert [f.name for f in tmp_path.iterdir()] == ["dune-part-two.md"]


def test_read_url_list(tmp_path):
    f = tmp_path / "providers.json"
    f.write_text('["https://www.justwatch.com/us/provider/netflix"]', encoding="utf-8")
    assert read_url_list(f) == ["https://www.justwatch.com/us/provider/netflix"]

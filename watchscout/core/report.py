# core/report.py
from __future__ import annotations

from collections.abc import Mapping, Sequence

from watchscout.core.models import EnrichedOffer


def render_record(e: EnrichedOffer) -> list[str]:
    lines = [
        f"country = {e.locale.country}",
        f"name = {e.locale.country_name}",
        f"monetization = {e.offer.monetization_type}",
    ]
    if e.offer.element_count >= 1:
        lines.append(f"count = {e.offer.element_count}")
    return lines


def render_report(keys: Sequence[str], groups: Mapping[str, Sequence[EnrichedOffer]]) -> str:
    """
    Sekcja na grupę: nagłówek '## <url>', potem rekordy oddzielone pustą linią.
    Sekcje też rozdziela pusta linia.
    """
    sections: list[str] = []
    for key in keys:
        lines = [f"## {key}"]
        for e in groups[key]:
            lines.append("")
            lines.extend(render_record(e))
        sections.append("\n".join(lines) + "\n")
    return "\n".join(sections)

# core/locales.py
from __future__ import annotations

import re

from watchscout.core.errors import UnknownLocale
from watchscout.core.models import Locale

# pełny tag -> (kod kraju, nazwa kraju); rynki obsługiwane przez katalog
_LOCALE_TABLE: dict[str, tuple[str, str]] = {
    "ar_EG": ("EG", "Egypt"),
    "bg_BG": ("BG", "Bulgaria"),
    "cs_CZ": ("CZ", "Czech Republic"),
    "da_DK": ("DK", "Denmark"),
    "de_AT": ("AT", "Austria"),
    "de_CH": ("CH", "Switzerland"),
    "de_DE": ("DE", "Germany"),
    "el_GR": ("GR", "Greece"),
    "en_AU": ("AU", "Australia"),
    "en_CA": ("CA", "Canada"),
    "en_GB": ("GB", "United Kingdom"),
    "en_IE": ("IE", "Ireland"),
    "en_IN": ("IN", "India"),
    "en_NZ": ("NZ", "New Zealand"),
    "en_PH": ("PH", "Philippines"),
    "en_SG": ("SG", "Singapore"),
    "en_US": ("US", "United States"),
    "en_ZA": ("ZA", "South Africa"),
    "es_AR": ("AR", "Argentina"),
    "es_CL": ("CL", "Chile"),
    "es_CO": ("CO", "Colombia"),
    "es_EC": ("EC", "Ecuador"),
    "es_ES": ("ES", "Spain"),
    "es_MX": ("MX", "Mexico"),
    "es_PE": ("PE", "Peru"),
    "es_VE": ("VE", "Venezuela"),
    "et_EE": ("EE", "Estonia"),
    "fi_FI": ("FI", "Finland"),
    "fr_BE": ("BE", "Belgium"),
    "fr_CA": ("CA", "Canada"),
    "fr_CH": ("CH", "Switzerland"),
    "fr_FR": ("FR", "France"),
    "he_IL": ("IL", "Israel"),
    "hr_HR": ("HR", "Croatia"),
    "hu_HU": ("HU", "Hungary"),
    "id_ID": ("ID", "Indonesia"),
    "is_IS": ("IS", "Iceland"),
    "it_CH": ("CH", "Switzerland"),
    "it_IT": ("IT", "Italy"),
    "ja_JP": ("JP", "Japan"),
    "ko_KR": ("KR", "South Korea"),
    "lt_LT": ("LT", "Lithuania"),
    "lv_LV": ("LV", "Latvia"),
    "ms_MY": ("MY", "Malaysia"),
    "nb_NO": ("NO", "Norway"),
    "nl_BE": ("BE", "Belgium"),
    "nl_NL": ("NL", "Netherlands"),
    "pl_PL": ("PL", "Poland"),
    "pt_BR": ("BR", "Brazil"),
    "pt_PT": ("PT", "Portugal"),
    "ro_RO": ("RO", "Romania"),
    "ru_RU": ("RU", "Russia"),
    "sk_SK": ("SK", "Slovakia"),
    "sl_SI": ("SI", "Slovenia"),
    "sr_RS": ("RS", "Serbia"),
    "sv_SE": ("SE", "Sweden"),
    "th_TH": ("TH", "Thailand"),
    "tr_TR": ("TR", "Turkey"),
    "uk_UA": ("UA", "Ukraine"),
    "zh_HK": ("HK", "Hong Kong"),
    "zh_TW": ("TW", "Taiwan"),
}

_HINT_RE = re.compile(r"^([A-Za-z]{2,3})[-_]([A-Za-z]{2})$")


def canonical_tag(hint: str) -> str | None:
    """'en-us' / 'en-US' / 'en_US' -> 'en_US'; None gdy format nie pasuje."""
    m = _HINT_RE.match(hint.strip())
    if not m:
        return None
    return f"{m.group(1).lower()}_{m.group(2).upper()}"


def resolve_locale(hint: str) -> Locale:
    tag = canonical_tag(hint)
    if tag is None or tag not in _LOCALE_TABLE:
        raise UnknownLocale(hint)
    country, name = _LOCALE_TABLE[tag]
    return Locale(full_locale=tag, country=country, country_name=name)

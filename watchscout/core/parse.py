# core/parse.py
from __future__ import annotations

from typing import Any

from bs4 import BeautifulSoup


def soup(html: str | bytes):
    # Najpierw szybszy lxml – jeśli środowisko lub input robi fikołki, zrób twardy fallback.
    try:
        return BeautifulSoup(html, "lxml")
    except Exception:
        return BeautifulSoup(html, "html.parser")


def find_href_lang_links(html: str | bytes) -> list[dict[str, str]]:
    """<link rel="alternate" hreflang=... href=...> z nagłówka strony, bez x-default."""
    out: list[dict[str, str]] = []
    for el in soup(html).select("link[hreflang][href]"):
        rel = el.get("rel") or []
        if "alternate" not in rel:
            continue
        lang = el["hreflang"].strip()
        if not lang or lang.lower() == "x-default":
            continue
        out.append({"hrefLang": lang, "href": el["href"].strip()})
    return out


def find_key(node: Any, key: str) -> Any | None:
    """Pierwsza wartość pod kluczem `key` w drzewie JSON (DFS, kolejność dokumentu)."""
    if isinstance(node, dict):
        if key in node:
            return node[key]
        children = node.values()
    elif isinstance(node, list):
        children = node
    else:
        return None
    for child in children:
        found = find_key(child, key)
        if found is not None:
            return found
    return None


def deepget(d: Any, path: list[str], default: Any = None) -> Any:
    cur = d
    for k in path:
        if isinstance(cur, dict) and k in cur:
            cur = cur[k]
        else:
            return default
    return cur

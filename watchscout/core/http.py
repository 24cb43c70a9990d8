from __future__ import annotations

import time
import urllib.parse
from typing import Any

import httpx

from watchscout.core.errors import TransportError
from watchscout.core.log import get_logger

log = get_logger("watchscout.http")

# zapytania GraphQL idą dziesiątkami, nie logujemy ich
QUIET_PATHS = frozenset({"/graphql"})


class Throttle:
    """Stała przerwa przed każdą jednostką pracy poza pierwszą. Blokujący, bez asyncio."""
    def __init__(self, delay_s: float):
        self.delay_s = max(delay_s, 0.0)
        self._started = False

    def wait(self) -> None:
        if self._started and self.delay_s > 0:
            time.sleep(self.delay_s)
        self._started = True


def _log_request(request: httpx.Request) -> None:
    if request.url.path not in QUIET_PATHS:
        log.info("http_request", extra={"method": request.method, "url": str(request.url)})


class HttpClient:
    """Sync httpx + proxy + nagłówki UA. Bez retry: każdy błąd to TransportError."""
    def __init__(
        self,
        user_agent: str,
        timeout_s: int = 20,
        proxies: dict[str, str] | None = None,
        extra_headers: dict[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        headers = {
            "User-Agent": user_agent,
            "Accept-Language": "en-US,en;q=0.9",
        }
        if extra_headers:
            headers.update(extra_headers)
        mounts = None
        if proxies and transport is None:
            mounts = {scheme: httpx.HTTPTransport(proxy=url) for scheme, url in proxies.items()}
        self._client = httpx.Client(
            timeout=httpx.Timeout(timeout_s),
            headers=headers,
            mounts=mounts,
            transport=transport,
            follow_redirects=True,
            event_hooks={"request": [_log_request]},
        )

    def close(self) -> None:
        self._client.close()

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            resp = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {url} failed: {type(e).__name__}: {e}", url=url) from e
        if not resp.is_success:
            raise TransportError(
                f"{method} {url} returned {resp.status_code} {resp.reason_phrase}",
                url=url,
                status=resp.status_code,
            )
        return resp

    def get(self, url: str, *, accept: str | None = None) -> httpx.Response:
        headers = {}
        if accept:
            headers["Accept"] = accept
        return self._send("GET", url, headers=headers)

    def post_json(self, url: str, payload: dict[str, Any]) -> Any:
        resp = self._send("POST", url, json=payload)
        try:
            return resp.json()
        except ValueError as e:
            raise TransportError(f"POST {url} returned invalid JSON: {e}", url=url) from e


def build_proxies(http_proxy: str | None, https_proxy: str | None) -> dict[str, str] | None:
    proxies = {}
    if http_proxy:
        proxies["http://"] = http_proxy
    if https_proxy:
        proxies["https://"] = https_proxy
    return proxies or None


def join_url(base: str, href: str) -> str:
    return urllib.parse.urljoin(base, href)

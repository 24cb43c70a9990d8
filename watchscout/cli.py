# watchscout/cli.py
from __future__ import annotations
from pathlib import Path
from typing import Optional

import typer

from watchscout.config import load_settings
from watchscout.core.errors import WatchscoutError
from watchscout.core.group import ORDERS, parse_filters
from watchscout.core.log import get_logger, setup_json_logger
from watchscout.pipelines.offers import run_address
from watchscout.pipelines.providers import format_refs, run_country, run_provider_file

app = typer.Typer(add_completion=False, no_args_is_help=True, rich_markup_mode=None)

log = get_logger("watchscout.cli")


@app.command("offers")
def offers_cmd(
    address: str = typer.Option(..., "--address", "-a", help="URL albo ścieżka tytułu, np. /us/movie/dune"),
    sleep: Optional[float] = typer.Option(None, "--sleep", "-s", min=0.0, help="Przerwa między lokalizacjami [s]"),
    filters: Optional[str] = typer.Option(None, "--filters", "-f", help="Typy monetyzacji po przecinku"),
    no_filter: bool = typer.Option(False, "--no-filter", help="Pomiń etap filtrowania"),
    order: str = typer.Option("key", "--order", "-o", help="key|size: kolejność grup URL"),
    out_dir: Optional[Path] = typer.Option(None, "--out-dir", help="Katalog raportu"),
) -> None:
    """Zbiera oferty tytułu ze wszystkich rynków i zapisuje raport <slug>.md."""
    cfg = load_settings()
    setup_json_logger(cfg.log.level)
    if order not in ORDERS:
        raise typer.BadParameter(f"nieznana kolejność: {order}", param_hint="--order")
    accepted = None if no_filter else parse_filters(filters if filters is not None else cfg.defaults.filters)
    try:
        path = run_address(
            address=address,
            out_dir=out_dir or cfg.io.out_dir,
            user_agent=cfg.http.user_agent,
            timeout_s=cfg.http.timeout_s,
            sleep_s=cfg.http.sleep_s if sleep is None else sleep,
            accepted=accepted,
            order=ORDERS[order],
            http_proxy=cfg.http.http_proxy,
            https_proxy=cfg.http.https_proxy,
        )
    except (WatchscoutError, ValueError, OSError) as e:
        log.error("offers_fail", extra={"address": address, "err": type(e).__name__, "msg": str(e)})
        raise typer.Exit(code=1)
    typer.echo(str(path))


@app.command("providers")
def providers_cmd(
    country: Optional[str] = typer.Option(None, "--country", "-a", help="Kod kraju, np. us"),
    json_file: Optional[Path] = typer.Option(None, "--file", "-b", help="Plik JSON z listą URL-i providerów"),
) -> None:
    """Wypisuje slugi providerów z tytułami: dla kraju albo dla listy URL-i."""
    if not country and json_file is None:
        raise typer.BadParameter("podaj --country albo --file")
    cfg = load_settings()
    setup_json_logger(cfg.log.level)
    common = dict(
        user_agent=cfg.http.user_agent,
        timeout_s=cfg.http.timeout_s,
        http_proxy=cfg.http.http_proxy,
        https_proxy=cfg.http.https_proxy,
    )
    if country:
        try:
            refs = run_country(country=country, **common)
        except WatchscoutError as e:
            log.error("providers_country_fail", extra={"country": country, "err": type(e).__name__, "msg": e.message})
            raise typer.Exit(code=1)
        typer.echo(format_refs(refs), nl=False)
    if json_file is not None:
        try:
            refs = run_provider_file(json_file=json_file, **common)
        except (OSError, ValueError) as e:
            log.error("providers_file_fail", extra={"path": str(json_file), "err": type(e).__name__, "msg": str(e)})
            raise typer.Exit(code=1)
        typer.echo(format_refs(refs), nl=False)


if __name__ == "__main__":
    app()

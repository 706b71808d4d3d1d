from __future__ import annotations

import asyncio
from typing import Optional

import typer

from fxrates.config import Config
from fxrates.conversion import convert, normalize_pair
from fxrates.models import RateSnapshot
from fxrates.providers import get_provider
from fxrates.store import RateStore
from fxrates.loader import load_rates
from fxrates.utils.errors import CurrencyExchangeError, UnknownCurrencyError


app = typer.Typer(add_completion=False, help="Currency Exchange CLI")

CURRENCIES_PER_LINE = 8


def _config(config_path: Optional[str]) -> Config:
    try:
        return Config(config_path)
    except CurrencyExchangeError as e:
        typer.secho(f"Configuration error: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)


def _fetch(cfg: Config, base: Optional[str] = None) -> RateSnapshot:
    base = (base or cfg.base_currency).upper()
    typer.echo(f"Fetching latest exchange rates with {base} as base...")
    try:
        return asyncio.run(load_rates(RateStore(), get_provider(cfg), base))
    except CurrencyExchangeError as e:
        typer.secho(f"Failed to fetch rates: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)


def _print_currencies(snapshot: RateSnapshot) -> None:
    codes = snapshot.currencies()
    typer.echo(f"\nAvailable currencies (base: {snapshot.base}):")
    for i in range(0, len(codes), CURRENCIES_PER_LINE):
        typer.echo("  " + "  ".join(codes[i:i + CURRENCIES_PER_LINE]))
    typer.echo(f"\nRates as of: {snapshot.date}")


def _format_conversion(amount: float, source: str, result: float, target: str) -> str:
    return f"→ {amount:.4f} {source} = {result:.4f} {target}"


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default: server.host)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port (default: server.port)"),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
):
    """Load rates and serve the HTTP API."""
    import uvicorn

    from backend.main import create_app

    cfg = _config(config_path)
    uvicorn.run(
        create_app(config=cfg),
        host=host or cfg.host,
        port=port or cfg.port,
        log_level="info",
    )


@app.command("rates")
def show_rates(
    base: Optional[str] = typer.Option(None, "--base", "-b", help="Base currency (default: rates.base_currency)"),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
):
    """Fetch the latest rates and list the available currencies."""
    snapshot = _fetch(_config(config_path), base)
    _print_currencies(snapshot)


@app.command("convert")
def convert_once(
    amount: float = typer.Argument(..., help="Amount to convert"),
    to_currency: str = typer.Option(..., "--to", "-t", help="Target currency, e.g. USD"),
    from_currency: Optional[str] = typer.Option(None, "--from", "-f", help="Source currency (default: base)"),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
):
    """Convert a single amount and exit."""
    snapshot = _fetch(_config(config_path))
    try:
        source, target = normalize_pair(from_currency or snapshot.base, to_currency)
        result = convert(amount, source, target, snapshot.base, snapshot.rates)
    except CurrencyExchangeError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo(_format_conversion(amount, source, result, target))


@app.command("interactive")
def interactive(
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
):
    """Prompt for amounts in the base currency and convert them until 'quit'."""
    snapshot = _fetch(_config(config_path))
    _print_currencies(snapshot)
    base = snapshot.base
    typer.echo("\nNote: Enter currencies as ISO codes (e.g. USD, EUR, SGD)")
    typer.echo("      Type 'quit' or 'exit' or Ctrl+C to quit\n")

    while True:
        amount_str = typer.prompt(f"Enter amount in {base} (e.g. 1000)", default="", show_default=False).strip()
        if not amount_str:
            continue
        if amount_str.lower() in ("quit", "exit"):
            typer.echo("Goodbye!")
            break

        try:
            amount = float(amount_str)
        except ValueError:
            typer.echo("Invalid amount. Please enter a number.")
            continue

        to_currency = typer.prompt("To currency (e.g. USD)", default="", show_default=False).strip()
        if not to_currency:
            continue

        try:
            source, target = normalize_pair(base, to_currency)
            result = convert(amount, source, target, base, snapshot.rates)
        except UnknownCurrencyError as e:
            typer.echo(f"Unknown currency: {e.code}. Try again.")
            continue

        typer.echo(_format_conversion(amount, source, result, target))
        typer.echo("")


if __name__ == "__main__":
    app()

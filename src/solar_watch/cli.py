#!/usr/bin/env python3
"""
Solar Watch - Command Line
==========================

Classify readings and summarize saved NOAA/DONKI payloads in the terminal.

Examples:
    solar-watch classify speed 520
    solar-watch classify -- bz -12
    solar-watch xray-class 2.3e-5
    solar-watch status 2.3e-5 150
    solar-watch summary --xray xrays.json --proton protons.json --flares flr.json
    solar-watch cmes cme.json --filter earthDirected
    solar-watch impact cme.json 2026-01-10T12:00:00-CME-001
"""

import asyncio
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from solar_watch import __version__
from solar_watch.config import Settings, load_settings
from solar_watch.data_sources import (
    load_payload,
    parse_xray_flux,
    parse_proton_flux,
    parse_solar_wind_table,
    parse_magnetometer,
    parse_flares,
    parse_cmes,
    latest_valid,
    PLASMA_COLUMNS,
    MAG_COLUMNS,
)
from solar_watch.monitoring import (
    TABLES,
    CMEFilter,
    StatusFormatter,
    adjusted_score,
    analyze_substorm,
    aurora_score_bucket,
    classify,
    filter_cmes,
    flare_alert_categories,
    gauge_style,
    get_overall_activity_status,
    get_proton_class,
    get_xray_class,
    impact_profile,
    location_adjustment,
    summarize,
    xray_letter,
)
from solar_watch.scheduler import PollScheduler
from solar_watch.utils.time import now_utc, parse_iso_timestamp


# Typer CLI app
app = typer.Typer(
    name="solar-watch",
    help="☀️ Solar Watch - Space weather classification from NOAA and DONKI data",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def _setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj if isinstance(ctx.obj, Settings) else Settings()


def _load(path: Optional[Path], default=None):
    """Load a JSON payload or exit with an error message."""
    if path is None:
        return default
    try:
        return load_payload(path)
    except (OSError, ValueError) as e:
        console.print(f"[bold red]Cannot read {path}:[/] {e}")
        raise typer.Exit(code=1)


def _parse_now(now: Optional[str]) -> datetime:
    if now is None:
        return now_utc()
    parsed = parse_iso_timestamp(now)
    if parsed is None:
        raise typer.BadParameter(f"not an ISO timestamp: {now}", param_hint="--now")
    return parsed


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Path = typer.Option(None, "--config", help="Settings file (default: ~/.config/solar-watch/config.toml)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """
    ☀️ Space weather classification from saved NOAA SWPC and NASA DONKI payloads.
    """
    _setup_logging(verbose)
    try:
        ctx.obj = load_settings(config)
    except ValueError as e:
        console.print(f"[bold red]Invalid settings:[/] {e}")
        raise typer.Exit(code=2)


@app.command()
def version():
    """
    Show the installed version.
    """
    console.print(f"solar-watch {__version__}")


@app.command(name="classify")
def classify_cmd(
    quantity: str = typer.Argument(..., help="speed, density, power, bt, bz or aurora"),
    value: float = typer.Argument(..., help="Reading in the quantity's unit"),
):
    """
    🎨 Classify a single reading into a severity bucket.
    """
    if quantity == "aurora":
        bucket = aurora_score_bucket(value)
        console.print(f"aurora score {value:g}: [bold]{bucket.value}[/]")
        return

    if quantity not in TABLES:
        raise typer.BadParameter(
            f"unknown quantity '{quantity}' (choose from {', '.join(TABLES)}, aurora)",
            param_hint="QUANTITY",
        )
    table = TABLES[quantity]
    style = gauge_style(value, table)
    console.print(
        f"{quantity} {value:g} {table.unit}: {style.emoji} [bold]{classify(value, table).value}[/] "
        f"({style.percentage:.0f}%)"
    )


@app.command(name="xray-class")
def xray_class(
    flux: float = typer.Argument(..., help="GOES 0.1-0.8 nm flux in W/m²"),
):
    """
    🌡️ Flare class label for an X-ray flux.
    """
    console.print(f"{get_xray_class(flux)} [dim](class {xray_letter(flux)})[/]")


@app.command()
def status(
    ctx: typer.Context,
    xray_flux: float = typer.Argument(..., help="GOES 0.1-0.8 nm flux in W/m²"),
    proton_flux: float = typer.Argument(..., help="GOES >=10 MeV proton flux in pfu"),
):
    """
    🔍 Overall activity status from the latest X-ray and proton flux.
    """
    settings = _settings(ctx)
    xray_label = get_xray_class(xray_flux)
    proton_label = get_proton_class(proton_flux)
    overall = get_overall_activity_status(xray_label, proton_label)

    StatusFormatter(console).print_activity_status(xray_label, proton_label, overall)

    alerts = flare_alert_categories(xray_flux, settings.flare_alert_min_flux)
    if alerts:
        console.print(f"  [bold red]⚠️  FLARE ALERT: {', '.join(alerts)}[/]")


@app.command()
def summary(
    ctx: typer.Context,
    xray: Path = typer.Option(None, "--xray", "-x", help="NOAA GOES X-ray flux JSON"),
    proton: Path = typer.Option(None, "--proton", "-p", help="NOAA GOES integral proton JSON"),
    flares: Path = typer.Option(None, "--flares", "-f", help="DONKI FLR JSON"),
    now: str = typer.Option(None, "--now", help="End of the window (ISO, default: now)"),
):
    """
    📊 Rolling-window activity summary (peak X-ray, peak protons, flare counts).
    """
    settings = _settings(ctx)
    result = summarize(
        parse_xray_flux(_load(xray, [])),
        parse_proton_flux(_load(proton, [])),
        parse_flares(_load(flares, [])),
        _parse_now(now),
        window=settings.summary_window,
        max_longitude=settings.earth_directed_max_longitude,
    )
    formatter = StatusFormatter(console)
    formatter.print_summary(result)
    formatter.print_footer()


@app.command()
def gauges(
    plasma: Path = typer.Option(None, "--plasma", help="DSCOVR plasma table JSON"),
    mag: Path = typer.Option(None, "--mag", help="DSCOVR mag table JSON"),
):
    """
    💨 Latest solar wind readings as gauges.
    """
    readings = {}
    plasma_rows = _load(plasma, [])
    mag_rows = _load(mag, [])
    columns = [(c, plasma_rows) for c in PLASMA_COLUMNS] + [(c, mag_rows) for c in MAG_COLUMNS]
    for column, rows in columns:
        latest = latest_valid(parse_solar_wind_table(rows, column))
        # bz_gsm is shown on the bz gauge
        readings[column.removesuffix('_gsm')] = latest.value if latest else None

    StatusFormatter(console).print_gauges(readings)


@app.command()
def cmes(
    ctx: typer.Context,
    catalog: Path = typer.Argument(..., help="DONKI CME JSON"),
    cme_filter: CMEFilter = typer.Option(CMEFilter.ALL, "--filter", help="all, earthDirected or notEarthDirected"),
):
    """
    ☄️ List catalog CMEs with Earth-directed flags and predicted arrival.
    """
    settings = _settings(ctx)
    processed = parse_cmes(
        _load(catalog),
        max_longitude=settings.earth_directed_max_longitude,
        min_speed=settings.min_cme_speed,
    )
    StatusFormatter(console).print_cme_list(filter_cmes(processed, cme_filter))


@app.command()
def impact(
    ctx: typer.Context,
    catalog: Path = typer.Argument(..., help="DONKI CME JSON"),
    cme_id: str = typer.Argument(..., help="CME activity ID"),
    step: int = typer.Option(30, "--step", help="Sample spacing in minutes"),
    horizon: int = typer.Option(12, "--horizon", help="Hours after arrival"),
):
    """
    📈 Synthetic speed/density profile of one CME at Earth.
    """
    if step <= 0 or horizon <= 0:
        raise typer.BadParameter("step and horizon must be positive")

    settings = _settings(ctx)
    processed = parse_cmes(
        _load(catalog),
        max_longitude=settings.earth_directed_max_longitude,
        min_speed=settings.min_cme_speed,
    )
    match = next((c for c in processed if c.id == cme_id), None)
    if match is None:
        console.print(f"[bold red]CME not found:[/] {cme_id}")
        raise typer.Exit(code=1)

    samples = impact_profile(match, step=timedelta(minutes=step), horizon=timedelta(hours=horizon))
    StatusFormatter(console).print_impact_profile(match, samples)


@app.command()
def substorm(
    ctx: typer.Context,
    magnetometer: Path = typer.Argument(..., help="GOES magnetometer JSON"),
    score: float = typer.Option(None, "--score", help="Aurora forecast score (0-100)"),
    latitude: float = typer.Option(None, "--latitude", help="Observer latitude for the score adjustment"),
):
    """
    🧲 Substorm growth/eruption signatures in the GOES Hp component.
    """
    settings = _settings(ctx)
    adjusted = None
    if score is not None:
        adjustment = 0.0
        if latitude is not None:
            adjustment = location_adjustment(latitude, settings.reference_latitude)
        adjusted = adjusted_score(score, adjustment)
        console.print(f"Adjusted aurora score: [bold]{adjusted:.1f}%[/]")

    activity = analyze_substorm(parse_magnetometer(_load(magnetometer)), adjusted_score=adjusted)
    StatusFormatter(console).print_substorm(activity)


@app.command()
def monitor(
    ctx: typer.Context,
    xray: Path = typer.Option(None, "--xray", "-x", help="NOAA GOES X-ray flux JSON"),
    proton: Path = typer.Option(None, "--proton", "-p", help="NOAA GOES integral proton JSON"),
    flares: Path = typer.Option(None, "--flares", "-f", help="DONKI FLR JSON"),
    interval: float = typer.Option(None, "--interval", "-i", help="Refresh interval in seconds"),
):
    """
    📡 Re-read the payload files periodically and print the summary.

    Point it at files kept fresh by your own downloader.
    """
    settings = _settings(ctx).with_overrides(refresh_interval=interval)
    formatter = StatusFormatter(console)

    def read_files():
        return (
            parse_xray_flux(load_payload(xray) if xray else []),
            parse_proton_flux(load_payload(proton) if proton else []),
            parse_flares(load_payload(flares) if flares else []),
        )

    async def fetch():
        return await asyncio.to_thread(read_files)

    def show(data):
        formatter.print_header()
        formatter.print_summary(summarize(
            *data,
            now_utc(),
            window=settings.summary_window,
            max_longitude=settings.earth_directed_max_longitude,
        ))
        formatter.print_footer()

    async def run():
        scheduler = PollScheduler(fetch, show, interval=settings.refresh_interval, name="payloads")
        scheduler.start()
        try:
            await asyncio.Event().wait()
        finally:
            await scheduler.stop()

    console.print(f"[bold cyan]Starting monitoring[/] (interval: {settings.refresh_interval:g}s)")
    console.print("[dim]Press Ctrl+C to stop[/]\n")
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        console.print("\n  Monitoring stopped.")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

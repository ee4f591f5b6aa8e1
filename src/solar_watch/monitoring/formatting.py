"""
Status Formatting with Rich
============================

Terminal output for gauges, activity summaries and CME lists.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.style import Style
from rich import box

from .constants import NOT_AVAILABLE, PALETTE, ActivityStatus, Bucket
from .thresholds import TABLES, gauge_style
from .aurora import SubstormActivity, SubstormState
from .cme import ImpactSample, ProcessedCME
from .summary import ActivitySummary, PeakReading
from ..utils.time import format_timestamp


console = Console()


class StatusFormatter:
    """
    Format status reports using Rich for terminal output.
    """

    BUCKET_STYLES = {bucket: Style(color=PALETTE[bucket].solid, bold=bucket.severity >= 3) for bucket in Bucket}

    STATUS_STYLES = {
        ActivityStatus.NOT_AVAILABLE: Style(color="bright_black"),
        ActivityStatus.QUIET: Style(color="green"),
        ActivityStatus.MODERATE: Style(color="yellow"),
        ActivityStatus.HIGH: Style(color="red", bold=True),
        ActivityStatus.VERY_HIGH: Style(color="magenta", bold=True),
    }

    STATUS_ICONS = {
        ActivityStatus.NOT_AVAILABLE: '❓',
        ActivityStatus.QUIET: '🟢',
        ActivityStatus.MODERATE: '🟡',
        ActivityStatus.HIGH: '🔴',
        ActivityStatus.VERY_HIGH: '🟣',
    }

    SUBSTORM_STYLES = {
        SubstormState.AWAITING_DATA: "dim",
        SubstormState.STABLE: "bright_black",
        SubstormState.STRETCHING: "yellow",
        SubstormState.ERUPTING: "bold green",
    }

    def __init__(self, output: Console = None):
        self.console = output or console

    def print_header(self, now: datetime = None):
        """Print the main status header."""
        now = now or datetime.now(timezone.utc)
        header = Panel(
            f"[bold white]{format_timestamp(now, 'display')}[/]",
            title="[bold cyan]☀️ SOLAR WATCH[/]",
            border_style="cyan",
            box=box.DOUBLE,
        )
        self.console.print(header)

    def print_gauges(self, readings: dict):
        """Print solar wind gauges: {quantity name: value}."""
        table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        table.add_column("Quantity")
        table.add_column("Value", justify="right")
        table.add_column("Level")
        table.add_column("Gauge")

        for name, value in readings.items():
            threshold_table = TABLES[name]
            style = gauge_style(value, threshold_table)
            shown = "[dim]n/a[/]" if value is None else f"{value:.1f} {threshold_table.unit}"
            filled = round(style.percentage / 10)
            bar = "█" * filled + "·" * (10 - filled)
            table.add_row(
                name,
                shown,
                f"{style.emoji} {style.bucket.value}",
                f"[{self.BUCKET_STYLES[style.bucket]}]{bar}[/] {style.percentage:.0f}%",
            )

        self.console.print(Panel(table, title="💨 SOLAR WIND", border_style="blue"))

    def print_activity_status(self, xray_class: str, proton_class: str, status: ActivityStatus):
        """Print X-ray class, proton class and the combined status."""
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Label", style="dim")
        table.add_column("Value")
        table.add_row("X-ray", xray_class)
        table.add_row("Protons", proton_class)
        table.add_row(
            "Activity",
            f"[{self.STATUS_STYLES[status]}]{self.STATUS_ICONS[status]} {status.value}[/]",
        )
        self.console.print(Panel(table, title="🌡️ SOLAR ACTIVITY", border_style="blue"))

    def _peak_row(self, label: str, peak: Optional[PeakReading], unit: str) -> tuple[str, str, str]:
        if peak is None:
            return label, f"[dim]{NOT_AVAILABLE}[/]", ""
        return (
            label,
            f"[bold]{peak.class_label}[/] ({peak.flux:.2e} {unit})",
            f"[dim]{format_timestamp(peak.timestamp, 'short')}[/]",
        )

    def print_summary(self, summary: Optional[ActivitySummary]):
        """Print the rolling-window activity summary."""
        if summary is None:
            self.console.print(Panel("[dim]No data in the summary window[/]", title="📊 SUMMARY", border_style="dim"))
            return

        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Label", style="dim")
        table.add_column("Value")
        table.add_column("Time")
        table.add_row(*self._peak_row("Peak X-ray", summary.highest_xray, "W/m²"))
        table.add_row(*self._peak_row("Peak protons", summary.highest_proton, "pfu"))
        counts = summary.flare_counts
        table.add_row("X flares", str(counts.x), "")
        table.add_row("M flares", str(counts.m), "")
        table.add_row("Potential CMEs", str(counts.potential_cmes), "")

        hours = (summary.window_end - summary.window_start).total_seconds() / 3600
        self.console.print(Panel(
            table,
            title=f"📊 {hours:.0f}-HOUR SUMMARY",
            border_style="magenta",
            subtitle=f"[dim]until {format_timestamp(summary.window_end, 'display')}[/]",
        ))

    def print_cme_list(self, cmes: Iterable[ProcessedCME]):
        """Print catalog CMEs, newest first."""
        cmes = list(cmes)
        if not cmes:
            self.console.print("[yellow]No modelled CMEs in the catalog.[/]")
            return

        table = Table(title="☄️ CORONAL MASS EJECTIONS", box=box.ROUNDED)
        table.add_column("ID")
        table.add_column("Start")
        table.add_column("Speed", justify="right")
        table.add_column("Lon", justify="right")
        table.add_column("Half-angle", justify="right")
        table.add_column("Earth")
        table.add_column("Predicted arrival")

        for cme in cmes:
            arrival = cme.predicted_arrival_time
            table.add_row(
                cme.id,
                format_timestamp(cme.start_time, 'short'),
                f"{cme.speed:.0f} km/s",
                f"{cme.longitude:+.0f}°",
                f"{cme.half_angle:.0f}°",
                "[bold red]🌍 yes[/]" if cme.is_earth_directed else "[dim]no[/]",
                format_timestamp(arrival, 'display') if arrival else "[dim]-[/]",
            )
        self.console.print(table)

    def print_impact_profile(self, cme: ProcessedCME, samples: Iterable[ImpactSample]):
        """Print the synthetic impact profile of one CME."""
        table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        table.add_column("Time (UTC)")
        table.add_column("Speed", justify="right")
        table.add_column("Density", justify="right")

        count = 0
        for sample in samples:
            count += 1
            bucket = gauge_style(sample.speed, TABLES['speed']).bucket
            table.add_row(
                format_timestamp(sample.time, 'short'),
                f"[{self.BUCKET_STYLES[bucket]}]{sample.speed:.0f}[/] km/s",
                f"{sample.density:.1f} p/cm³",
            )

        if count == 0:
            self.console.print(f"[yellow]{cme.id}: no predicted arrival, no impact profile.[/]")
            return
        self.console.print(Panel(table, title=f"📈 IMPACT PROFILE: {cme.id}", border_style="bright_blue"))

    def print_substorm(self, activity: SubstormActivity):
        """Print the magnetometer substorm analysis."""
        style = self.SUBSTORM_STYLES[activity.state]
        self.console.print(Panel(f"[{style}]{activity.text}[/]", title="🧲 MAGNETIC FIELD", border_style="cyan"))

    def print_footer(self):
        """Print footer."""
        self.console.print("[dim]Data: NOAA SWPC, NASA DONKI. Heuristics are approximate.[/]")

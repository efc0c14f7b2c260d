from __future__ import annotations

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from achievement_registry.domain.models import ContractHealth, UserReport


def _fmt_time(value: Optional[int]) -> str:
    return "N/A" if value is None else f"{value:,}"


def render_user_report(report: UserReport) -> Table:
    """
    Build a two-column table for one account's report.

    Accounts without a profile show zero counters and N/A timestamps.
    """
    stats = report.contract_stats
    title = f"Achievement Report: {report.account}"
    if not report.has_profile:
        title = f"{title}\n[dim]No awards received yet[/dim]"

    table = Table(title=title, box=box.ROUNDED, show_header=True)
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right", style="magenta")

    table.add_row("Achievements", f"{report.total_achievements:,}")
    table.add_row("Certifications", f"{report.total_certifications:,}")
    table.add_row("Points", f"{report.total_points:,}")
    table.add_row("Rewards claimed", f"{report.total_rewards_claimed:,}")
    table.add_row("Joined at", _fmt_time(report.joined_at))
    table.add_row("Last activity", _fmt_time(report.last_activity))
    table.add_section()
    table.add_row("[dim]Registry achievements[/dim]", f"{stats.total_achievements:,}")
    table.add_row("[dim]Registry certifications[/dim]", f"{stats.total_certifications:,}")
    table.add_row("[dim]Registry users[/dim]", f"{stats.total_users:,}")
    table.add_row("[dim]Reward balance[/dim]", f"{stats.contract_balance:,}")
    return table


def render_contract_health(health: ContractHealth) -> Table:
    status = "[bold red]PAUSED[/bold red]" if health.paused else "[bold green]RUNNING[/bold green]"
    table = Table(title=f"Registry Health ({status})", box=box.ROUNDED)
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right", style="bold green")

    table.add_row("Owner", health.owner)
    table.add_row("Reward balance", f"{health.contract_balance:,}")
    table.add_row("Achievements defined", f"{health.total_achievements:,}")
    table.add_row("Certifications defined", f"{health.total_certifications:,}")
    table.add_row("Users", f"{health.total_users:,}")
    return table


def print_user_report(report: UserReport, console: Optional[Console] = None) -> None:
    (console or Console()).print(render_user_report(report))


def print_contract_health(health: ContractHealth, console: Optional[Console] = None) -> None:
    (console or Console()).print(render_contract_health(health))


__all__ = [
    "print_contract_health",
    "print_user_report",
    "render_contract_health",
    "render_user_report",
]

"""Main CLI interface using Typer."""

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from .. import __version__
from ..core import StatusReporter
from ..es import EsClient
from ..model import AssistantConfig, ReportFormat, UpgradeAssistantStatus, load_config
from ..upgrade import get_upgrade_assistant_status
from ..utils.logger import get_logger

# Create CLI app
app = typer.Typer(
    name="upgrade-assistant",
    help="Check whether an Elasticsearch cluster is ready for a version upgrade",
    add_completion=True,
)

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)

EXIT_NOT_READY = 2

LEVEL_STYLES = {
    "critical": "red",
    "warning": "yellow",
    "info": "cyan",
}


async def _fetch_status(config: AssistantConfig) -> UpgradeAssistantStatus:
    """Run the status check against the configured cluster."""
    async with EsClient(
        url=config.url,
        username=config.username,
        password=config.password,
        api_key=config.api_key,
        verify_certs=config.verify_certs,
    ) as client:
        return await get_upgrade_assistant_status(
            client, config.cloud_enabled, config.apm_indices
        )


def _print_summary_table(status: UpgradeAssistantStatus) -> None:
    """Print warnings in a formatted table."""
    table = Table(title="Deprecation Warnings", show_header=True, header_style="bold magenta")
    table.add_column("Level", no_wrap=True)
    table.add_column("Scope", style="cyan")
    table.add_column("Message", style="white")
    table.add_column("Notes", style="white")

    for deprecation in status.cluster + status.indices:
        notes = []
        if deprecation.reindex:
            notes.append("reindex")
        if deprecation.needs_default_fields:
            notes.append("default fields")
        if deprecation.blocker_for_reindexing:
            notes.append(deprecation.blocker_for_reindexing)

        style = LEVEL_STYLES.get(deprecation.level, "white")
        table.add_row(
            f"[{style}]{deprecation.level.upper()}[/{style}]",
            deprecation.index or "cluster",
            deprecation.message,
            ", ".join(notes),
        )

    console.print(table)


def _print_verdict(upgrade_status: UpgradeAssistantStatus) -> None:
    """Print the ready / not ready summary line."""
    if upgrade_status.ready_for_upgrade:
        console.print("[green]✓[/green] Cluster is ready for upgrade")
    else:
        console.print(
            f"[red]✗[/red] Cluster is not ready for upgrade "
            f"({upgrade_status.critical_count} critical warnings)"
        )


@app.command()
def status(
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Elasticsearch URL"),
    username: Optional[str] = typer.Option(None, "--username", help="Basic auth user"),
    password: Optional[str] = typer.Option(None, "--password", help="Basic auth password"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Encoded API key"),
    cloud: Optional[bool] = typer.Option(
        None, "--cloud/--no-cloud", help="Treat the cluster as a Cloud deployment"
    ),
    apm_indices: List[str] = typer.Option(
        [], "--apm-index", help="APM index pattern (can be used multiple times)"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to a YAML or JSON configuration file"
    ),
    format: ReportFormat = typer.Option(
        ReportFormat.TEXT, "--format", "-f", help="Format of the report"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the report to this file"
    ),
    fail_on_critical: bool = typer.Option(
        False,
        "--fail-on-critical/--no-fail-on-critical",
        help="Exit with status 2 when the cluster is not ready",
    ),
):
    """Report whether the cluster is ready for an upgrade."""
    try:
        config = load_config(config_path).merged(
            url=url,
            username=username,
            password=password,
            api_key=api_key,
            cloud_enabled=cloud,
            apm_indices=apm_indices or None,
        )

        with err_console.status(f"[bold green]Checking upgrade status of {config.url}..."):
            upgrade_status = asyncio.run(_fetch_status(config))

        report_content = StatusReporter().render(upgrade_status, format)

        if output:
            output.parent.mkdir(parents=True, exist_ok=True)
            with open(output, "w") as f:
                f.write(report_content)
            console.print(f"[green]✓[/green] Report saved to: [cyan]{output}[/cyan]")
        elif format == ReportFormat.TEXT:
            if upgrade_status.cluster or upgrade_status.indices:
                _print_summary_table(upgrade_status)
            console.print(report_content, markup=False, highlight=False)
        else:
            # Machine readable output stays unwrapped and unannotated
            typer.echo(report_content)

        if output or format == ReportFormat.TEXT:
            _print_verdict(upgrade_status)

    except Exception as e:
        console.print(f"[red]Error:[/red] {str(e)}")
        raise typer.Exit(1)

    if fail_on_critical and not upgrade_status.ready_for_upgrade:
        raise typer.Exit(EXIT_NOT_READY)


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold]upgrade-assistant[/bold] version {__version__}")
    console.print("Elasticsearch upgrade readiness checks")


if __name__ == "__main__":
    app()

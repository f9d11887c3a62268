"""Panic Ribbon CLI entry point."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

app = typer.Typer(
    name="panic-ribbon",
    help="Panic Ribbon: a desktop health ribbon for your services",
    no_args_is_help=True,
)
console = Console()


@app.command()
def run(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Path to services.yaml"),
    interval: float | None = typer.Option(None, "--interval", "-i", min=0.1, help="Seconds between checks"),
) -> None:
    """Show the health ribbon and start polling services."""
    from panic_ribbon.app import RibbonApp
    from panic_ribbon.config.loader import load_or_default
    from panic_ribbon.config.models import DEFAULT_LOG_FILE
    from panic_ribbon.errors import DisplayUnavailableError
    from panic_ribbon.logs import configure_logging

    # Config loading logs its own events, so handlers go up first
    configure_logging(Path(DEFAULT_LOG_FILE))
    config = load_or_default(config_path)
    if config.log_file != DEFAULT_LOG_FILE:
        configure_logging(Path(config.log_file))
    if interval is not None:
        config = config.model_copy(update={"poll_interval": interval})

    ribbon = RibbonApp(config)
    try:
        ribbon.run()
    except DisplayUnavailableError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        ribbon.shutdown()
        raise typer.Exit(1)


@app.command()
def status(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Path to services.yaml"),
) -> None:
    """Check every service once and print a status table."""
    from panic_ribbon.config.loader import load_config, resolve_config_path
    from panic_ribbon.monitor.health import check_all_services

    try:
        config = load_config(resolve_config_path(config_path))
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)

    results = asyncio.run(check_all_services(config.services, timeout=config.check_timeout))

    table = Table(title="Panic Ribbon Service Status")
    table.add_column("Service", style="bold")
    table.add_column("URL")
    table.add_column("Status")
    table.add_column("Latency")

    for spec, result in zip(config.services, results):
        if result.healthy:
            label, style = "healthy", "green"
        elif result.status_code is None:
            label, style = "unreachable", "yellow"
        else:
            label, style = f"unhealthy ({result.status_code})", "red"
        latency = result.to_status().latency_label
        table.add_row(spec.name, spec.health_check_url, f"[{style}]{label}[/{style}]", latency)

    console.print(table)


config_app = typer.Typer(name="config", help="Configuration commands")
app.add_typer(config_app)


@config_app.command("validate")
def config_validate(
    path: Path | None = typer.Option(None, "--path", "-p", help="Path to services.yaml"),
) -> None:
    """Validate configuration file."""
    from urllib.parse import urlparse

    from panic_ribbon.config.loader import load_config, resolve_config_path

    config_path = resolve_config_path(path)
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]✗ {escape(str(exc))}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] {config_path.name} parses and validates")

    errors: list[str] = []
    warnings: list[str] = []
    if not config.services:
        warnings.append("No services configured; the placeholder service will be used")

    for i, spec in enumerate(config.services):
        parsed = urlparse(spec.health_check_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            errors.append(f"Service {i} '{spec.name}': invalid health check URL '{spec.health_check_url}'")
        else:
            console.print(f"[green]✓[/green] Service '{spec.name}' URL is valid")
        if not spec.restart_command.strip():
            warnings.append(f"Service '{spec.name}' has no restart command")

    for w in warnings:
        console.print(f"[yellow]! {escape(w)}[/yellow]")
    if errors:
        for err in errors:
            console.print(f"[red]✗ {escape(err)}[/red]")
        console.print(f"\n[red bold]{len(errors)} validation error(s) found.[/red bold]")
        raise typer.Exit(1)
    console.print("\n[green bold]Configuration is valid.[/green bold]")


@config_app.command("show")
def config_show(
    path: Path | None = typer.Option(None, "--path", "-p", help="Path to services.yaml"),
) -> None:
    """Print resolved configuration."""
    from panic_ribbon.config.loader import load_config, resolve_config_path

    try:
        config = load_config(resolve_config_path(path))
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)

    console.print("[bold]Ribbon:[/bold]")
    console.print(f"  Poll interval: {config.poll_interval}s")
    console.print(f"  Check timeout: {config.check_timeout}s")
    console.print(f"  Width: {config.ribbon_width}px, opacity {config.opacity}")
    console.print(f"  Log file: {config.log_file}\n")

    console.print("[bold]Services:[/bold]")
    for spec in config.services:
        console.print(f"  {spec.name} @ {spec.health_check_url}")
        console.print(f"    Restart: {spec.restart_command or '(none)'}", markup=False)


@config_app.command("init")
def config_init(
    path: Path | None = typer.Option(None, "--path", "-p", help="Where to write services.yaml"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Write the default single-service configuration."""
    from panic_ribbon.config.loader import CONFIG_FILENAME, write_default_config

    target = path or Path.cwd() / CONFIG_FILENAME
    if target.exists() and not force:
        console.print(f"[red]{target} already exists. Use --force to overwrite.[/red]")
        raise typer.Exit(1)
    write_default_config(target)
    console.print(f"[green]✓[/green] Wrote {target}")


def main() -> None:
    app()

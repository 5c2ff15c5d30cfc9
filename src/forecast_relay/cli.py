"""Typer CLI for Forecast-Relay."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

app = typer.Typer(name="forecast-relay", help="Forecast-Relay: lead, report and AI relay for the forecast widget")
console = Console()


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind host (default: RELAY_HOST)"),
    port: Optional[int] = typer.Option(None, help="Bind port (default: PORT)"),
):
    """Start the Forecast-Relay API server."""
    import uvicorn
    from forecast_relay.app import create_app
    from forecast_relay.common.config import get_settings

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port
    console.print(f"[bold green]✅ Starting Forecast-Relay on {host}:{port}[/bold green]")
    uvicorn.run(create_app(settings), host=host, port=port)


@app.command()
def health(
    url: str = typer.Option("http://localhost:3001", help="Server URL"),
):
    """Check Forecast-Relay server health."""
    import httpx

    try:
        resp = httpx.get(f"{url}/health", timeout=5)
        data = resp.json()
        console.print(f"[bold green]{data['status']}[/bold green] — v{data['version']}")
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command("render-report")
def render_report(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON report file"),
):
    """Print the report email HTML for a saved report payload (offline)."""
    from pydantic import ValidationError

    from forecast_relay.common.config import get_settings
    from forecast_relay.reports.rendering import render_report_html
    from forecast_relay.reports.schemas import ReportRequest

    try:
        report = ReportRequest.model_validate(json.loads(path.read_text()))
    except (json.JSONDecodeError, ValidationError) as e:
        console.print(f"[bold red]Invalid report:[/bold red] {e}")
        raise typer.Exit(1)

    print(render_report_html(report, get_settings().marketing_team_email))


if __name__ == "__main__":
    app()

"""Command-line interface for the sales CRM core."""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import Settings
from .errors import CRMError, InvalidInputError
from .logging_config import setup_logging

app = typer.Typer(
    name="sales-crm",
    help="Sales CRM core - visibility-scoped data and AI flows",
    add_completion=False,
)

console = Console()


def _settings() -> Settings:
    try:
        return Settings.load()
    except ValidationError as e:
        raise InvalidInputError(f"Invalid configuration: {e}") from e


def _fail(error: Exception):
    console.print(f"[red]❌ {type(error).__name__}: {escape(str(error))}[/red]")
    raise typer.Exit(code=1)


def _parse_payload(raw: str) -> Dict[str, Any]:
    """Parse inline JSON or ``@path/to/file.json``."""
    if raw.startswith("@"):
        path = Path(raw[1:])
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise InvalidInputError(f"Cannot read input file {path}: {e}") from e
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"Input is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise InvalidInputError("Input JSON must be an object")
    return payload


def _run_flow(flow_name: str, payload: Dict[str, Any]):
    from flows import invoke
    from utils.llm import create_llm_client

    settings = _settings()
    try:
        llm_client = create_llm_client(config=settings.llm)
    except ValueError as e:
        raise InvalidInputError(str(e)) from e
    return asyncio.run(invoke(flow_name, payload, llm_client=llm_client))


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override CRM_LOG_LEVEL"),
):
    """Configure logging before any command runs."""
    try:
        settings = _settings()
    except CRMError as e:
        _fail(e)
    setup_logging(log_level or settings.app.log_level)


@app.command()
def version():
    """Show version information."""
    from sales_crm import __version__

    console.print(Panel.fit(
        f"[bold blue]Sales CRM[/bold blue]\n"
        f"Version: [green]{__version__}[/green]",
        title="Version Info"
    ))


@app.command()
def visible(
    directory: Path = typer.Option(..., "--directory", "-d", help="YAML/JSON user directory"),
    user: str = typer.Option(..., "--user", "-u", help="Acting user id"),
):
    """Show the users whose records the acting user may view."""
    from models.permissions import compute_visible_identities
    from models.utils import load_directory

    try:
        user_directory = load_directory(directory)
        visible_ids = compute_visible_identities(user, user_directory)
    except CRMError as e:
        _fail(e)

    table = Table(title=f"Visible to {user}")
    table.add_column("Id")
    table.add_column("Name")
    table.add_column("Role")
    for member in sorted(user_directory, key=lambda u: u.id):
        if member.id in visible_ids:
            table.add_row(member.id, member.name, member.role.value)
    console.print(table)


@app.command()
def records(
    directory: Path = typer.Option(..., "--directory", "-d", help="YAML/JSON user directory"),
    data: Path = typer.Option(..., "--data", help="YAML/JSON file with CRM collections"),
    user: str = typer.Option(..., "--user", "-u", help="Acting user id"),
):
    """Count the CRM records visible to the acting user."""
    from models.permissions import VisibilityScope
    from models.utils import load_dataset, load_directory

    try:
        scope = VisibilityScope.for_user(user, load_directory(directory))
        dataset = load_dataset(data)
    except CRMError as e:
        _fail(e)

    table = Table(title=f"Records visible to {user} ({scope.role.value})")
    table.add_column("Collection")
    table.add_column("Visible", justify="right")
    table.add_column("Total", justify="right")
    collections = {
        "anchors": (scope.visible_anchors(dataset.anchors), dataset.anchors),
        "dealers": (scope.visible_spokes(dataset.dealers), dataset.dealers),
        "vendors": (scope.visible_spokes(dataset.vendors), dataset.vendors),
        "tasks": (scope.visible_tasks(dataset.tasks), dataset.tasks),
        "activity_logs": (scope.visible_activity_logs(dataset.activity_logs), dataset.activity_logs),
        "daily_activities": (scope.visible_daily_activities(dataset.daily_activities), dataset.daily_activities),
    }
    for name, (shown, total) in collections.items():
        table.add_row(name, str(len(shown)), str(len(total)))
    console.print(table)


@app.command("flows")
def list_flows_command():
    """List the available AI flows."""
    from flows import list_flows

    table = Table(title="AI flows")
    table.add_column("Name")
    table.add_column("Description")
    for flow_cls in list_flows():
        table.add_row(flow_cls.name.value, flow_cls.description)
    console.print(table)


@app.command()
def flow(
    name: str = typer.Argument(..., help="Flow name, e.g. spoke_scoring"),
    input_json: str = typer.Option(..., "--input", "-i", help="JSON object or @file.json"),
):
    """Run an AI flow and print its JSON result."""
    try:
        result = _run_flow(name, _parse_payload(input_json))
    except CRMError as e:
        _fail(e)
    console.print_json(result.model_dump_json(by_alias=True, exclude_none=True))


@app.command()
def geocode(
    latitude: float = typer.Argument(..., help="Latitude in decimal degrees"),
    longitude: float = typer.Argument(..., help="Longitude in decimal degrees"),
):
    """Reverse-geocode coordinates to an address."""
    try:
        result = _run_flow("reverse_geocode", {"latitude": latitude, "longitude": longitude})
    except CRMError as e:
        _fail(e)
    console.print(f"[green]{result.address}[/green]")


@app.command()
def use(
    user: str = typer.Argument(..., help="User id to act as"),
    directory: Path = typer.Option(..., "--directory", "-d", help="YAML/JSON user directory"),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Switch language (en, hi)"),
):
    """Select the acting user (and optionally the language) for later sessions."""
    from models.utils import load_directory

    from .i18n import Translator
    from .session import SessionContext, SessionStore

    try:
        settings = _settings()
        session = SessionContext.start(
            directory=load_directory(directory),
            store=SessionStore(settings.app.session_file),
            translator=Translator(settings.app.locales_dir),
            default_language=settings.app.default_language,
        )
        if language:
            session.set_language(language)
        acting = session.switch_user(user)
    except CRMError as e:
        _fail(e)
    console.print(f"[green]{session.t('session.switchedUser', {'name': acting.name})}[/green]")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

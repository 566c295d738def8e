from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import typer
import uvicorn

from beatstats.config import settings
from beatstats.data.field_mapper import FieldMapper
from beatstats.domain.models import Account
from beatstats.exceptions import InvalidArgumentError
from beatstats.services.dashboard import DashboardService
from beatstats.utils.formatting import format_compact

cli = typer.Typer(help="beatstats CLI (creator analytics)")


def _load_payload(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise typer.BadParameter(f"Cannot read posts from {path}: {exc}") from exc


def _parse_now(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise typer.BadParameter(f"--now must be ISO-8601, got {value!r}") from exc
    return FieldMapper.to_timestamp(parsed)


@cli.command()
def version() -> None:
    """Print runtime version."""
    typer.echo(f"{settings.app.name} {settings.app.version}")


@cli.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host to bind"),
    port: int = typer.Option(8000, help="Port to bind"),
    reload: bool = typer.Option(False, help="Enable autoreload for local development"),
) -> None:
    """Run the beatstats API server."""
    uvicorn.run(
        "beatstats.api.main:app",
        host=host,
        port=port,
        reload=reload,
        app_dir="src",
    )


@cli.command()
def report(
    posts: Path = typer.Argument(..., help="JSON file with the posts response"),
    now: Optional[str] = typer.Option(None, help="Reference time (ISO-8601), defaults to now"),
    days: Optional[int] = typer.Option(None, help="Activity window in days"),
    account: str = typer.Option("", help="Account username"),
) -> None:
    """Print KPIs, trending posts and the activity series."""
    svc = DashboardService()
    try:
        view = svc.build(
            _load_payload(posts),
            now=_parse_now(now),
            account=Account(username=account),
            days=days,
        )
    except InvalidArgumentError as exc:
        raise typer.BadParameter(str(exc)) from exc

    totals = view.totals
    typer.echo(f"Posts:      {totals.total_items}")
    typer.echo(f"Plays:      {format_compact(totals.total_plays)} (7d: {format_compact(totals.plays_7d)})")
    typer.echo(f"Likes:      {format_compact(totals.total_likes)}")
    typer.echo(f"Saves:      {format_compact(totals.total_saves)}")
    typer.echo(f"Revenue:    {totals.estimated_revenue:.2f}")
    typer.echo(f"Threshold:  {view.trending_threshold:.2f}")
    for entry in view.popular:
        badges = [label for label, on in (("new", entry.is_new), ("trending", entry.is_trending)) if on]
        suffix = f" [{', '.join(badges)}]" if badges else ""
        typer.echo(f"  {entry.metrics.trending_score:8.1f}  {entry.metrics.title or entry.metrics.id}{suffix}")
    typer.echo("Activity:   " + " ".join(str(v) for v in view.activity_series))


@cli.command()
def export(
    posts: Path = typer.Argument(..., help="JSON file with the posts response"),
    out: Optional[Path] = typer.Option(None, help="Output directory (default: current directory)"),
    account: str = typer.Option("", help="Account username, used in the file name"),
) -> None:
    """Write the stats CSV for an account."""
    svc = DashboardService()
    artifact = svc.export(_load_payload(posts), account=Account(username=account))
    out_dir = out or Path(".")
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / artifact.filename
    path.write_text(artifact.content, encoding="utf-8")
    typer.echo(str(path))


if __name__ == "__main__":
    cli()

"""taskmatrix CLI - Eisenhower matrix from calendar and Trello data."""

import json
import logging
import sys
from datetime import date
from pathlib import Path

import click

from .adapters.csv_export import export_all, task_row
from .adapters.csv_files import write_manual_template, write_manual_trello_template
from .config import Config, load_config
from .core.summary import Summary
from .fallback import acquire
from .pipeline import PipelineResult, build_sources, run_from_config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _parse_today(value: str | None) -> date:
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"Expected YYYY-MM-DD, got {value!r}", param_hint="--today")


def _run(config: Config, today: date) -> PipelineResult:
    try:
        return run_from_config(config, today)
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)


def _format_summary(summary: Summary) -> str:
    if summary.is_empty:
        return "No data."

    o = summary.overall
    lines = [
        f"Total tasks:    {o.count}",
        f"Total hours:    {o.total_hours}",
        f"Avg urgency:    {o.avg_urgency}",
        f"Avg importance: {o.avg_importance}",
        f"Avg enjoyment:  {o.avg_enjoyment}",
        "",
        "By quadrant:",
    ]
    for q in summary.by_quadrant:
        lines.append(
            f"  {q.quadrant.value:10} {q.count:3} tasks  {q.total_duration:6}h total"
            f"  {q.avg_duration}h avg  enjoyment {q.avg_enjoyment}"
        )
    lines.append("")
    lines.append("By source:")
    for s in summary.by_source:
        lines.append(f"  {s.source:16} {s.count:3} tasks  urgency {s.avg_urgency}  importance {s.avg_importance}")
    return "\n".join(lines)


def _summary_dict(summary: Summary) -> dict:
    if summary.is_empty:
        return {"overall": None, "by_quadrant": [], "by_source": []}
    o = summary.overall
    return {
        "overall": {
            "count": o.count,
            "total_hours": o.total_hours,
            "avg_urgency": o.avg_urgency,
            "avg_importance": o.avg_importance,
            "avg_enjoyment": o.avg_enjoyment,
        },
        "by_quadrant": [
            {
                "quadrant": q.quadrant.value,
                "count": q.count,
                "avg_duration": q.avg_duration,
                "total_duration": q.total_duration,
                "avg_enjoyment": q.avg_enjoyment,
            }
            for q in summary.by_quadrant
        ],
        "by_source": [
            {
                "source": s.source,
                "count": s.count,
                "avg_urgency": s.avg_urgency,
                "avg_importance": s.avg_importance,
            }
            for s in summary.by_source
        ],
    }


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--verbose", "-v", is_flag=True, help="Log each acquisition step")
def main(debug: bool, verbose: bool):
    """taskmatrix - Eisenhower matrix from Google Calendar and Trello."""
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(format=LOG_FORMAT, level=level)


@main.command()
@click.option("--today", "today_str", default=None, help="Reference date (YYYY-MM-DD), defaults to today")
@click.option("--json", "as_json", is_flag=True, help="Output summary as JSON")
@click.option("--no-export", is_flag=True, help="Skip writing CSV files")
def run(today_str: str | None, as_json: bool, no_export: bool):
    """Acquire, merge and summarize tasks; export CSV files."""
    config = load_config()
    today = _parse_today(today_str)
    result = _run(config, today)

    paths = []
    if not no_export:
        paths = export_all(result.tasks, result.summary, config.export_dir)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "date": today.isoformat(),
                    "sources": {a.source: a.strategy for a in result.acquisitions},
                    "summary": _summary_dict(result.summary),
                    "exports": [str(p) for p in paths],
                },
                indent=2,
            )
        )
        return

    for acquisition in result.acquisitions:
        via = acquisition.strategy or "no data"
        click.echo(f"{acquisition.source}: {len(acquisition.records)} records ({via})")
    click.echo()
    click.echo(_format_summary(result.summary))
    for path in paths:
        click.echo(f"✓ Wrote {path}")


@main.command()
@click.option("--today", "today_str", default=None, help="Reference date (YYYY-MM-DD), defaults to today")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def tasks(today_str: str | None, as_json: bool):
    """List merged tasks with their quadrant."""
    result = _run(load_config(), _parse_today(today_str))

    if as_json:
        click.echo(json.dumps([task_row(t) for t in result.tasks], indent=2))
        return

    if not result.tasks:
        click.echo("No tasks.")
        return

    for task in result.tasks:
        scores = f"U{task.urgency} I{task.importance} E{task.enjoyment}"
        click.echo(f"[{task.quadrant.value:9}] {scores:12} {task.duration_hours:5.1f}h  {task.title} ({task.source})")


@main.command()
@click.option("--today", "today_str", default=None, help="Reference date (YYYY-MM-DD), defaults to today")
@click.option("--force", is_flag=True, help="Overwrite existing files")
def template(today_str: str | None, force: bool):
    """Write manual calendar and Trello template files."""
    config = load_config()
    today = _parse_today(today_str)

    targets = [
        (Path(config.manual_calendar_file).expanduser(), write_manual_template),
        (Path(config.manual_trello_file).expanduser(), write_manual_trello_template),
    ]
    for path, writer in targets:
        if path.exists() and not force:
            click.echo(f"  - {path} exists (use --force to overwrite)")
            continue
        writer(path, today)
        click.echo(f"  ✓ Template written to {path}")


@main.command()
@click.option("--today", "today_str", default=None, help="Reference date (YYYY-MM-DD), defaults to today")
def sources(today_str: str | None):
    """Show each fallback chain and the outcome of every attempt."""
    config = load_config()
    try:
        logical_sources = build_sources(config, _parse_today(today_str))
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    for source in logical_sources:
        click.echo(f"\n{source.name} ({source.kind.value})")
        result = acquire(source.name, source.strategies)
        for attempt in result.attempts:
            if attempt.succeeded:
                click.echo(f"  ✓ {attempt.strategy}: {attempt.records} records")
            elif attempt.error:
                click.echo(f"  ✗ {attempt.strategy}: {attempt.error}")
            else:
                click.echo(f"  ✗ {attempt.strategy}: no records")
        untried = [s.name for s in source.strategies[len(result.attempts):]]
        if untried:
            click.echo(f"  (not tried: {', '.join(untried)})")


@main.command()
def auth():
    """Authenticate with Google Calendar and cache the OAuth token."""
    from .adapters.google_calendar import authenticate

    config = load_config()
    if not config.google_client_secret_file:
        click.echo("GOOGLE_CLIENT_SECRET_FILE not set in taskmatrix.conf", err=True)
        sys.exit(1)

    if authenticate(config.google_client_secret_file, config.google_token_file):
        click.echo(f"  ✓ Token saved to {config.google_token_file}")
    else:
        click.echo("  ✗ Authentication failed", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

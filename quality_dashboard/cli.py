"""CLI entry point: command definitions using Click.

Commands:
    init       Generate a template config file
    render     Write the HTML dashboard page
    summary    Emit the dashboard rows as JSON
"""

import json
import logging
import sys
from typing import Any

import click

from quality_dashboard import __version__


# ---------------------------------------------------------------------------
# Helpers shared by all data commands
# ---------------------------------------------------------------------------

def _make_loader(ctx: click.Context):
    """Load config and return it with a ready ReportLoader. Exits on error."""
    from quality_dashboard.config import ConfigError, load
    from quality_dashboard.loader import ReportLoader

    obj = ctx.obj
    try:
        config = load(obj["config_path"])
    except ConfigError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(1)

    if obj["root"]:
        config.root = obj["root"]

    if obj["verbose"]:
        click.echo(f"[verbose] Reading {len(config.sources)} reports from {config.root}", err=True)

    return config, ReportLoader(root=config.root, timeout=config.timeout)


def _emit(text: str, ctx: click.Context) -> None:
    """Write text to stdout or to the file specified by --output."""
    output_path: str | None = ctx.obj["output_path"]
    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text)
        click.echo(f"Dashboard written to '{output_path}'", err=True)
    else:
        click.echo(text)


def _emit_json(data: Any, ctx: click.Context) -> None:
    indent = 2 if ctx.obj["pretty"] else None
    _emit(json.dumps(data, indent=indent, ensure_ascii=False), ctx)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--config", "config_path", default=None,
              help="Path to the configuration file (built-in sources if omitted).")
@click.option("--root", default=None, envvar="DASHBOARD_REPORT_ROOT",
              help="Directory or URL holding the reports (overrides config).")
@click.option("--output", "output_path", default=None,
              help="Write output to a file instead of stdout.")
@click.option("--pretty", is_flag=True, default=False,
              help="Pretty-print JSON output.")
@click.option("--verbose", is_flag=True, default=False,
              help="Enable verbose logging.")
@click.version_option(__version__, prog_name="quality-dashboard")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, root: str | None,
        output_path: str | None, pretty: bool, verbose: bool) -> None:
    """Code quality dashboard: summarise tool reports into one page."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["root"] = root
    ctx.obj["output_path"] = output_path
    ctx.obj["pretty"] = pretty
    ctx.obj["verbose"] = verbose


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

@cli.command("init")
@click.option("--output", "output_path", default="dashboard.yaml", show_default=True,
              help="Path where the template config file will be written.")
def init_command(output_path: str) -> None:
    """Generate a template dashboard.yaml file."""
    from quality_dashboard.config import ConfigError, generate_template
    try:
        generate_template(output_path)
        click.echo(f"Template written to '{output_path}'.")
        click.echo("Edit it with your report location, sources and thresholds.")
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------

@cli.command("render")
@click.option("--title", default="Code quality reports", show_default=True,
              help="Page title.")
@click.pass_context
def render_command(ctx: click.Context, title: str) -> None:
    """Render the HTML dashboard page."""
    from quality_dashboard.reports.render import render_dashboard

    config, loader = _make_loader(ctx)
    _emit(render_dashboard(config, loader, title=title), ctx)


# ---------------------------------------------------------------------------
# summary
# ---------------------------------------------------------------------------

@cli.command("summary")
@click.pass_context
def summary_command(ctx: click.Context) -> None:
    """Emit every dashboard row with its metric and status as JSON."""
    from quality_dashboard.reports.dashboard import build_rows, summarize

    config, loader = _make_loader(ctx)
    rows = build_rows(config.sources, loader)

    if ctx.obj["verbose"]:
        for row in rows:
            click.echo(f"[verbose] {row.source.id}: {row.status.value}", err=True)

    _emit_json(summarize(rows, config.links, link_base=config.link_base), ctx)

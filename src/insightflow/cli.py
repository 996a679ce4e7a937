from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from .charts import default_axes, figure_to_png, render_chart
from .config import load_settings
from .errors import IngestError, ReportGenerationError
from .ingest import parse_file
from .logging_config import setup_logging
from .models import ChartConfig, ChartType
from .profile import profile_columns, summarize_overview
from .synth import generate_detailed_report, generate_initial_insights, render_report_markdown

app = typer.Typer(add_completion=False, help="InsightFlow: profile, chart and summarize tabular files")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG|INFO|WARNING|ERROR"),
) -> None:
    settings = load_settings()
    setup_logging(log_level or settings.log_level)


def _fmt_num(v: Optional[float]) -> str:
    if v is None:
        return "-"
    return f"{v:,.4g}"


@app.command()
def profile(
    data: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV or Excel file"),
    as_json: bool = typer.Option(False, "--json", help="Print profiles as JSON"),
):
    """
    Infer column types and print per-column statistics.
    """
    try:
        table = parse_file(data)
        profiles = profile_columns(table)
    except IngestError as e:
        typer.echo(f"ERROR: {e}")
        raise typer.Exit(code=2)

    if as_json:
        typer.echo(json.dumps([p.to_dict() for p in profiles], indent=2, ensure_ascii=False, default=str))
        return

    ov = summarize_overview(profiles, len(table))
    typer.echo(f"Rows: {ov.row_count:,}  Columns: {ov.column_count}  "
               f"Missing: {ov.missing_values:,}  Completeness: {ov.completeness:.1f}%")
    typer.echo("")
    header = f"{'column':<24} {'type':<8} {'unique':>8} {'missing':>8} {'min':>10} {'max':>10} {'mean':>10}"
    typer.echo(header)
    typer.echo("-" * len(header))
    for p in profiles:
        typer.echo(
            f"{p.name[:24]:<24} {p.type.value:<8} {p.unique_values:>8} {p.missing_values:>8} "
            f"{_fmt_num(p.min):>10} {_fmt_num(p.max):>10} {_fmt_num(p.mean):>10}"
        )


@app.command()
def insights(data: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV or Excel file")):
    """
    Ask the LLM for a short executive summary of the file.
    """
    try:
        table = parse_file(data)
    except IngestError as e:
        typer.echo(f"ERROR: {e}")
        raise typer.Exit(code=2)

    profiles = profile_columns(table)
    typer.echo(generate_initial_insights(table, profiles, settings=load_settings()))


@app.command()
def report(
    data: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV or Excel file"),
    column: list[str] = typer.Option([], "--column", "-c", help="Column to focus on (repeatable)"),
    out: Optional[Path] = typer.Option(None, "--out", help="Write the Markdown report here"),
):
    """
    Generate a detailed Markdown report over the selected columns.

    Without --column the first three columns are used.
    """
    try:
        table = parse_file(data)
    except IngestError as e:
        typer.echo(f"ERROR: {e}")
        raise typer.Exit(code=2)

    known = list(table[0].keys())
    selected = column or known[:3]
    unknown = [c for c in selected if c not in known]
    if unknown:
        typer.echo(f"Unknown column(s): {', '.join(unknown)}", err=True)
        raise typer.Exit(code=1)

    try:
        result = generate_detailed_report(table, selected, settings=load_settings())
    except ReportGenerationError as e:
        typer.echo(f"ERROR: {e}")
        raise typer.Exit(code=1)

    md = render_report_markdown(result)
    if out:
        out.write_text(md, encoding="utf-8")
        typer.echo(f"Report: {out}")
    else:
        typer.echo(md.rstrip())


@app.command()
def chart(
    data: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV or Excel file"),
    chart_type: ChartType = typer.Option(ChartType.BAR, "--type", case_sensitive=False, help="Chart type"),
    x: Optional[str] = typer.Option(None, "--x", help="X axis column (default: first column)"),
    y: list[str] = typer.Option([], "--y", help="Y axis column, repeatable (default: first numeric column)"),
    out: Path = typer.Option(Path("insightflow-figure.png"), "--out", help="PNG output path"),
    title: str = typer.Option("", "--title"),
):
    """
    Render a chart to a PNG file.
    """
    try:
        table = parse_file(data)
    except IngestError as e:
        typer.echo(f"ERROR: {e}")
        raise typer.Exit(code=2)

    profiles = profile_columns(table)
    default_x, default_y = default_axes(profiles)
    config = ChartConfig(type=chart_type, x_axis=x or default_x, y_axis=y or [default_y], title=title)

    known = {p.name for p in profiles}
    missing = [c for c in [config.x_axis, *config.y_axis] if c not in known]
    if missing:
        typer.echo(f"Unknown column(s): {', '.join(missing)}", err=True)
        raise typer.Exit(code=1)

    settings = load_settings()
    png = figure_to_png(render_chart(table, config, max_rows=settings.max_chart_rows))
    out.write_bytes(png)
    typer.echo(f"Figure: {out}")

"""
Command-line interface for facetsearch.

This module provides the CLI commands for the facetsearch tool. The commands
are a thin presentation layer over FacetSearch: they load a catalogue, apply
the requested filters through the public setters and print the output with
the shared formatter.

Main Commands:
    find: Filter the catalogue and optionally rank it against a query
    suggest: Typeahead suggestions for a partial query
    bounds: Selectable filter options and numeric bounds
    stats: Applied-filter summary with counts and timing

Example Usage:
    Filtering by tier and family:
        $ facetsearch find --tier 1 --family Indo-European

    Ranked fuzzy search inside a filter:
        $ facetsearch find chin --tier 5 --format json

    Suggestions:
        $ facetsearch suggest rom --limit 5

For more information, run: facetsearch --help
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from ..core.api import FacetSearch
from ..core.catalogue import load_catalogue
from ..core.config import SearchConfig
from ..core.types import OutputFormat
from ..utils.error_handling import ErrorCollector, SearchError, create_error_report
from ..utils.formatter import (
    format_bounds,
    format_records,
    format_results,
    format_stats,
    format_suggestions,
)
from ..utils.logging_config import LogFormat, LogLevel, configure_logging

_FORMAT_CHOICE = click.Choice([e.value for e in OutputFormat])


def _catalogue_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    fn = click.option(
        "--lenient",
        is_flag=True,
        default=False,
        help="跳过无效记录并在 stderr 输出错误报告",
    )(fn)
    fn = click.option(
        "--catalogue",
        "catalogue",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="目录 JSON 文件路径 (默认: 内置目录)",
    )(fn)
    return fn


def _filter_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    options = [
        click.option("--tier", "tiers", type=int, multiple=True, help="难度等级 (0-5)，可多次提供"),
        click.option("--family", "families", multiple=True, help="语系，可多次提供"),
        click.option("--place", "places", multiple=True, help="国家/地区，可多次提供"),
        click.option("--score-min", type=float, default=None, help="最低总体难度分"),
        click.option("--score-max", type=float, default=None, help="最高总体难度分"),
        click.option("--hours-min", type=float, default=None, help="最少学习时长"),
        click.option("--hours-max", type=float, default=None, help="最多学习时长"),
        click.option("--population-min", type=float, default=None, help="最少使用人数"),
        click.option("--population-max", type=float, default=None, help="最多使用人数"),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


def _open_engine(catalogue: Path | None, lenient: bool, limit: int | None = None) -> FacetSearch:
    """Load the catalogue and build a session, exiting with status 1 on errors."""
    collector = ErrorCollector() if lenient else None
    try:
        cfg = SearchConfig()
        if limit is not None:
            cfg.max_results = limit
        store = load_catalogue(catalogue, strict=not lenient, collector=collector)
        engine = FacetSearch(store=store, config=cfg)
    except SearchError as e:
        click.echo(f"Error: {e}", err=True)
        for suggestion in e.suggestions:
            click.echo(f"  hint: {suggestion}", err=True)
        sys.exit(1)

    if collector is not None and collector.has_errors():
        click.echo(create_error_report(collector), err=True)
    return engine


def _pick_range(
    low: float | None, high: float | None, bounds: tuple[float, float]
) -> tuple[float, float] | None:
    if low is None and high is None:
        return None
    return (bounds[0] if low is None else low, bounds[1] if high is None else high)


def _apply_filters(engine: FacetSearch, params: dict[str, Any]) -> None:
    if params["tiers"]:
        engine.set_tiers(params["tiers"])
    if params["families"]:
        engine.set_families(params["families"])
    if params["places"]:
        engine.set_places(params["places"])

    bounds = engine.get_filter_bounds()
    score = _pick_range(params["score_min"], params["score_max"], bounds.score_bounds)
    if score is not None:
        engine.set_score_range(score)
    hours = _pick_range(params["hours_min"], params["hours_max"], bounds.hours_bounds)
    if hours is not None:
        engine.set_hours_range(hours)
    population = _pick_range(
        params["population_min"], params["population_max"], bounds.population_bounds
    )
    if population is not None:
        engine.set_population_range(population)


@click.group()
@click.option("--debug", is_flag=True, default=False, help="启用调试日志")
@click.option(
    "--log-level",
    type=click.Choice([lvl.value for lvl in LogLevel]),
    default=LogLevel.WARNING.value,
    help="日志级别",
)
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), help="日志文件路径")
@click.option(
    "--log-format",
    type=click.Choice([fmt.value for fmt in LogFormat]),
    default=LogFormat.SIMPLE.value,
    help="日志格式",
)
def cli(debug: bool, log_level: str, log_file: Path | None, log_format: str) -> None:
    """facetsearch - Faceted filtering and fuzzy search over a record catalogue"""
    if debug:
        log_level = LogLevel.DEBUG.value

    configure_logging(
        level=LogLevel(log_level),
        format_type=LogFormat(log_format),
        log_file=log_file,
        enable_file=log_file is not None,
        enable_console=True,
    )


@cli.command("find")
@click.argument("query", required=False, default="")
@_filter_options
@_catalogue_options
@click.option("--format", "fmt", type=_FORMAT_CHOICE, default=OutputFormat.TEXT.value, help="输出格式")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="最多返回的结果数")
def find_cmd(
    query: str,
    catalogue: Path | None,
    lenient: bool,
    fmt: str,
    limit: int | None,
    **filters: Any,
) -> None:
    """按条件筛选目录；提供 QUERY 时按相关度排序。"""
    engine = _open_engine(catalogue, lenient, limit)
    _apply_filters(engine, filters)

    output = OutputFormat(fmt)
    if query.strip():
        engine.set_query(query)
        text = format_results(engine.search(), output)
    else:
        records = engine.get_filtered_records()
        if limit is not None:
            records = records[:limit]
        text = format_records(records, output)

    if text:
        click.echo(text)


@cli.command("suggest")
@click.argument("partial", required=False, default="")
@_catalogue_options
@click.option("--format", "fmt", type=_FORMAT_CHOICE, default=OutputFormat.TEXT.value, help="输出格式")
@click.option("--limit", type=int, default=None, help="最多返回的建议数")
def suggest_cmd(
    partial: str, catalogue: Path | None, lenient: bool, fmt: str, limit: int | None
) -> None:
    """根据输入前缀给出语言、语系和地区建议。"""
    engine = _open_engine(catalogue, lenient)
    text = format_suggestions(engine.suggest(partial, limit), OutputFormat(fmt))
    if text:
        click.echo(text)


@cli.command("bounds")
@_catalogue_options
@click.option(
    "--format",
    "fmt",
    type=click.Choice([OutputFormat.TEXT.value, OutputFormat.JSON.value]),
    default=OutputFormat.TEXT.value,
    help="输出格式",
)
def bounds_cmd(catalogue: Path | None, lenient: bool, fmt: str) -> None:
    """显示可选的筛选值和数值范围。"""
    engine = _open_engine(catalogue, lenient)
    click.echo(format_bounds(engine.get_filter_bounds(), OutputFormat(fmt)))


@cli.command("stats")
@click.argument("query", required=False, default="")
@_filter_options
@_catalogue_options
@click.option("--format", "fmt", type=_FORMAT_CHOICE, default=OutputFormat.TEXT.value, help="输出格式")
def stats_cmd(
    query: str, catalogue: Path | None, lenient: bool, fmt: str, **filters: Any
) -> None:
    """显示当前筛选条件的摘要、结果数量和耗时。"""
    engine = _open_engine(catalogue, lenient)
    _apply_filters(engine, filters)
    if query.strip():
        engine.set_query(query)

    text = format_stats(engine.get_filter_stats(), OutputFormat(fmt))
    if text:
        click.echo(text)


def main() -> None:
    cli(prog_name="facetsearch")


if __name__ == "__main__":
    main()

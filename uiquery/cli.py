# uiquery/cli.py
from __future__ import annotations

"""Command-line interface
------------------------
Print the effective config, validate query files, and run element queries
against a live page. Thin wrapper around the finder and the query loader.
"""

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from uiquery.core.browser import open_page
from uiquery.core.conditions import ANY
from uiquery.core.diagnostics import QueryError
from uiquery.core.errors import UIQueryError
from uiquery.core.finder import find
from uiquery.core.navigation import visit
from uiquery.core.query_loader import QuerySpec, find_query_files, load_query_file
from uiquery.selectors.locator import Locator
from uiquery.utils.config import get_settings
from uiquery.utils.logger import bind, get_logger, set_log_level, unbind


# -------- helpers --------


def _echo_json(obj) -> None:
    click.echo(json.dumps(obj, indent=2, ensure_ascii=False, default=str))


def _collect_files(targets: List[str]) -> List[Path]:
    paths: List[Path] = []
    for t in targets:
        p = Path(t).resolve()
        if p.is_dir():
            paths.extend(find_query_files(p, recursive=True))
        else:
            paths.append(p)
    return paths


def _parse_count(value: Optional[str]):
    if value is None or value == ANY:
        return value
    try:
        return int(value)
    except ValueError:
        raise click.BadParameter(f"expected an integer or '{ANY}', got {value!r}", param_hint="--count")


def _run_spec(page, spec: QuerySpec) -> List[str]:
    """Run every check of one query document; return rendered failures."""
    problems: List[str] = []
    visit(page, spec.url)
    for check in spec.checks:
        try:
            find(page, check.locator, check.conditions, timeout_ms=check.timeout_ms)
        except QueryError as e:
            problems.append(str(e).rstrip())
    return problems


# -------- CLI root --------


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL from settings",
)
@click.version_option(package_name="ui-query")
def cli(log_level: Optional[str]):
    _ = get_settings()
    if log_level:
        set_log_level(log_level.upper())


# -------- commands --------


@cli.command("config")
def cmd_config():
    """Print effective configuration (after .env & env vars)."""
    _echo_json(get_settings().model_dump(mode="json"))


@cli.command("validate")
@click.argument("targets", nargs=-1, required=True)
def cmd_validate(targets: List[str]):
    """Validate query files (files or directories, multi-doc YAML supported)."""
    ok = True
    for fp in _collect_files(targets):
        try:
            for spec in load_query_file(fp):
                click.echo(f"OK  {fp}  ->  {spec.name} ({len(spec.checks)} checks)")
        except (UIQueryError, FileNotFoundError) as e:
            ok = False
            click.echo(f"ERR {fp}  ->  {e}")
    sys.exit(0 if ok else 1)


@cli.command("find")
@click.argument("url")
@click.argument("locator")
@click.option("--count", "count", type=str, default=None, help="Expected number of matches, or 'any'")
@click.option("--visible/--invisible", default=True, show_default=True)
@click.option("--text", type=str, default=None, help="Only match elements containing this text")
@click.option("--timeout-ms", type=int, default=None, help="Override DEFAULT_TIMEOUT_MS")
def cmd_find(url: str, locator: str, count: Optional[str], visible: bool, text: Optional[str], timeout_ms: Optional[int]):
    """
    Open URL and look for LOCATOR (e.g. "css:.user", "button:Save").

    Examples:
      uiquery find https://example.com "css:h1"
      uiquery find /login "fillable_field:Email" --count any
    """
    conditions: Dict[str, Any] = {"visible": visible}
    parsed_count = _parse_count(count)
    if parsed_count is not None:
        conditions["count"] = parsed_count
    if text is not None:
        conditions["text"] = text

    loc = Locator.parse(locator)
    try:
        with open_page() as page:
            visit(page, url)
            elements = find(page, loc, conditions, timeout_ms=timeout_ms)
            click.echo(f"Found {len(elements)} match(es) for {loc}")
            for el in elements:
                click.echo(f" - {el.text.strip()[:80]!r}")
    except QueryError as e:
        click.echo(str(e).rstrip(), err=True)
        sys.exit(1)
    except UIQueryError as e:
        click.echo(str(e).rstrip(), err=True)
        sys.exit(2)


@cli.command("check")
@click.argument("targets", nargs=-1, required=True)
@click.option("--json-out", type=click.Path(dir_okay=False), default=None, help="Write a JSON summary to this file")
def cmd_check(targets: List[str], json_out: Optional[str]):
    """Run every check in the given query files against a live browser."""
    log = get_logger(__name__)
    bind(run_id=datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ"))

    results: List[dict] = []
    with open_page() as page:
        for fp in _collect_files(targets):
            try:
                specs = load_query_file(fp)
            except (UIQueryError, FileNotFoundError) as e:
                results.append({"file": str(fp), "name": None, "ok": False, "problems": [str(e)]})
                continue
            for spec in specs:
                try:
                    problems = _run_spec(page, spec)
                except UIQueryError as e:
                    problems = [str(e).rstrip()]
                log.debug(f"{spec.name}: {len(problems)} problem(s)")
                results.append({"file": str(fp), "name": spec.name, "ok": not problems, "problems": problems})

    for res in results:
        label = res["name"] or "-"
        if res["ok"]:
            click.echo(f"OK  {res['file']} [{label}]")
        else:
            click.echo(f"ERR {res['file']} [{label}]")
            for problem in res["problems"]:
                click.echo("    " + problem.replace("\n", "\n    "))

    ok_count = sum(1 for r in results if r["ok"])
    fail_count = len(results) - ok_count
    click.echo(f"Done. OK={ok_count}  FAIL={fail_count}")

    if json_out:
        outp = Path(json_out).resolve()
        outp.parent.mkdir(parents=True, exist_ok=True)
        outp.write_text(json.dumps({"results": results}, indent=2), encoding="utf-8")
        click.echo(f"Wrote summary: {outp}")

    unbind("run_id")
    sys.exit(0 if fail_count == 0 else 1)


def main() -> None:
    cli(prog_name="uiquery")


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
# n8nlint/cli.py

import json
import logging
import random
from importlib.metadata import PackageNotFoundError, version as dist_version
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx
import typer

from n8nlint.templates.bench import run_template_bench
from n8nlint.templates.client import TemplateClient
from n8nlint.types import Issue, ValidationResult
from n8nlint.utils.io import ensure_parent, expand_inputs
from n8nlint.utils.logger import init_logger
from n8nlint.validator import validate_workflow_file

app = typer.Typer(help="n8nlint - n8n workflow validator and template bench")

# `n8n-validate FILES...`: a one-command app, so no subcommand name is needed
validate_app = typer.Typer(help="n8n-validate - Validate n8n workflow JSON files")


def _effective_valid(result: ValidationResult, strict: bool) -> bool:
    """Strict mode promotes warnings to failures; the core never does."""
    if strict:
        return result.valid and not result.warnings
    return result.valid


def _print_issues(issues: List[Issue], label: str) -> None:
    for it in issues:
        print(f"    {label} [{it.path}] {it.message}")


@validate_app.command()
@app.command()
def validate(
    files: List[Path] = typer.Argument(..., help="Workflow JSON file(s), or directories of them"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only output on errors"),
    strict: bool = typer.Option(False, "--strict", "-s", help="Treat warnings as errors"),
    as_json: bool = typer.Option(False, "--json", "-j", help="Output results as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Also write logs to <dir>/n8nlint.log"),
):
    """
    Validate workflow files. Exit code is 0 when every file is valid, 1 otherwise.
    """
    init_logger(level=logging.DEBUG if verbose else None, log_dir=log_dir)

    has_errors = False
    results: List[Dict[str, Any]] = []

    for fp in expand_inputs(files):
        result = validate_workflow_file(fp)
        ok = _effective_valid(result, strict)
        has_errors = has_errors or not ok

        results.append({
            "file": str(fp),
            "valid": ok,
            "errors": [e.to_dict() for e in result.errors],
            "warnings": [w.to_dict() for w in result.warnings],
        })

        if as_json:
            continue
        if ok:
            if not quiet:
                print(f"OK   {fp}: Valid")
                _print_issues(result.warnings, "warning")
        else:
            print(f"FAIL {fp}: Invalid")
            _print_issues(result.errors, "error")
            if strict:
                _print_issues(result.warnings, "warning")

    if as_json:
        print(json.dumps(results, ensure_ascii=False, indent=2))
    elif not quiet:
        n_valid = sum(1 for r in results if r["valid"])
        print("")
        print(
            f"Summary: {n_valid} valid, {len(results) - n_valid} invalid "
            f"out of {len(results)} file(s)"
        )

    raise typer.Exit(code=1 if has_errors else 0)


@app.command()
def bench_templates(
    count: int = typer.Option(5, "--count", "-n", min=1, help="Number of random templates to fetch"),
    artifacts: Path = typer.Option(Path("test-artifacts"), "--artifacts", help="Directory for failing workflows"),
    out: Optional[Path] = typer.Option(None, "--out", help="Write a CSV summary to this path"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for template sampling"),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Template API base URL"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Also write logs to <dir>/n8nlint.log"),
):
    """
    Fetch random workflows from the n8n template API and validate them.
    """
    init_logger(level=logging.DEBUG if verbose else None, log_dir=log_dir)
    rng = random.Random(seed)
    try:
        with TemplateClient(base_url=base_url) as client:
            fetched = client.fetch_random_workflows(count, rng=rng)
    except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
        # transport failure or a listing that is not shaped as expected
        typer.echo(f"[error] failed to fetch templates: {e}", err=True)
        raise typer.Exit(code=1)

    df = run_template_bench(fetched, artifacts_dir=artifacts)

    for row in df.itertuples(index=False):
        status = "OK  " if row.valid else "FAIL"
        print(f"{status} [{row.id}] {row.name} (errors={row.n_errors}, warnings={row.n_warnings})")

    n_invalid = int((~df["valid"].astype(bool)).sum()) if len(df) else 0
    print(f"Tested {len(df)} template(s): {len(df) - n_invalid} valid, {n_invalid} invalid")

    if out is not None:
        ensure_parent(out)
        df.to_csv(out, index=False)
        print(f"[ok] wrote {out}")
    if n_invalid:
        print(f"[info] failing workflows saved under {artifacts}")

    raise typer.Exit(code=1 if n_invalid else 0)


@app.command("version")
def show_version():
    """Print the installed package version."""
    try:
        print(dist_version("n8nlint"))
    except PackageNotFoundError:
        print("0.1.0")


if __name__ == "__main__":
    app()

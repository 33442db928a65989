from __future__ import annotations

"""
Typer CLI entry point.

    disposegen generate PATH [--out DIR] [--strict] [--report-empty] [--verbose]

PATH is a .cs file or a directory searched recursively. Without --out the
generated sources are printed; with it they are written to DIR.
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from disposegen.config import Config, get_default_config
from disposegen.context import load_contexts
from disposegen.generator import run_pass
from disposegen.output import DirectorySink
from disposegen.reporting.console import print_artifacts, print_findings, print_summary
from disposegen.traversal import find_cs_files, is_cs_file

logger = logging.getLogger(__name__)

app = typer.Typer(help="disposegen - generate the IDisposable pattern for C# partial classes.")


@app.callback()
def _main() -> None:
    """Generate Dispose() boilerplate for C# classes implementing IDisposable."""


def _collect_cs_files(target: Path) -> List[Path]:
    """
    Resolve a target path into the list of .cs files to analyze.

    - A .cs file is analyzed on its own.
    - A directory is searched with traversal.find_cs_files().
    """
    if target.is_file():
        if not is_cs_file(target):
            raise typer.BadParameter(f"Target file must have .cs extension, got: {target}")
        return [target]

    if target.is_dir():
        files = find_cs_files(target)
        if not files:
            logger.warning("No .cs files found under %s", target)
        return files

    raise typer.BadParameter(f"Target path is neither a file nor a directory: {target}")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def generate(
    target: Path = typer.Argument(
        ...,
        exists=True,
        readable=True,
        resolve_path=True,
        help="C# file or directory to analyze.",
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Directory to write generated sources to. Prints them when omitted.",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Only consider classes whose base list names IDisposable directly.",
    ),
    report_empty: bool = typer.Option(
        False,
        "--report-empty",
        help="Report disposable classes that have nothing to clean up (DP0001).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress and show fix hints."),
) -> None:
    """Analyze C# sources and emit Dispose() implementations."""
    _configure_logging(verbose)
    console = Console()

    config: Config = get_default_config(strict=strict, report_empty_work=report_empty)
    files = _collect_cs_files(target)
    contexts = load_contexts(files)

    sink = DirectorySink(out) if out is not None else None
    result = run_pass(contexts, config=config, sink=sink)

    if sink is None:
        print_artifacts(result.artifacts, console=console)
    print_findings(result.findings, verbose=verbose, console=console)
    print_summary(
        result.files,
        result.candidate_count,
        result.artifacts,
        result.findings,
        out_dir=out,
        console=console,
    )

    if any(f.severity.lower() == "error" for f in result.findings):
        raise typer.Exit(code=1)


def main() -> None:
    """Entry point for `python -m disposegen.main`."""
    app()


if __name__ == "__main__":
    main()

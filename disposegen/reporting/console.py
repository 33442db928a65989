# Rich console output: generated artifacts, advisory findings and a pass summary.

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from disposegen.findings.models import Finding

# Remediation hints per diagnostic (shown with --verbose)
RULE_REMEDIATIONS: dict[str, str] = {
    "DP0001": (
        "Add a 'void DisposeManaged()' and/or 'void DisposeUnmanaged()' method, "
        "or hold a disposable field, so the generated Dispose() has work to do."
    ),
    "DP0002": "Add the 'partial' modifier to the class declaration.",
    "DP0003": "Declare the hook as 'private void DisposeManaged()' / 'private void DisposeUnmanaged()'.",
}

SEVERITY_STYLE = {
    "error": "bold red",
    "warning": "bold yellow",
    "info": "bold blue",
}

DEFAULT_SEVERITY_STYLE = "bold white"


def _severity_style(severity: str) -> str:
    return SEVERITY_STYLE.get(severity.lower(), DEFAULT_SEVERITY_STYLE)


def _location_text(finding: Finding) -> str:
    loc = finding.location
    if loc is None:
        return finding.symbol or "-"
    return f"{_shorten_path(loc.path)}:{loc.line}:{loc.column}"


def _shorten_path(path: str | Path) -> str:
    """Return the path relative to the working directory when it is below it."""
    path = Path(path)
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def print_findings(
    findings: Sequence[Finding],
    verbose: bool = False,
    console: Optional[Console] = None,
) -> None:
    """Print findings as a table sorted by location; with verbose, add remediation hints."""
    console = console or Console()
    if not findings:
        return

    table = Table(
        title="Diagnostics",
        show_header=True,
        header_style="bold magenta",
        box=box.SIMPLE,
        padding=(0, 1),
    )
    table.add_column("Location", style="cyan")
    table.add_column("Severity", width=8)
    table.add_column("Code", width=7)
    table.add_column("Message", style="white")

    def _sort_key(f: Finding) -> tuple[str, int, int]:
        if f.location is None:
            return (f.symbol or "", 0, 0)
        return (str(f.location.path), f.location.line, f.location.column)

    ordered = sorted(findings, key=_sort_key)
    for f in ordered:
        table.add_row(
            _location_text(f),
            Text(f.severity.upper(), style=_severity_style(f.severity)),
            Text(f.rule_id, style="dim"),
            f.message,
        )
    console.print(table)

    if verbose:
        seen: set[str] = set()
        for f in ordered:
            if f.rule_id in seen:
                continue
            seen.add(f.rule_id)
            hint = RULE_REMEDIATIONS.get(f.rule_id)
            if hint:
                console.print(f"  [dim][Fix][/dim] [{f.rule_id}] {hint}")
        console.print()


def print_artifacts(artifacts: dict[str, str], console: Optional[Console] = None) -> None:
    """Print each generated source with C# highlighting."""
    console = console or Console()
    for key, text in artifacts.items():
        console.print(
            Panel(
                Syntax(text, "csharp", theme="ansi_dark", line_numbers=False),
                title=key,
                border_style="blue",
                box=box.ROUNDED,
            )
        )


def print_summary(
    files: Sequence[Path],
    candidate_count: int,
    artifacts: dict[str, str],
    findings: Sequence[Finding],
    out_dir: Optional[Path] = None,
    console: Optional[Console] = None,
) -> None:
    """Print a compact summary of the pass."""
    console = console or Console()

    table = Table(box=box.SIMPLE, show_header=False, padding=(0, 1))
    table.add_column("What", style="bold")
    table.add_column("Count", justify="right")
    table.add_row("Files analyzed", str(len(files)))
    table.add_row("Candidates", str(candidate_count))
    table.add_row("Generated", str(len(artifacts)))
    table.add_row("Findings", str(len(findings)))
    if out_dir is not None:
        table.add_row("Output", _shorten_path(out_dir))

    has_errors = any(f.severity.lower() == "error" for f in findings)
    console.print(
        Panel(
            table,
            title="Dispose generation",
            border_style="red" if has_errors else ("yellow" if findings else "green"),
            box=box.ROUNDED,
        )
    )

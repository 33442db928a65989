# Template emitter: render a WorkItem into the generated C# partial class.
#
# Output is byte-for-byte deterministic: 4-space indentation, "\n" line
# endings, a trailing newline, and blank lines only where the pattern has
# them.

from __future__ import annotations

from disposegen.work.models import WorkItem

INDENT = "    "
ARTIFACT_SUFFIX = ".g.cs"
DISPOSED_FLAG = "_isDisposed"
DISPOSING_PARAMETER = "isDisposing"


def artifact_key(item: WorkItem, suffix: str = ARTIFACT_SUFFIX) -> str:
    """Name of the generated source for item, e.g. `Ns.Foo.Dispose.g.cs`."""
    return f"{item.namespace_name}.{item.class_name}.Dispose{suffix}"


def render(item: WorkItem) -> str:
    """Return the generated source text for item."""
    lines: list[str] = [
        "using System;",
        "",
        f"namespace {item.namespace_name}",
        "{",
    ]
    _emit_class(item, lines, INDENT)
    lines.append("}")
    return "\n".join(lines) + "\n"


def _emit_class(item: WorkItem, lines: list[str], indent: str) -> None:
    accessibility = item.declared_accessibility.value
    if accessibility:
        accessibility += " "

    lines.append(f"{indent}{accessibility}partial class {item.class_name}")
    lines.append(f"{indent}{{")

    body = indent + INDENT
    if item.has_work:
        lines.append(f"{body}private bool {DISPOSED_FLAG} = false;")
        lines.append("")

    _emit_public_dispose(item, lines, body)

    if item.has_work:
        lines.append("")
        _emit_private_dispose(item, lines, body)

    if item.implement_unmanaged:
        lines.append("")
        lines.append(f"{body}~{item.class_name}() => Dispose(false);")

    lines.append(f"{indent}}}")


def _emit_public_dispose(item: WorkItem, lines: list[str], indent: str) -> None:
    lines.append(f"{indent}public void Dispose()")
    lines.append(f"{indent}{{")
    if item.has_work:
        lines.append(f"{indent}{INDENT}Dispose(true);")
        lines.append(f"{indent}{INDENT}GC.SuppressFinalize(this);")
    lines.append(f"{indent}}}")


def _emit_private_dispose(item: WorkItem, lines: list[str], indent: str) -> None:
    body = indent + INDENT
    inner = body + INDENT

    lines.append(f"{indent}private void Dispose(bool {DISPOSING_PARAMETER})")
    lines.append(f"{indent}{{")

    lines.append(f"{body}if ({DISPOSED_FLAG})")
    lines.append(f"{body}{{")
    lines.append(f"{inner}return;")
    lines.append(f"{body}}}")
    lines.append("")

    lines.append(f"{body}if ({DISPOSING_PARAMETER})")
    lines.append(f"{body}{{")
    if item.implement_managed:
        # The managed hook owns member disposal when it exists
        lines.append(f"{inner}DisposeManaged();")
    else:
        for member in item.disposable_member_names:
            lines.append(f"{inner}{member}.Dispose();")
    lines.append(f"{body}}}")
    lines.append("")

    if item.implement_unmanaged:
        lines.append(f"{body}DisposeUnmanaged();")
        lines.append("")

    lines.append(f"{body}{DISPOSED_FLAG} = true;")
    lines.append(f"{indent}}}")


class DisposeWriter:
    """Pairs a work item with its rendered text and artifact name."""

    def __init__(self, item: WorkItem, suffix: str = ARTIFACT_SUFFIX) -> None:
        self.item = item
        self.suffix = suffix

    def suggest_file_name(self) -> str:
        return artifact_key(self.item, self.suffix)

    def emit(self) -> str:
        return render(self.item)

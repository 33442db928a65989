# DP0002: the generated partial class only compiles if the type is declared partial.

from __future__ import annotations

from typing import Any, Sequence

from disposegen.diagnostics.base import Diagnostic
from disposegen.findings.models import Finding
from disposegen.semantic.symbols import MemberSymbol, TypeSymbol
from disposegen.work.models import WorkItem


class NotPartialDiagnostic(Diagnostic):
    id = "DP0002"
    name = "Class is not partial"
    severity = "error"

    def run(
        self,
        item: WorkItem,
        symbol: TypeSymbol,
        members: Sequence[MemberSymbol],
        config: Any,
    ) -> list[Finding]:
        if symbol.is_partial:
            return []
        return [
            self.finding(
                symbol,
                f"Class '{item.class_name}' must be declared partial for the generated Dispose() to compile.",
            )
        ]

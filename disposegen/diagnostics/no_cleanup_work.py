# DP0001: a disposable type with no hooks and no disposable members.
# Run only when Config.report_empty_work is set (see config.get_enabled_diagnostics).

from __future__ import annotations

from typing import Any, Sequence

from disposegen.diagnostics.base import Diagnostic
from disposegen.findings.models import Finding
from disposegen.resolver import lacks_cleanup_work
from disposegen.semantic.symbols import MemberSymbol, TypeSymbol
from disposegen.work.models import WorkItem


class NoCleanupWorkDiagnostic(Diagnostic):
    id = "DP0001"
    name = "Nothing to dispose"

    def run(
        self,
        item: WorkItem,
        symbol: TypeSymbol,
        members: Sequence[MemberSymbol],
        config: Any,
    ) -> list[Finding]:
        if not lacks_cleanup_work(item):
            return []
        return [
            self.finding(
                symbol,
                f"Class '{item.class_name}' does not implement a DisposeManaged or DisposeUnmanaged method.",
            )
        ]

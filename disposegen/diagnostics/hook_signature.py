# DP0003: DisposeManaged/DisposeUnmanaged declared with a signature the generator ignores.

from __future__ import annotations

from typing import Any, Sequence

from disposegen.diagnostics.base import Diagnostic
from disposegen.findings.models import Finding
from disposegen.resolver import MANAGED_HOOK, UNMANAGED_HOOK
from disposegen.semantic.symbols import MemberKind, MemberSymbol, TypeSymbol
from disposegen.work.models import WorkItem

HOOK_NAMES = (MANAGED_HOOK, UNMANAGED_HOOK)


class HookSignatureDiagnostic(Diagnostic):
    """Hooks must be `void Name()` without type parameters; anything else is silently not called."""

    id = "DP0003"
    name = "Cleanup hook has the wrong signature"

    def run(
        self,
        item: WorkItem,
        symbol: TypeSymbol,
        members: Sequence[MemberSymbol],
        config: Any,
    ) -> list[Finding]:
        findings: list[Finding] = []
        for member in members:
            if member.kind is not MemberKind.METHOD or member.name not in HOOK_NAMES:
                continue
            if member.parameter_count == 0 and member.type_parameter_count == 0 and member.returns_void:
                continue
            findings.append(
                self.finding(
                    symbol,
                    f"'{item.class_name}.{member.name}' must be a non-generic parameterless void method; it will not be called.",
                    location=member.location,
                )
            )
        return findings

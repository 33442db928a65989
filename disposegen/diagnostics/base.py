# Diagnostic interface (abstract base class): advisory checks run on each resolved type.
# Diagnostics never change generated output; they only produce findings.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from disposegen.findings.models import Finding
from disposegen.semantic.symbols import MemberSymbol, TypeSymbol
from disposegen.work.models import WorkItem


class Diagnostic(ABC):
    """
    Abstract base class for advisory diagnostics.

    Subclasses must define:
    - id: str, diagnostic code (e.g. "DP0002")
    - name: str, human-readable title
    - run(item, symbol, members, config) -> list[Finding]

    The generator calls run() once per work item, after resolution.
    """

    id: str
    name: str
    severity: str = "warning"

    @abstractmethod
    def run(
        self,
        item: WorkItem,
        symbol: TypeSymbol,
        members: Sequence[MemberSymbol],
        config: Any,
    ) -> list[Finding]:
        """
        Check one resolved type.

        Args:
            item: The work item that will be rendered for the type.
            symbol: The type's symbol (location, partial-ness, ...).
            members: The type's declared members.
            config: Generator config.

        Returns:
            Findings for this type; an empty list if nothing to report.
        """
        ...

    def finding(self, symbol: TypeSymbol, message: str, location=None) -> Finding:
        return Finding(
            rule_id=self.id,
            message=message,
            location=location if location is not None else symbol.location,
            symbol=symbol.qualified_name,
            severity=self.severity,
        )

# Strict candidate filter: the base list must name the disposal interface.

from __future__ import annotations

from typing import Any

from disposegen.context import get_base_entries
from disposegen.filters.base import CLASS_DECLARATION, CandidateFilter

DEFAULT_INTERFACE = "System.IDisposable"


class StrictFilter(CandidateFilter):
    """
    Accept class declarations whose base list textually contains the disposal
    interface, either bare (IDisposable) or fully qualified
    (System.IDisposable, global::System.IDisposable).

    Interfaces inherited through another base type are missed here; that is
    the loose filter's job.
    """

    id = "strict"
    name = "Base list names the disposal interface"

    def __init__(self, interface_name: str = DEFAULT_INTERFACE) -> None:
        self.interface_name = interface_name
        bare = interface_name.rsplit(".", 1)[-1]
        self._accepted = frozenset({bare, interface_name, f"global::{interface_name}"})

    def accepts(self, node: Any) -> bool:
        if node.type != CLASS_DECLARATION:
            return False
        return any(entry in self._accepted for entry in get_base_entries(node))

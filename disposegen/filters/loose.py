# Loose candidate filter: any class with a non-empty base list.

from __future__ import annotations

from typing import Any

from disposegen.context import get_base_entries
from disposegen.filters.base import CLASS_DECLARATION, CandidateFilter


class LooseFilter(CandidateFilter):
    """Accept every class declaration that names at least one base type or interface."""

    id = "loose"
    name = "Any base list"

    def accepts(self, node: Any) -> bool:
        if node.type != CLASS_DECLARATION:
            return False
        return len(get_base_entries(node)) >= 1

# Candidate collection: run a filter over declaration nodes in arrival order.

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Optional

from disposegen.filters.base import CLASS_DECLARATION, Candidate, CandidateFilter

logger = logging.getLogger(__name__)


def iter_class_declarations(root: Any) -> Iterator[Any]:
    """Yield every class_declaration under root (nested ones included) in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == CLASS_DECLARATION:
            yield node
        stack.extend(reversed(node.children))


class CandidateCollector:
    """
    Append-only collector fed one node at a time by the host.

    Visiting the same node twice records it twice.
    """

    def __init__(self, candidate_filter: CandidateFilter) -> None:
        self.filter = candidate_filter
        self.candidates: list[Candidate] = []

    def visit(self, node: Any, context: Optional[Any] = None) -> None:
        if self.filter.accepts(node):
            self.candidates.append(Candidate(node=node, context=context))


def filter_candidates(
    nodes: Iterable[Any],
    candidate_filter: CandidateFilter,
    context: Optional[Any] = None,
) -> list[Candidate]:
    """Return the candidates among nodes, in input order."""
    collector = CandidateCollector(candidate_filter)
    for node in nodes:
        collector.visit(node, context)
    logger.debug(
        "Filter %s accepted %d candidate(s)",
        candidate_filter.id,
        len(collector.candidates),
    )
    return collector.candidates

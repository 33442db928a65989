# Candidate filter interface: a cheap syntactic pre-filter over class declarations.
# Filters only decide whether a declaration is worth resolving; the resolver
# confirms every candidate with semantic information.

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

CLASS_DECLARATION = "class_declaration"


@dataclass(frozen=True)
class Candidate:
    """
    A declaration node accepted by a filter.

    context is the FileContext the node was parsed from when the host has
    one; the tree-sitter semantic model needs it to resolve the node.
    """

    node: Any
    context: Optional[Any] = None


class CandidateFilter(ABC):
    """
    Abstract base class for candidate filter policies.

    Subclasses define:
    - id: str, policy identifier used in config and on the CLI
    - name: str, human-readable description
    - accepts(node) -> bool

    Nodes only need type, children, is_named and text, so tree-sitter nodes
    and simple test doubles both work.
    """

    id: str
    name: str

    @abstractmethod
    def accepts(self, node: Any) -> bool:
        """Return True if node should be handed to the resolver."""
        ...

# Semantic information provider interface used by the work resolver.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from disposegen.filters.base import Candidate
from disposegen.semantic.symbols import MemberSymbol, TypeKind, TypeSymbol


class SemanticProvider(ABC):
    """
    Answers the questions the resolver asks about a candidate type.

    Implementations supply name lookup, declaration binding and declared
    members; the transitive interface set is derived from those.
    """

    @abstractmethod
    def resolve_declaration(self, candidate: Candidate) -> Optional[TypeSymbol]:
        """Return the type declared by the candidate's node, or None if it cannot be resolved."""
        ...

    @abstractmethod
    def get_type_by_name(self, qualified_name: str) -> Optional[TypeSymbol]:
        """Return the type with this fully qualified name, or None."""
        ...

    @abstractmethod
    def declared_members(self, symbol: TypeSymbol) -> tuple[MemberSymbol, ...]:
        """Return the members declared directly on symbol, in declaration order."""
        ...

    def full_interface_set(self, symbol: TypeSymbol) -> frozenset[TypeSymbol]:
        """
        Return every interface symbol implements: its own, those of its base
        classes, and the base interfaces of each. symbol itself is excluded.
        """
        found: dict[str, TypeSymbol] = {}
        visited = {symbol.qualified_name}
        pending = list(symbol.base_names)
        while pending:
            name = pending.pop()
            if name in visited:
                continue
            visited.add(name)
            base = self.get_type_by_name(name)
            if base is None:
                continue
            if base.kind is TypeKind.INTERFACE:
                found[name] = base
            pending.extend(base.base_names)
        return frozenset(found.values())

# In-memory semantic model: a small hand-built type graph for tests and embedding hosts.

from __future__ import annotations

from typing import Any, Iterable, Optional

from disposegen.filters.base import Candidate
from disposegen.semantic.provider import SemanticProvider
from disposegen.semantic.symbols import MemberSymbol, TypeSymbol


class InMemorySemanticModel(SemanticProvider):
    """
    Type graph populated by hand.

    Declarations resolve through bind(node, symbol): any hashable object can
    stand in for a syntax node.
    """

    def __init__(self) -> None:
        self._types: dict[str, TypeSymbol] = {}
        self._members: dict[str, list[MemberSymbol]] = {}
        self._bindings: dict[Any, str] = {}

    def add_type(self, symbol: TypeSymbol, members: Iterable[MemberSymbol] = ()) -> TypeSymbol:
        self._types[symbol.qualified_name] = symbol
        self._members.setdefault(symbol.qualified_name, []).extend(members)
        return symbol

    def add_member(self, symbol: TypeSymbol, member: MemberSymbol) -> None:
        self._members.setdefault(symbol.qualified_name, []).append(member)

    def bind(self, node: Any, symbol: TypeSymbol) -> None:
        self._bindings[node] = symbol.qualified_name

    def resolve_declaration(self, candidate: Candidate) -> Optional[TypeSymbol]:
        name = self._bindings.get(candidate.node)
        if name is None:
            return None
        return self._types.get(name)

    def get_type_by_name(self, qualified_name: str) -> Optional[TypeSymbol]:
        return self._types.get(qualified_name)

    def declared_members(self, symbol: TypeSymbol) -> tuple[MemberSymbol, ...]:
        return tuple(self._members.get(symbol.qualified_name, ()))

# Semantic model built from tree-sitter C# trees: a symbol table over the parsed files.
#
# This is not a compiler. Names are resolved with the lookup order C# uses
# for simple cases (containing types, enclosing namespaces, using
# directives, then the global namespace) against the types declared in the
# analyzed files plus a table of well-known framework types.

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Optional

from tree_sitter import Node as TSNode

from disposegen.context import (
    TYPE_DECLARATION_TYPES,
    FileContext,
    get_base_entries,
    get_line_col,
    get_source_span,
    node_text,
)
from disposegen.filters.base import Candidate
from disposegen.findings.models import Location
from disposegen.semantic.framework import FRAMEWORK_TYPES
from disposegen.semantic.provider import SemanticProvider
from disposegen.semantic.symbols import MemberKind, MemberSymbol, TypeKind, TypeSymbol
from disposegen.work.models import Accessibility

logger = logging.getLogger(__name__)

_KIND_BY_NODE_TYPE = {
    "class_declaration": TypeKind.CLASS,
    "struct_declaration": TypeKind.STRUCT,
    "interface_declaration": TypeKind.INTERFACE,
    "record_declaration": TypeKind.RECORD,
    "record_struct_declaration": TypeKind.STRUCT,
    "enum_declaration": TypeKind.ENUM,
}

_PREDEFINED_TYPES = frozenset(
    {
        "void", "object", "string", "dynamic", "bool", "char", "byte", "sbyte",
        "short", "ushort", "int", "uint", "long", "ulong", "nint", "nuint",
        "float", "double", "decimal", "var",
    }
)

_PARAMETER_TYPES = ("parameter", "parameter_array")

_GENERIC_ARGS = re.compile(r"<[^<>]*>")


def normalize_type_name(text: str) -> Optional[str]:
    """
    Reduce a written type to the name used for lookup.

    Strips global::, generic arguments and nullable markers. Returns None
    for predefined types, arrays, pointers and tuples, none of which can be
    a user type implementing an interface.
    """
    name = "".join(text.split())
    if name.startswith("global::"):
        name = name[len("global::"):]
    name = name.rstrip("?")
    if not name or name.startswith("(") or "[" in name or "*" in name:
        return None
    while "<" in name:
        stripped = _GENERIC_ARGS.sub("", name)
        if stripped == name:
            return None
        name = stripped
    if name in _PREDEFINED_TYPES:
        return None
    return name


def _decode(raw: Optional[bytes]) -> str:
    if raw is None:
        return ""
    return raw.decode("utf-8", errors="replace")


def _child_of_type(node: TSNode, *types: str) -> Optional[TSNode]:
    for child in node.children:
        if child.type in types:
            return child
    return None


def _field(node: TSNode, *names: str) -> Optional[TSNode]:
    """Return the first child present under any of the field names (grammar versions differ)."""
    for name in names:
        child = node.child_by_field_name(name)
        if child is not None:
            return child
    return None


def _modifiers(node: TSNode) -> list[str]:
    return [_decode(c.text).strip() for c in node.children if c.type == "modifier"]


def _declarator_names(variable_declaration: TSNode) -> Iterator[str]:
    for declarator in variable_declaration.children:
        if declarator.type != "variable_declarator":
            continue
        name_node = _field(declarator, "name") or _child_of_type(declarator, "identifier")
        if name_node is not None:
            yield node_text(name_node)


def _using_target(node: TSNode) -> tuple[Optional[str], bool]:
    """Return (imported namespace, is_global) for a using directive; aliases and static usings import nothing."""
    raw = _decode(node.text).strip().rstrip(";").strip()
    is_global = raw.startswith("global ")
    if is_global:
        raw = raw[len("global "):].strip()
    if not raw.startswith("using"):
        return None, is_global
    raw = raw[len("using"):].strip()
    if raw.startswith("static ") or "=" in raw:
        return None, is_global
    target = "".join(raw.split())
    if target.startswith("global::"):
        target = target[len("global::"):]
    return target or None, is_global


def _join(namespace: str, name: str) -> str:
    return f"{namespace}.{name}" if namespace else name


@dataclass(frozen=True)
class _Scope:
    namespace: str
    usings: tuple[str, ...] = ()
    # innermost first
    containers: tuple[str, ...] = ()


@dataclass
class _MemberDraft:
    name: str
    kind: MemberKind
    scope: _Scope
    parameter_count: int = 0
    type_parameter_count: int = 0
    returns_void: bool = False
    raw_type: Optional[str] = None
    is_static: bool = False
    location: Optional[Location] = None


@dataclass
class _TypeDraft:
    name: str
    namespace: str
    kind: TypeKind
    containing_type: Optional[str]
    accessibility: Accessibility
    is_partial: bool
    location: Optional[Location]
    bases: list[tuple[str, _Scope]] = field(default_factory=list)
    members: list[_MemberDraft] = field(default_factory=list)


class TreeSitterSemanticModel(SemanticProvider):
    """
    Symbol table over a set of parsed C# files.

    Partial declarations of one type are merged: members are concatenated
    in file order then source order, base lists are unioned, and the first
    explicit accessibility wins.
    """

    def __init__(
        self,
        contexts: Iterable[FileContext],
        include_framework_types: bool = True,
    ) -> None:
        self._drafts: dict[str, _TypeDraft] = {}
        # keyed by context identity; path labels need not be unique
        self._declarations: dict[tuple[int, int, int], str] = {}
        self._contexts: list[FileContext] = []
        self._global_usings: list[str] = []
        self._types: dict[str, TypeSymbol] = {}
        self._members: dict[str, tuple[MemberSymbol, ...]] = {}

        if include_framework_types:
            for symbol in FRAMEWORK_TYPES:
                self._types[symbol.qualified_name] = symbol

        for context in contexts:
            # held so the id() keys stay valid for the model's lifetime
            self._contexts.append(context)
            self._collect_file(context)
        self._build()

        logger.info(
            "Semantic model: %d declared type(s), %d known type(s) total",
            len(self._drafts),
            len(self._types),
        )

    # -- SemanticProvider --------------------------------------------------

    def resolve_declaration(self, candidate: Candidate) -> Optional[TypeSymbol]:
        context = candidate.context
        node = candidate.node
        if context is None or node is None:
            return None
        name = self._declarations.get(self._key(context, node))
        if name is None:
            return None
        return self._types.get(name)

    def get_type_by_name(self, qualified_name: str) -> Optional[TypeSymbol]:
        return self._types.get(qualified_name)

    def declared_members(self, symbol: TypeSymbol) -> tuple[MemberSymbol, ...]:
        return self._members.get(symbol.qualified_name, ())

    @property
    def declared_types(self) -> list[TypeSymbol]:
        """Types declared in the analyzed files, in first-seen order."""
        return [self._types[name] for name in self._drafts]

    # -- collection --------------------------------------------------------

    @staticmethod
    def _key(context: Any, node: Any) -> tuple[int, int, int]:
        return id(context), node.start_byte, node.end_byte

    def _collect_file(self, context: FileContext) -> None:
        self._walk_declarations(context.root_node.children, context, _Scope(namespace=""))

    def _walk_declarations(self, children: Iterable[TSNode], context: FileContext, scope: _Scope) -> None:
        usings = list(scope.usings)
        namespace = scope.namespace
        for child in children:
            if child.type == "using_directive":
                target, is_global = _using_target(child)
                if target is None:
                    continue
                if is_global:
                    self._global_usings.append(target)
                else:
                    usings.append(target)
            elif child.type == "namespace_declaration":
                name_node = _field(child, "name")
                body = _field(child, "body") or _child_of_type(child, "declaration_list")
                if name_node is None or body is None:
                    continue
                inner = _Scope(namespace=_join(namespace, node_text(name_node)), usings=tuple(usings))
                self._walk_declarations(body.children, context, inner)
            elif child.type == "file_scoped_namespace_declaration":
                name_node = _field(child, "name")
                if name_node is None:
                    continue
                # Following declarations are either children of this node or
                # its later siblings, depending on the grammar version.
                namespace = _join(namespace, node_text(name_node))
                inner = _Scope(namespace=namespace, usings=tuple(usings))
                self._walk_declarations(child.children, context, inner)
            elif child.type in TYPE_DECLARATION_TYPES:
                self._collect_type(child, context, _Scope(namespace=namespace, usings=tuple(usings)))

    def _collect_type(
        self,
        node: TSNode,
        context: FileContext,
        scope: _Scope,
        containing_type: Optional[str] = None,
    ) -> None:
        name_node = _field(node, "name")
        if name_node is None:
            logger.debug("Skipping unnamed %s in %s", node.type, context.path)
            return
        name = node_text(name_node)
        modifiers = _modifiers(node)
        qualified = _join(containing_type, name) if containing_type else _join(scope.namespace, name)

        draft = self._drafts.get(qualified)
        if draft is None:
            draft = _TypeDraft(
                name=name,
                namespace=scope.namespace,
                kind=_KIND_BY_NODE_TYPE[node.type],
                containing_type=containing_type,
                accessibility=Accessibility.from_modifiers(modifiers),
                is_partial="partial" in modifiers,
                location=self._location(context, node),
            )
            self._drafts[qualified] = draft
        else:
            logger.debug("Merging partial declaration of %s from %s", qualified, context.path)
            draft.is_partial = draft.is_partial or "partial" in modifiers
            if draft.accessibility is Accessibility.NOT_SPECIFIED:
                draft.accessibility = Accessibility.from_modifiers(modifiers)

        self._declarations[self._key(context, node)] = qualified

        member_scope = _Scope(
            namespace=scope.namespace,
            usings=scope.usings,
            containers=(qualified, *scope.containers),
        )
        for entry in get_base_entries(node):
            draft.bases.append((entry, member_scope))

        body = _field(node, "body") or _child_of_type(node, "declaration_list")
        if body is None or body.type != "declaration_list":
            return
        for member in body.named_children:
            if member.type in TYPE_DECLARATION_TYPES:
                self._collect_type(member, context, member_scope, containing_type=qualified)
            else:
                draft.members.extend(self._collect_members(member, context, member_scope))

    def _collect_members(self, node: TSNode, context: FileContext, scope: _Scope) -> Iterator[_MemberDraft]:
        modifiers = _modifiers(node)
        is_static = "static" in modifiers or "const" in modifiers
        location = self._location(context, node)

        if node.type in ("field_declaration", "event_field_declaration"):
            variable_declaration = _child_of_type(node, "variable_declaration")
            if variable_declaration is None:
                return
            kind = MemberKind.FIELD if node.type == "field_declaration" else MemberKind.EVENT
            type_node = _field(variable_declaration, "type")
            raw_type = node_text(type_node) if type_node is not None and kind is MemberKind.FIELD else None
            for name in _declarator_names(variable_declaration):
                yield _MemberDraft(name, kind, scope, raw_type=raw_type, is_static=is_static, location=location)

        elif node.type == "property_declaration":
            name_node = _field(node, "name")
            type_node = _field(node, "type")
            if name_node is None:
                return
            yield _MemberDraft(
                node_text(name_node),
                MemberKind.PROPERTY,
                scope,
                raw_type=node_text(type_node) if type_node is not None else None,
                is_static=is_static,
                location=location,
            )

        elif node.type == "method_declaration":
            name_node = _field(node, "name")
            returns = _field(node, "returns", "type")
            parameters = _field(node, "parameters") or _child_of_type(node, "parameter_list")
            type_parameters = _field(node, "type_parameters") or _child_of_type(node, "type_parameter_list")
            if name_node is None:
                return
            parameter_count = 0
            if parameters is not None:
                parameter_count = sum(1 for p in parameters.named_children if p.type in _PARAMETER_TYPES)
            type_parameter_count = 0
            if type_parameters is not None:
                type_parameter_count = sum(1 for p in type_parameters.named_children if p.type == "type_parameter")
            yield _MemberDraft(
                node_text(name_node),
                MemberKind.METHOD,
                scope,
                parameter_count=parameter_count,
                type_parameter_count=type_parameter_count,
                returns_void=returns is not None and node_text(returns) == "void",
                is_static=is_static,
                location=location,
            )

    @staticmethod
    def _location(context: FileContext, node: TSNode) -> Location:
        line, col = get_line_col(node)
        snippet = get_source_span(context, node).split("\n", 1)[0].strip()
        return Location(path=context.path, line=line, column=col, snippet=snippet or None)

    # -- resolution --------------------------------------------------------

    def _lookup_candidates(self, name: str, scope: _Scope) -> Iterator[str]:
        for container in scope.containers:
            yield f"{container}.{name}"
        parts = scope.namespace.split(".") if scope.namespace else []
        for i in range(len(parts), 0, -1):
            yield f"{'.'.join(parts[:i])}.{name}"
        for using in (*scope.usings, *self._global_usings):
            yield f"{using}.{name}"
        yield name

    def _resolve_name(self, raw: str, scope: _Scope, known: set[str]) -> Optional[str]:
        name = normalize_type_name(raw)
        if name is None:
            return None
        for candidate in self._lookup_candidates(name, scope):
            if candidate in known:
                return candidate
        return None

    def _build(self) -> None:
        known = set(self._types) | set(self._drafts)

        for qualified, draft in self._drafts.items():
            base_names: list[str] = []
            for raw, scope in draft.bases:
                resolved = self._resolve_name(raw, scope, known) or normalize_type_name(raw)
                if resolved and resolved not in base_names:
                    base_names.append(resolved)
            self._types[qualified] = TypeSymbol(
                name=draft.name,
                namespace=draft.namespace,
                kind=draft.kind,
                accessibility=draft.accessibility,
                base_names=tuple(base_names),
                is_partial=draft.is_partial,
                containing_type=draft.containing_type,
                location=draft.location,
            )

        for qualified, draft in self._drafts.items():
            self._members[qualified] = tuple(
                MemberSymbol(
                    name=member.name,
                    kind=member.kind,
                    parameter_count=member.parameter_count,
                    type_parameter_count=member.type_parameter_count,
                    returns_void=member.returns_void,
                    declared_type=(
                        self._resolve_name(member.raw_type, member.scope, known)
                        if member.raw_type is not None
                        else None
                    ),
                    is_static=member.is_static,
                    location=member.location,
                )
                for member in draft.members
            )

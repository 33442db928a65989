# Work resolver: decide which candidate types need dispose-pattern code and what it must do.

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from disposegen.exceptions import GenerationCancelledError
from disposegen.filters.base import Candidate
from disposegen.semantic.framework import DISPOSABLE_INTERFACE
from disposegen.semantic.provider import SemanticProvider
from disposegen.semantic.symbols import MemberKind, MemberSymbol, TypeKind, TypeSymbol
from disposegen.work.models import WorkItem

logger = logging.getLogger(__name__)

DISPOSE_METHOD = "Dispose"
MANAGED_HOOK = "DisposeManaged"
UNMANAGED_HOOK = "DisposeUnmanaged"


def implements_interface(
    provider: SemanticProvider,
    symbol: TypeSymbol,
    interface: TypeSymbol,
    include_self: bool = False,
) -> bool:
    """True if interface is in symbol's full interface set (or is symbol, with include_self)."""
    if include_self and symbol == interface:
        return True
    return interface in provider.full_interface_set(symbol)


def _is_parameterless_void_method(member: MemberSymbol, name: str) -> bool:
    return (
        member.kind is MemberKind.METHOD
        and member.name == name
        and member.parameter_count == 0
        and member.type_parameter_count == 0
        and member.returns_void
    )


def has_dispose_method(members: Iterable[MemberSymbol]) -> bool:
    """True if the type declares `void Dispose()` itself."""
    return any(_is_parameterless_void_method(m, DISPOSE_METHOD) for m in members)


def has_cleanup_hook(members: Iterable[MemberSymbol], name: str) -> bool:
    """True if the type declares a non-generic zero-parameter void method with exactly this name."""
    return any(_is_parameterless_void_method(m, name) for m in members)


def get_disposable_member_names(
    provider: SemanticProvider,
    members: Iterable[MemberSymbol],
    interface: TypeSymbol,
) -> tuple[str, ...]:
    """
    Names of the instance fields and properties whose declared type is
    disposable, in declaration order. A member typed as the interface
    itself counts.
    """
    names: list[str] = []
    for member in members:
        if not member.is_instance_data or member.declared_type is None:
            continue
        member_type = provider.get_type_by_name(member.declared_type)
        if member_type is None:
            continue
        if implements_interface(provider, member_type, interface, include_self=True):
            names.append(member.name)
    return tuple(names)


def lacks_cleanup_work(item: WorkItem) -> bool:
    """
    True when a qualifying type has nothing to clean up: no hooks and no
    disposable members. Hosts may report this; generation does not depend on it.
    """
    return not item.has_work


def _skip_reason(symbol: TypeSymbol) -> Optional[str]:
    if symbol.kind is not TypeKind.CLASS:
        return f"{symbol.kind.value} is not a class"
    if symbol.containing_type is not None:
        return f"nested in {symbol.containing_type}"
    if not symbol.namespace:
        return "declared in the global namespace"
    return None


def build_work_item(
    provider: SemanticProvider,
    symbol: TypeSymbol,
    interface: TypeSymbol,
) -> WorkItem:
    members = provider.declared_members(symbol)
    return WorkItem(
        namespace_name=symbol.namespace,
        class_name=symbol.name,
        declared_accessibility=symbol.accessibility,
        disposable_member_names=get_disposable_member_names(provider, members, interface),
        implement_managed=has_cleanup_hook(members, MANAGED_HOOK),
        implement_unmanaged=has_cleanup_hook(members, UNMANAGED_HOOK),
    )


def resolve_work(
    candidates: Iterable[Candidate],
    provider: SemanticProvider,
    *,
    disposal_interface: str = DISPOSABLE_INTERFACE,
    should_cancel: Optional[Callable[[], bool]] = None,
    on_item: Optional[Callable[[WorkItem, TypeSymbol, Candidate], None]] = None,
) -> list[WorkItem]:
    """
    Turn filtered candidates into work items, in candidate order.

    Candidates that cannot be resolved, do not implement the disposal
    interface, or already declare `void Dispose()` are skipped. Each type
    yields at most one item per call, even when several candidates resolve
    to it (repeat visits, partial fragments).

    Returns an empty list when the disposal interface itself is unknown to
    the provider. Raises GenerationCancelledError if should_cancel returns
    True between candidates.

    on_item, when given, is called with each new item, its symbol and the
    candidate it came from (used for diagnostics).
    """
    interface = provider.get_type_by_name(disposal_interface)
    if interface is None:
        logger.warning("Disposal interface %s is unknown; nothing to generate", disposal_interface)
        return []

    work: list[WorkItem] = []
    seen: set[str] = set()
    for candidate in candidates:
        if should_cancel is not None and should_cancel():
            logger.info("Pass cancelled after %d work item(s); discarding them", len(work))
            raise GenerationCancelledError("analysis pass cancelled")

        symbol = provider.resolve_declaration(candidate)
        if symbol is None:
            logger.debug("Skipping candidate: declaration could not be resolved")
            continue

        name = symbol.qualified_name
        reason = _skip_reason(symbol)
        if reason is not None:
            logger.debug("Skipping %s: %s", name, reason)
            continue

        if name in seen:
            logger.debug("Skipping %s: already resolved in this pass", name)
            continue

        if not implements_interface(provider, symbol, interface):
            logger.debug("Skipping %s: does not implement %s", name, disposal_interface)
            continue

        if has_dispose_method(provider.declared_members(symbol)):
            # TODO: an abstract Dispose() inherited from a base class is not detected
            logger.debug("Skipping %s: already declares %s()", name, DISPOSE_METHOD)
            continue

        item = build_work_item(provider, symbol, interface)
        seen.add(name)
        work.append(item)
        logger.debug(
            "Work for %s: managed=%s unmanaged=%s members=%s",
            name,
            item.implement_managed,
            item.implement_unmanaged,
            list(item.disposable_member_names),
        )
        if on_item is not None:
            on_item(item, symbol, candidate)

    logger.info("Resolved %d work item(s)", len(work))
    return work

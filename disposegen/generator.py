"""
One analysis pass: candidates -> work items -> generated sources.

A pass owns everything it touches (collector, semantic model, result), so
concurrent passes over disjoint inputs need no coordination. Artifacts are
rendered and handed to the sink only after resolution finished, which means
a cancelled pass never emits anything.

Typical usage:
    from pathlib import Path
    from disposegen.context import load_contexts
    from disposegen.generator import run_pass
    from disposegen.output import DirectorySink

    contexts = load_contexts([Path("Foo.cs")])
    result = run_pass(contexts, sink=DirectorySink(Path("Generated")))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from disposegen.config import Config, get_default_config, get_enabled_diagnostics
from disposegen.context import FileContext
from disposegen.emitter import artifact_key, render
from disposegen.filters.base import Candidate, CandidateFilter
from disposegen.filters.collector import CandidateCollector, iter_class_declarations
from disposegen.findings.models import Finding
from disposegen.output import ArtifactSink
from disposegen.resolver import resolve_work
from disposegen.semantic.csharp import TreeSitterSemanticModel
from disposegen.semantic.provider import SemanticProvider
from disposegen.semantic.symbols import TypeSymbol
from disposegen.work.models import WorkItem

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Everything one pass produced, in candidate order."""

    work_items: List[WorkItem] = field(default_factory=list)
    artifacts: dict[str, str] = field(default_factory=dict)
    findings: List[Finding] = field(default_factory=list)
    candidate_count: int = 0
    files: List[Path] = field(default_factory=list)


def collect_candidates(
    contexts: Iterable[FileContext],
    candidate_filter: CandidateFilter,
) -> list[Candidate]:
    """Feed every class declaration, file by file in source order, through the filter."""
    collector = CandidateCollector(candidate_filter)
    for context in contexts:
        for node in iter_class_declarations(context.root_node):
            collector.visit(node, context)
    logger.info(
        "Candidate filter %r accepted %d class declaration(s)",
        candidate_filter.id,
        len(collector.candidates),
    )
    return collector.candidates


def run_diagnostics(
    resolved: Sequence[tuple[WorkItem, TypeSymbol]],
    provider: SemanticProvider,
    config: Config,
) -> list[Finding]:
    findings: list[Finding] = []
    diagnostics = list(get_enabled_diagnostics(config))
    for item, symbol in resolved:
        members = provider.declared_members(symbol)
        for diagnostic in diagnostics:
            try:
                findings.extend(diagnostic.run(item, symbol, members, config))
            except Exception as exc:  # pragma: no cover - a broken check must not stop generation
                logger.exception("Diagnostic %s failed on %s: %s", diagnostic.id, symbol.qualified_name, exc)
    return findings


def run_pass(
    contexts: Iterable[FileContext],
    config: Optional[Config] = None,
    sink: Optional[ArtifactSink] = None,
    provider: Optional[SemanticProvider] = None,
    should_cancel: Optional[Callable[[], bool]] = None,
) -> GenerationResult:
    """
    Run one complete pass over already parsed files.

    Args:
        contexts: Parsed files, in the order their declarations should be visited.
        config: Generator config; defaults to get_default_config().
        sink: Optional destination for generated sources.
        provider: Semantic provider; defaults to a TreeSitterSemanticModel
                  over contexts.
        should_cancel: Checked between candidates; returning True aborts the
                       pass with GenerationCancelledError.

    Returns:
        A GenerationResult with work items, rendered artifacts and findings.
    """
    if config is None:
        config = get_default_config()
    contexts = list(contexts)

    candidates = collect_candidates(contexts, config.candidate_filter)
    if provider is None:
        provider = TreeSitterSemanticModel(contexts, include_framework_types=config.include_framework_types)

    resolved: list[tuple[WorkItem, TypeSymbol]] = []
    work_items = resolve_work(
        candidates,
        provider,
        disposal_interface=config.disposal_interface,
        should_cancel=should_cancel,
        on_item=lambda item, symbol, _candidate: resolved.append((item, symbol)),
    )

    result = GenerationResult(
        work_items=work_items,
        findings=run_diagnostics(resolved, provider, config),
        candidate_count=len(candidates),
        files=[ctx.path for ctx in contexts],
    )
    for item in work_items:
        result.artifacts[artifact_key(item, config.artifact_suffix)] = render(item)

    if sink is not None:
        for key, text in result.artifacts.items():
            sink.add_source(key, text)

    logger.info(
        "Pass complete: %d file(s), %d candidate(s), %d artifact(s), %d finding(s)",
        len(result.files),
        result.candidate_count,
        len(result.artifacts),
        len(result.findings),
    )
    return result

from __future__ import annotations

"""
Generator configuration: filter policy, disposal interface, output naming,
and which advisory diagnostics run.

get_default_config() is what the CLI uses; hosts embedding the generator
build a Config directly.
"""

from dataclasses import dataclass, field
from typing import List, Sequence

from disposegen.diagnostics.base import Diagnostic
from disposegen.diagnostics.hook_signature import HookSignatureDiagnostic
from disposegen.diagnostics.no_cleanup_work import NoCleanupWorkDiagnostic
from disposegen.diagnostics.not_partial import NotPartialDiagnostic
from disposegen.emitter import ARTIFACT_SUFFIX
from disposegen.filters.base import CandidateFilter
from disposegen.filters.loose import LooseFilter
from disposegen.filters.strict import StrictFilter
from disposegen.semantic.framework import DISPOSABLE_INTERFACE


@dataclass
class Config:
    """
    Generator configuration.

    candidate_filter decides which class declarations reach the resolver;
    the loose policy also catches types that inherit the interface through
    a base class.
    """

    candidate_filter: CandidateFilter = field(default_factory=LooseFilter)
    disposal_interface: str = DISPOSABLE_INTERFACE
    artifact_suffix: str = ARTIFACT_SUFFIX
    include_framework_types: bool = True
    report_empty_work: bool = False
    diagnostics: Sequence[Diagnostic] = field(default_factory=list)


def get_default_config(strict: bool = False, report_empty_work: bool = False) -> Config:
    """
    Return the default configuration.

    The "nothing to dispose" diagnostic (DP0001) is not in the list; it is
    added by get_enabled_diagnostics() when report_empty_work is set.
    """
    candidate_filter: CandidateFilter = StrictFilter(DISPOSABLE_INTERFACE) if strict else LooseFilter()
    return Config(
        candidate_filter=candidate_filter,
        report_empty_work=report_empty_work,
        diagnostics=[NotPartialDiagnostic(), HookSignatureDiagnostic()],
    )


def get_enabled_diagnostics(config: Config | None = None) -> List[Diagnostic]:
    """
    Return the diagnostics to run for config (or for the default config).

    NoCleanupWorkDiagnostic is appended when config.report_empty_work is set
    and the list does not already hold a DP0001 check.
    """
    if config is None:
        config = get_default_config()
    diagnostics = list(config.diagnostics)
    if config.report_empty_work and not any(d.id == NoCleanupWorkDiagnostic.id for d in diagnostics):
        diagnostics.append(NoCleanupWorkDiagnostic())
    return diagnostics

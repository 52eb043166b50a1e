from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .analyzer import Analyzer, AnalyzerConfig, BoundaryStyle, Mode, SemicolonAnalyzer
from .buffer import LineBuffer, OffsetTracker
from .patch import DiagnosticSink, PatchApplier, log_diagnostic


log = logging.getLogger(__name__)


@dataclass(slots=True)
class SemicolonFixer:
    """Runs an analyzer over a text and applies the edits it reports.

    The fixer keeps no per-call state, so one instance can serve
    concurrent and reentrant calls.
    """

    analyzer: Analyzer = field(default_factory=SemicolonAnalyzer)

    def process(
        self,
        text: str,
        config: AnalyzerConfig,
        *,
        on_diagnostic: DiagnosticSink | None = None,
    ) -> str:
        # Analysis runs on the untouched text before any line is edited.
        ops = self.analyzer.verify(text, config)
        applier = PatchApplier(
            lines=LineBuffer.split(text),
            offsets=OffsetTracker(),
            on_diagnostic=on_diagnostic or log_diagnostic,
        )
        for op in ops:
            applier.dispatch(op)
        log.debug("applied %d operations to %d lines", len(ops), len(applier.lines))
        return applier.lines.join()

    def insert_semicolons(
        self,
        text: str,
        *,
        leading: bool = False,
        on_diagnostic: DiagnosticSink | None = None,
    ) -> str:
        return self.process(text, _config(Mode.ALWAYS, leading), on_diagnostic=on_diagnostic)

    def remove_semicolons(
        self,
        text: str,
        *,
        leading: bool = False,
        on_diagnostic: DiagnosticSink | None = None,
    ) -> str:
        return self.process(text, _config(Mode.NEVER, leading), on_diagnostic=on_diagnostic)


def _config(mode: Mode, leading: bool) -> AnalyzerConfig:
    style = BoundaryStyle.LEADING if leading else BoundaryStyle.TRAILING
    return AnalyzerConfig(mode=mode, boundary_style=style)


_FIXER: SemicolonFixer | None = None


def _get_fixer() -> SemicolonFixer:
    global _FIXER
    if _FIXER is None:
        _FIXER = SemicolonFixer()
    return _FIXER


def process(text: str, config: AnalyzerConfig, *, on_diagnostic: DiagnosticSink | None = None) -> str:
    return _get_fixer().process(text, config, on_diagnostic=on_diagnostic)


def insert_semicolons(
    text: str,
    *,
    leading: bool = False,
    on_diagnostic: DiagnosticSink | None = None,
) -> str:
    """Terminate every statement of ``text`` with a semicolon."""
    return _get_fixer().insert_semicolons(text, leading=leading, on_diagnostic=on_diagnostic)


def remove_semicolons(
    text: str,
    *,
    leading: bool = False,
    on_diagnostic: DiagnosticSink | None = None,
) -> str:
    """Drop every semicolon of ``text`` that automatic insertion makes redundant.

    Semicolons that guard a following line starting with ``+ - [ ( /`` or a
    template are moved to the start of that line instead.
    """
    return _get_fixer().remove_semicolons(text, leading=leading, on_diagnostic=on_diagnostic)

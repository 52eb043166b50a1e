from __future__ import annotations

from .analyzer import Analyzer, AnalyzerConfig, BoundaryStyle, Mode, SemicolonAnalyzer
from .api import SemicolonFixer, insert_semicolons, process, remove_semicolons
from .errors import AnalysisError, AutosemiError, ProcessingError
from .ops import Add, Diagnostic, Operation, Remove, Severity

__all__ = [
    "Add",
    "AnalysisError",
    "Analyzer",
    "AnalyzerConfig",
    "AutosemiError",
    "BoundaryStyle",
    "Diagnostic",
    "Mode",
    "Operation",
    "ProcessingError",
    "Remove",
    "SemicolonAnalyzer",
    "SemicolonFixer",
    "Severity",
    "insert_semicolons",
    "process",
    "remove_semicolons",
]

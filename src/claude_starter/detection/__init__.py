"""Detection domain: signal collection, stack classification, project analysis."""

from claude_starter.detection.classifier import (
    StackDescriptor,
    classify,
    detect_stack,
    summarize_stack,
)
from claude_starter.detection.project import (
    ProjectInfo,
    analyze_project,
    count_source_files,
)
from claude_starter.detection.signals import SignalBundle, collect_signals

__all__ = [
    "ProjectInfo",
    "SignalBundle",
    "StackDescriptor",
    "analyze_project",
    "classify",
    "collect_signals",
    "count_source_files",
    "detect_stack",
    "summarize_stack",
]

"""ESP toolchain check checkers module.

Exports the version comparison and the per-tool checker.
"""

from .base import (
    BaseChecker,
    CheckerReport,
    CheckResult,
    ToolVersionChecker,
    check_version,
)

__all__ = [
    "BaseChecker",
    "CheckerReport",
    "CheckResult",
    "ToolVersionChecker",
    "check_version",
]

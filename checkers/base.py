"""Checker system for installed toolchain versions.

Compares probed tool versions against required minimums and produces
one report per tool.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from tools.probe import SemanticVersion, VersionProbe

if TYPE_CHECKING:
    from config import ToolRequirement


class CheckResult(Enum):
    """Result of comparing an installed version with its minimum."""

    SATISFIED = "satisfied"
    BELOW_MINIMUM = "below_minimum"
    MISSING = "missing"

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]


_GLYPHS = {
    CheckResult.SATISFIED: "🆗",
    CheckResult.BELOW_MINIMUM: "🛑",
    CheckResult.MISSING: "❌",
}


def check_version(probed: SemanticVersion | None, required: SemanticVersion) -> CheckResult:
    """Compare a probed version with a required minimum.

    Each component is compared on its own: 2.0.0 does not satisfy a
    minimum of 1.84.0 because its minor part is below 84.

    Args:
        probed: Installed version, None if the tool is missing.
        required: Minimum version.

    Returns:
        CheckResult for the tool.
    """
    if probed is None:
        return CheckResult.MISSING

    if (
        probed.major >= required.major
        and probed.minor >= required.minor
        and probed.patch >= required.patch
    ):
        return CheckResult.SATISFIED
    return CheckResult.BELOW_MINIMUM


@dataclass
class CheckerReport:
    """Report from a checker execution.

    Attributes:
        checker_name: Name of the checked tool.
        result: Check result status.
        required: Minimum version that was checked against.
        installed: Installed version, None if missing.
    """

    checker_name: str
    result: CheckResult
    required: SemanticVersion
    installed: SemanticVersion | None = None

    def is_satisfied(self) -> bool:
        return self.result == CheckResult.SATISFIED

    @property
    def message(self) -> str:
        if self.result == CheckResult.MISSING:
            return f"{self.checker_name} not found (requires {self.required})"
        if self.result == CheckResult.BELOW_MINIMUM:
            return f"{self.checker_name} {self.installed} is older than {self.required}"
        return f"{self.checker_name} {self.installed}"


class BaseChecker(ABC):
    """Base class for all checkers."""

    name: str = ""

    @abstractmethod
    def check(self) -> CheckerReport:
        """Execute the check.

        Returns:
            CheckerReport with the check outcome.
        """
        pass


class ToolVersionChecker(BaseChecker):
    """Check that one local tool is installed in a recent enough version."""

    def __init__(self, requirement: "ToolRequirement", probe: VersionProbe):
        """Initialize checker.

        Args:
            requirement: Tool to probe and its minimum version.
            probe: VersionProbe used to query the tool.
        """
        self.requirement = requirement
        self.probe = probe
        self.name = requirement.name

    def check(self) -> CheckerReport:
        """Probe the tool and compare it with its minimum version."""
        installed = self.probe.probe(self.requirement.command, self.requirement.args)
        return CheckerReport(
            checker_name=self.name,
            result=check_version(installed, self.requirement.minimum),
            required=self.requirement.minimum,
            installed=installed,
        )

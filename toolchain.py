"""Toolchain check orchestration.

Probes the local tools, fetches the latest releases and bundles both
into a ToolchainReport. Everything runs sequentially.
"""

from dataclasses import dataclass, field
from typing import Any

from checkers import CheckerReport, ToolVersionChecker
from config import CheckConfig
from observability.formatters import ReportFormatter
from tools import ReleaseFetcher, ReleaseInfo, VersionProbe


@dataclass
class ToolchainReport:
    """Result of one toolchain check run.

    Attributes:
        chip: Target chip the check ran for.
        releases: Latest release per source, in configuration order.
        checks: Check report per local tool, in configuration order.
    """

    chip: str
    releases: list[ReleaseInfo] = field(default_factory=list)
    checks: list[CheckerReport] = field(default_factory=list)

    @property
    def all_satisfied(self) -> bool:
        return all(report.is_satisfied() for report in self.checks)

    def render(self, formatter: ReportFormatter | None = None) -> str:
        formatter = formatter or ReportFormatter()
        return formatter.format_report(self.releases, self.checks)


def probe_installed(
    config: CheckConfig,
    probe: VersionProbe,
) -> list[CheckerReport]:
    """Check every required tool in configuration order."""
    return [ToolVersionChecker(requirement, probe).check() for requirement in config.requirements]


def run_toolchain_check(
    config: CheckConfig,
    logger: Any = None,
    probe: VersionProbe | None = None,
    fetcher: ReleaseFetcher | None = None,
) -> ToolchainReport:
    """Run a complete toolchain check.

    Local tools are probed first, then the release sources are queried.

    Args:
        config: Check configuration.
        logger: Optional ToolcheckLogger passed to default components.
        probe: VersionProbe to use; built from config when None.
        fetcher: ReleaseFetcher to use; built from config when None and
            closed before returning.

    Returns:
        ToolchainReport with releases and per-tool results.

    Raises:
        FatalApiError: The GitHub API reported rate limiting or a bad token.
    """
    if probe is None:
        probe = VersionProbe(timeout=config.probe_timeout, logger=logger)

    checks = probe_installed(config, probe)
    if logger:
        for check in checks:
            logger.debug(check.message, tool=check.checker_name, result=check.result.name)

    if fetcher is not None:
        releases = fetcher.fetch_all(config.sources)
    else:
        with ReleaseFetcher(
            token=config.github_token,
            timeout=config.http_timeout,
            logger=logger,
        ) as owned_fetcher:
            releases = owned_fetcher.fetch_all(config.sources)

    report = ToolchainReport(chip=config.chip, releases=releases, checks=checks)
    if logger and not report.all_satisfied:
        logger.info(f"Toolchain for {config.chip} needs attention")
    return report

"""Output formatters for the toolchain check report.

The report is plain text meant for a terminal: one line per release
source, a heading, and one status glyph line per local tool.
"""

from collections.abc import Iterable

from checkers.base import CheckerReport
from tools.releases import ReleaseInfo

UNKNOWN_TAG = "unknown"
CHECK_HEADING = "Checking installed versions"


class ReportFormatter:
    """Format toolchain check results for humans.

    Example:
        formatter = ReportFormatter()
        print(formatter.format_report(releases, reports))
    """

    def format_release(self, release: ReleaseInfo) -> str:
        """Format one latest-version line."""
        tag = release.tag if release.ok else UNKNOWN_TAG
        return f"Latest {release.source.name} version: {tag}"

    def format_releases(self, releases: Iterable[ReleaseInfo]) -> str:
        return "\n".join(self.format_release(release) for release in releases)

    def format_status(self, report: CheckerReport) -> str:
        """Format one tool status line, e.g. "🆗 espflash"."""
        return f"{report.result.glyph} {report.checker_name}"

    def format_checks(self, reports: Iterable[CheckerReport]) -> str:
        lines = [CHECK_HEADING]
        lines.extend(self.format_status(report) for report in reports)
        return "\n".join(lines)

    def format_report(
        self,
        releases: Iterable[ReleaseInfo],
        reports: Iterable[CheckerReport],
    ) -> str:
        """Format the complete report.

        Args:
            releases: Fetched latest releases, in display order.
            reports: Per-tool check reports, in display order.

        Returns:
            Report text without a trailing newline.
        """
        return f"{self.format_releases(releases)}\n\n{self.format_checks(reports)}"

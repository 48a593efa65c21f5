"""Toolchain check tools for the MCP server.

Exposes the same report the command line prints, so an agent can check
whether the local Rust-on-ESP toolchain is usable.
"""

from typing import Any

from config import DEFAULT_CHIP, get_default_config
from observability.formatters import ReportFormatter
from toolchain import run_toolchain_check
from tools import ReleaseFetcher, VersionProbe

from .base import BaseTool, ToolResult
from .exceptions import (
    BadCredentialsError,
    ConfigurationError,
    FatalApiError,
    RateLimitedError,
    get_error_suggestion,
)


def _error_code(error: Exception) -> str:
    if isinstance(error, RateLimitedError):
        return "RATE_LIMITED"
    if isinstance(error, BadCredentialsError):
        return "BAD_CREDENTIALS"
    return "INVALID_CONFIG"


class ToolchainTools(BaseTool):
    """Toolchain check tools."""

    def __init__(
        self,
        mcp: Any,
        logger: Any = None,
        probe: VersionProbe | None = None,
        fetcher: ReleaseFetcher | None = None,
    ):
        """Initialize toolchain tools.

        Args:
            mcp: FastMCP server instance.
            logger: Optional ToolcheckLogger.
            probe: VersionProbe override (tests).
            fetcher: ReleaseFetcher override (tests).
        """
        super().__init__(mcp, logger=logger)
        self.probe = probe
        self.fetcher = fetcher

    def _failure(self, error: FatalApiError | ConfigurationError) -> str:
        return ToolResult(
            success=False,
            message=str(error),
            details=get_error_suggestion(error) or "",
            error_code=_error_code(error),
        ).to_response()

    def toolchain_check(self, chip: str = DEFAULT_CHIP) -> str:
        """Run the full check and return the report text."""
        try:
            config = get_default_config(chip)
            report = run_toolchain_check(
                config, logger=self.logger, probe=self.probe, fetcher=self.fetcher
            )
        except (FatalApiError, ConfigurationError) as e:
            return self._failure(e)
        return report.render()

    def latest_releases(self) -> str:
        """Fetch the latest releases only and return their lines."""
        config = get_default_config()
        try:
            if self.fetcher is not None:
                releases = self.fetcher.fetch_all(config.sources)
            else:
                with ReleaseFetcher(
                    token=config.github_token,
                    timeout=config.http_timeout,
                    logger=self.logger,
                ) as fetcher:
                    releases = fetcher.fetch_all(config.sources)
        except FatalApiError as e:
            return self._failure(e)

        return ReportFormatter().format_releases(releases)

    def register_tools(self) -> None:
        """Register all toolchain tools with the MCP server."""

        @self.mcp.tool()
        @self._log_tool_call
        def esp_toolchain_check(chip: str = DEFAULT_CHIP) -> str:
            """Check the local Rust-on-ESP toolchain.

            PURPOSE:
                Verify that cargo, espflash and probe-rs are installed in
                recent enough versions for the target chip.

            DESCRIPTION:
                Runs `cargo +esp --version` (Xtensa chips) or
                `cargo +stable --version` (RISC-V chips), `espflash --version`
                and `probe-rs --version`, then fetches the latest published
                versions from GitHub.

            RETURNS:
                str: Latest release versions followed by one status line
                    per tool: 🆗 satisfied, 🛑 below minimum, ❌ missing.

            NOTES:
                - Set GITHUB_TOKEN to avoid the anonymous API rate limit.

            EXAMPLE:
                Call: esp_toolchain_check(chip="esp32c3")
            """
            return self.toolchain_check(chip)

        @self.mcp.tool()
        @self._log_tool_call
        def esp_latest_releases() -> str:
            """Show the latest published Rust-on-ESP tool versions.

            RETURNS:
                str: One "Latest <name> version: <tag>" line per source.
            """
            return self.latest_releases()

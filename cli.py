"""ESP toolchain check - CLI entry point.

Usage:
    esp-toolcheck                          # check toolchain for esp32
    esp-toolcheck --chip esp32c3 --debug   # RISC-V target, debug logging
    esp-toolcheck --mcp                    # serve MCP over stdio
    esp-toolcheck --mcp --http --port 8090 # serve MCP over HTTP
"""

import logging
import sys
from pathlib import Path

from config import DEFAULT_CHIP, SUPPORTED_CHIPS, get_default_config
from mcp_tools.exceptions import (
    ConfigurationError,
    FatalApiError,
    get_error_description,
    get_error_suggestion,
)
from observability import LOGGER_NAME, get_logger
from toolchain import run_toolchain_check

# -1 truncated to an 8-bit exit status
EXIT_FATAL = 255
EXIT_USAGE = 2

USAGE = f"""Usage: esp-toolcheck [options]

Options:
  --chip <name>     Target chip ({", ".join(SUPPORTED_CHIPS)}; default: {DEFAULT_CHIP})
  -v, --debug       Print debug diagnostics on stderr
  --log-dir <dir>   Also write text and JSONL logs to <dir>
  --mcp             Serve the check as MCP tools instead of printing a report
  --http            With --mcp: use HTTP transport instead of stdio
  --host <addr>     With --http: listening address (default: 127.0.0.1)
  --port <port>     With --http: listening port (default: 8090)
  -h, --help        Show this message

Set GITHUB_TOKEN to authenticate GitHub API requests."""

FLAGS = {"-h", "--help", "-v", "--debug", "--mcp", "--http"}
VALUE_OPTIONS = {"--chip", "--log-dir", "--host", "--port"}


def _check_options(argv: list[str]) -> None:
    """Reject arguments that are neither a known flag nor an option value."""
    args = iter(argv)
    for arg in args:
        if arg in VALUE_OPTIONS:
            next(args, None)
        elif arg not in FLAGS:
            raise ConfigurationError(f"Unknown option '{arg}'")


def _option_value(argv: list[str], flag: str, default: str | None = None) -> str | None:
    """Return the value following flag in argv, or default if flag is absent."""
    if flag not in argv:
        return default
    idx = argv.index(flag)
    if idx + 1 >= len(argv):
        raise ConfigurationError(f"Option {flag} requires a value")
    return argv[idx + 1]


def _parse_port(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"Invalid port '{value}'") from None


def _serve(argv: list[str], logger) -> None:
    from server import create_server

    http_mode = "--http" in argv
    host = _option_value(argv, "--host", "127.0.0.1")
    port = _parse_port(_option_value(argv, "--port", "8090"))

    mcp = create_server(host=host, port=port, logger=logger)
    if http_mode:
        logger.info(f"Starting HTTP server: http://{host}:{port}/mcp")
        mcp.run(transport="streamable-http")
    else:
        logger.info("Starting stdio mode (MCP client connection)")
        mcp.run()


def run(argv: list[str]) -> int:
    """Run the command line and return the process exit status.

    Args:
        argv: Command-line arguments without the program name.

    Returns:
        0 on success, EXIT_USAGE on invalid input, EXIT_FATAL when the
        GitHub API refused to serve further requests.
    """
    if "-h" in argv or "--help" in argv:
        print(USAGE)
        return 0

    debug = "--debug" in argv or "-v" in argv
    try:
        _check_options(argv)
        log_dir = _option_value(argv, "--log-dir")
        logger = get_logger(
            LOGGER_NAME,
            log_dir=Path(log_dir) if log_dir else None,
            console_level=logging.DEBUG if debug else logging.INFO,
        )
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        if "--mcp" in argv:
            _serve(argv, logger)
            return 0

        config = get_default_config(_option_value(argv, "--chip", DEFAULT_CHIP))
        report = run_toolchain_check(config, logger=logger)
    except ConfigurationError as e:
        logger.error(str(e))
        print(f"Hint: {get_error_suggestion(e)}", file=sys.stderr)
        return EXIT_USAGE
    except FatalApiError as e:
        # The fetcher has already logged the error itself
        logger.info(f"{get_error_description(e)}: {get_error_suggestion(e)}")
        return EXIT_FATAL

    print(report.render())
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point - called by the esp-toolcheck command."""
    if argv is None:
        argv = sys.argv[1:]

    try:
        sys.exit(run(argv))
    except KeyboardInterrupt:
        # Exit gracefully on Ctrl+C without traceback
        sys.exit(130)


if __name__ == "__main__":
    main()

"""Exception hierarchy for the ESP toolchain check.

Provides specific exception types so callers can tell recoverable
probe/fetch problems apart from conditions that must end the run.
"""


class ToolcheckError(Exception):
    """Base exception for all toolchain check errors.

    Attributes:
        message: Human-readable error description.
        details: Additional error context (optional).
    """

    def __init__(self, message: str, details: str | None = None):
        """Initialize toolchain check error.

        Args:
            message: Human-readable error description.
            details: Additional error context.
        """
        self.message = message
        self.details = details
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with details."""
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(ToolcheckError):
    """Invalid check configuration or command-line input.

    Examples:
        - Unknown target chip
        - Non-numeric --port value
    """

    pass


class ProbeError(ToolcheckError):
    """Error while querying a locally installed tool."""

    pass


class MalformedVersionError(ProbeError):
    """Tool printed a version that does not parse into three numeric parts.

    Attributes:
        text: The version text that failed to parse.
    """

    def __init__(self, text: str, details: str | None = None):
        self.text = text
        super().__init__(f"Malformed version string '{text}'", details)


class ReleaseFetchError(ToolcheckError):
    """Recoverable failure while fetching a release tag.

    Examples:
        - DNS, TLS or timeout errors
        - Response body is not JSON
        - Response has no string "tag_name" field

    Attributes:
        url: Endpoint that was queried.
    """

    def __init__(self, message: str, url: str = "", details: str | None = None):
        self.url = url
        super().__init__(message, details)


class FatalApiError(ToolcheckError):
    """GitHub API condition after which no further useful work is possible.

    The fetcher raises it, the command-line entry point turns it into a
    non-zero process exit.
    """

    pass


class RateLimitedError(FatalApiError):
    """GitHub API rate limit exceeded."""

    def __init__(self, details: str | None = None):
        super().__init__("API Rate Limit Exceeded", details)


class BadCredentialsError(FatalApiError):
    """GitHub rejected the supplied token."""

    def __init__(self, details: str | None = None):
        super().__init__("Invalid GitHub token", details)


# Map error types to user-friendly descriptions
ERROR_DESCRIPTIONS = {
    "ToolcheckError": "Toolchain check error",
    "ConfigurationError": "Check configuration error",
    "ProbeError": "Local tool query error",
    "MalformedVersionError": "Local tool printed an unparseable version",
    "ReleaseFetchError": "Release information could not be fetched",
    "FatalApiError": "GitHub API refused the request",
    "RateLimitedError": "GitHub API rate limit exceeded",
    "BadCredentialsError": "GitHub token rejected",
}


def get_error_description(error: Exception) -> str:
    """Get user-friendly description for an error.

    Args:
        error: Exception instance.

    Returns:
        User-friendly error description.

    Example:
        >>> get_error_description(RateLimitedError())
        'GitHub API rate limit exceeded'
    """
    error_type = type(error).__name__
    return ERROR_DESCRIPTIONS.get(error_type, "Unknown error type")


def get_error_suggestion(error: Exception) -> str | None:
    """Get actionable suggestion for resolving an error.

    Args:
        error: Exception instance.

    Returns:
        Actionable suggestion or None if no specific suggestion available.
    """
    if isinstance(error, RateLimitedError):
        return "Export GITHUB_TOKEN to raise the API rate limit, or retry later"

    if isinstance(error, BadCredentialsError):
        return "Check GITHUB_TOKEN, or unset it to query anonymously"

    if isinstance(error, ReleaseFetchError):
        return "Check network connectivity to api.github.com"

    if isinstance(error, MalformedVersionError):
        return "Run the tool with --version manually and check its output"

    if isinstance(error, ConfigurationError):
        return "Run 'esp-toolcheck --help' for valid options"

    return None

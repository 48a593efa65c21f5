"""ESP toolchain check MCP tools module.

Exports the exception hierarchy and the base tool class. The toolchain
tool group lives in mcp_tools.toolchain.
"""

from .base import BaseTool, ToolResult
from .exceptions import (
    BadCredentialsError,
    ConfigurationError,
    FatalApiError,
    MalformedVersionError,
    ProbeError,
    RateLimitedError,
    ReleaseFetchError,
    ToolcheckError,
    get_error_description,
    get_error_suggestion,
)

__all__ = [
    # Base classes
    "BaseTool",
    "ToolResult",
    # Exceptions
    "ToolcheckError",
    "ConfigurationError",
    "ProbeError",
    "MalformedVersionError",
    "ReleaseFetchError",
    "FatalApiError",
    "RateLimitedError",
    "BadCredentialsError",
    "get_error_description",
    "get_error_suggestion",
]

"""Base tool class and result handling for the toolchain check MCP tools.

Provides common functionality for all tools:
- Standardized result handling
- Tool call logging
"""

import functools
import time
from dataclasses import dataclass
from typing import Any

from mcp.server.fastmcp import FastMCP


@dataclass
class ToolResult:
    """Standardized tool result for consistent error handling.

    Attributes:
        success: Whether the operation succeeded.
        message: Human-readable status message.
        details: Detailed output or error information.
        error_code: Error code for programmatic handling.
    """

    success: bool
    message: str
    details: str = ""
    error_code: str | None = None

    def to_response(self) -> str:
        """Format as MCP tool response string."""
        if self.success:
            if self.details:
                return f"{self.message}\n\n{self.details}"
            return self.message

        parts = []
        if self.error_code:
            parts.append(f"[{self.error_code}] ")
        parts.append(f"Error: {self.message}")
        if self.details:
            parts.append(f"\n\n{self.details}")
        return "".join(parts)


class BaseTool:
    """Base class for MCP tool groups.

    Subclasses override register_tools() to register their tools with
    the MCP server.
    """

    def __init__(self, mcp: FastMCP, logger: Any = None):
        """Initialize tool group.

        Args:
            mcp: FastMCP server instance.
            logger: Optional ToolcheckLogger for logging tool calls.
        """
        self.mcp = mcp
        self.logger = logger

    def _log_tool_call(self, func):
        """Decorator to log tool calls.

        Args:
            func: The tool function to wrap.

        Returns:
            Wrapped function with call logging.
        """

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            tool_name = func.__name__
            start_time = time.time()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                if self.logger:
                    self.logger.log_tool_call(
                        tool_name=tool_name,
                        args=kwargs,
                        result=str(e)[:500],
                        duration=time.time() - start_time,
                        success=False,
                    )
                raise

            if self.logger:
                self.logger.log_tool_call(
                    tool_name=tool_name,
                    args=kwargs,
                    result=str(result)[:500] if result else "",
                    duration=time.time() - start_time,
                    success=True,
                )
            return result

        return wrapper

    def register_tools(self) -> None:
        """Register all tools for this group with the MCP server."""
        raise NotImplementedError("Subclasses must implement register_tools()")

"""ESP toolchain check MCP server.

Provides an MCP server factory exposing the toolchain check as tools.
"""

from typing import Any

from mcp.server.fastmcp import FastMCP

from mcp_tools.toolchain import ToolchainTools


def create_server(
    host: str = "127.0.0.1",
    port: int = 8090,
    logger: Any = None,
    tools: ToolchainTools | None = None,
) -> FastMCP:
    """Create an ESP toolchain check MCP server instance.

    Args:
        host: HTTP mode listening address.
        port: HTTP mode listening port.
        logger: Optional ToolcheckLogger for tool call logging.
        tools: Preconfigured tool group (tests); created when None.

    Returns:
        Configured FastMCP server instance.
    """
    mcp = FastMCP("ESP Toolchain Check", host=host, port=port, stateless_http=True)

    if tools is None:
        tools = ToolchainTools(mcp, logger=logger)
    else:
        tools.mcp = mcp
    tools.register_tools()

    return mcp

from __future__ import annotations


class ClientError(Exception):
    """Base exception for all MCP client errors."""
    pass


class ConstructionError(ClientError):
    """Client could not be built or the server could not be started."""
    pass


class DiscoveryError(ClientError):
    """Tool listing failed."""
    pass


class InvocationError(ClientError):
    """Tool call failed or the server reported a tool error."""

    def __init__(self, tool: str, message: str):
        self.tool = tool
        super().__init__(f"{tool}: {message}")


class ClientNotConnected(ClientError):
    pass

from __future__ import annotations

import logging
import time
from contextlib import AsyncExitStack
from typing import Any, Dict, List, Optional

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client
from mcp.types import CallToolResult, Implementation, Tool

from . import __version__
from .config import ServerConfig, ServerDefinition
from .env_utils import expand_env_mapping
from .errors import (
    ClientNotConnected,
    ConstructionError,
    DiscoveryError,
    InvocationError,
)
from .observability import InMemoryMetrics

logger = logging.getLogger(__name__)


def build_server_parameters(definition: ServerDefinition) -> StdioServerParameters:
    """Translate a launch definition into stdio parameters, expanding ${VAR} templates."""
    return StdioServerParameters(
        command=definition.command,
        args=list(definition.args),
        env=expand_env_mapping(definition.env) if definition.env else None,
        cwd=definition.cwd,
    )


def _error_text(result: CallToolResult) -> str:
    parts = [getattr(item, "text", "") for item in result.content or []]
    message = " ".join(part for part in parts if part)
    return message or "server reported an error"


class MCPClient:
    """
    Client for one MCP server launched as a child process over stdio.

    Usage:
        async with MCPClient("demo", config, "linear") as client:
            tools = await client.list_tools()
            result = await client.call_tool("list_issues", {"team": "Frontend"})
    """

    def __init__(
        self,
        name: str,
        config: ServerConfig,
        server_name: str,
        metrics: Optional[InMemoryMetrics] = None,
    ) -> None:
        definition = config.mcp_servers.get(server_name)
        if definition is None:
            raise ConstructionError(
                f'Server "{server_name}" not configured '
                f"(known: {', '.join(sorted(config.mcp_servers)) or 'none'})"
            )
        self.name = name
        self.server_name = server_name
        self.definition = definition
        self.metrics = metrics or InMemoryMetrics()
        self._exit_stack: Optional[AsyncExitStack] = None
        self._session: Optional[ClientSession] = None

    @property
    def connected(self) -> bool:
        return self._session is not None

    async def connect(self) -> None:
        """Start the server process and run the MCP initialize handshake."""
        if self._session is not None:
            return
        params = build_server_parameters(self.definition)
        stack = AsyncExitStack()
        try:
            read_stream, write_stream = await stack.enter_async_context(stdio_client(params))
            session = await stack.enter_async_context(
                ClientSession(
                    read_stream,
                    write_stream,
                    client_info=Implementation(name=self.name, version=__version__),
                )
            )
            await session.initialize()
        except Exception as exc:
            await stack.aclose()
            raise ConstructionError(
                f'Could not start server "{self.server_name}" ({self.definition.command}): {exc}'
            ) from exc
        self._exit_stack = stack
        self._session = session
        logger.debug("Connected", extra={"server": self.server_name})

    def _require_session(self) -> ClientSession:
        if self._session is None:
            raise ClientNotConnected(f'Client for "{self.server_name}" is not connected')
        return self._session

    async def list_tools(self) -> List[Tool]:
        """Return every tool the server exposes, following pagination cursors."""
        session = self._require_session()
        start = time.perf_counter()
        error = False
        tools: List[Tool] = []
        try:
            result = await session.list_tools()
            tools.extend(result.tools)
            while result.nextCursor:
                result = await session.list_tools(cursor=result.nextCursor)
                tools.extend(result.tools)
            return tools
        except Exception as exc:
            error = True
            raise DiscoveryError(f'Listing tools on "{self.server_name}" failed: {exc}') from exc
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            self.metrics.record("tools/list", duration_ms, error)
            logger.debug(
                "tools/list done",
                extra={"server": self.server_name, "duration_ms": f"{duration_ms:.1f}"},
            )

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> CallToolResult:
        session = self._require_session()
        start = time.perf_counter()
        error = False
        try:
            result = await session.call_tool(name, arguments or {})
            if result.isError:
                raise InvocationError(name, _error_text(result))
            return result
        except InvocationError:
            error = True
            raise
        except Exception as exc:
            error = True
            raise InvocationError(name, str(exc)) from exc
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            self.metrics.record(f"tools/call:{name}", duration_ms, error)
            logger.debug(
                "tools/call done",
                extra={"server": self.server_name, "tool": name, "duration_ms": f"{duration_ms:.1f}"},
            )

    async def close(self) -> None:
        """Stop the session and the server process. Safe to call more than once."""
        stack, self._exit_stack = self._exit_stack, None
        self._session = None
        if stack is not None:
            await stack.aclose()
            logger.debug("Closed", extra={"server": self.server_name})

    async def __aenter__(self) -> "MCPClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

"""
Entry point: Linear MCP server starten, Tools listen, ``list_issues`` aufrufen.

Hinweis: LINEAR_API_TOKEN muss gesetzt sein (per Env oder Keychain-Wrapper).
"""
from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .client import MCPClient
from .config import DEFAULT_SERVER_NAME, ServerConfig, resolve_server_config
from .env_utils import TOKEN_ENV_VAR, get_api_token
from .errors import ConstructionError, DiscoveryError, InvocationError
from .observability import format_metrics, setup_logger

logger = logging.getLogger(__name__)

DEFAULT_TOOL = "list_issues"
DEFAULT_ARGUMENTS: Dict[str, Any] = {"team": "Frontend"}

USAGE = "Usage: linear-mcp-example [tool_name] ['<json-args>']"

ClientFactory = Callable[[str, ServerConfig, str], MCPClient]


def parse_args(argv: Sequence[str]) -> Tuple[str, Dict[str, Any]]:
    """Return (tool_name, arguments); raises ValueError for bad JSON."""
    tool_name = argv[0] if len(argv) > 0 else DEFAULT_TOOL
    if len(argv) < 2:
        return tool_name, dict(DEFAULT_ARGUMENTS)
    params = json.loads(argv[1])
    if not isinstance(params, dict):
        raise ValueError("tool arguments must be a JSON object")
    return tool_name, params


def print_tools(tools: List[Any]) -> None:
    print("Available tools:")
    for tool in tools:
        print(f"- {tool.name}: {tool.description or ''}")


async def run(
    argv: Optional[Sequence[str]] = None,
    client_factory: ClientFactory = MCPClient,
) -> int:
    """Run the demo and return the process exit code."""
    try:
        tool_name, arguments = parse_args(list(argv or []))
    except ValueError as exc:
        print("Failed to parse JSON arguments")
        print(repr(exc))
        print(USAGE)
        return 1

    if not get_api_token():
        logger.warning(
            f"{TOKEN_ENV_VAR} is empty - set it via env or keychain wrapper."
        )

    try:
        config = resolve_server_config()
        client = client_factory(config.client_name, config, DEFAULT_SERVER_NAME)
    except (ConstructionError, OSError, ValueError) as exc:
        logger.error(f"Client construction failed: {exc}")
        return 1

    try:
        try:
            await client.connect()
        except ConstructionError as exc:
            logger.error(f"Client construction failed: {exc}")
            return 1

        try:
            tools = await client.list_tools()
        except DiscoveryError as exc:
            logger.warning(f"Could not list tools: {exc}")
        else:
            print_tools(tools)

        try:
            result = await client.call_tool(tool_name, arguments)
        except InvocationError as exc:
            logger.error(f"Tool call failed: {exc}")
            return 1
        print(f"Result: {result}")
        return 0
    finally:
        logger.debug(f"Call metrics: {format_metrics(client.metrics)}")
        await client.close()


def main() -> None:
    setup_logger()
    try:
        exit_code = asyncio.run(run(sys.argv[1:]))
    except KeyboardInterrupt:
        print("\nInterrupted...")
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

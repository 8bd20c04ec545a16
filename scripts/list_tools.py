from __future__ import annotations

import asyncio

from linear_mcp_client.client import MCPClient
from linear_mcp_client.config import DEFAULT_SERVER_NAME, resolve_server_config


async def main() -> None:
    config = resolve_server_config()
    async with MCPClient(config.client_name, config, DEFAULT_SERVER_NAME) as client:
        tools = await client.list_tools()
        print(f"Found {len(tools)} tools:")
        for tool in tools:
            print(f"- {tool.name}: {tool.description}")
            print(f"  input: {tool.inputSchema}")


if __name__ == "__main__":
    asyncio.run(main())

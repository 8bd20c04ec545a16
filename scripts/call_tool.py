from __future__ import annotations

import asyncio
import json
import sys
from typing import Any, Dict

from linear_mcp_client.client import MCPClient
from linear_mcp_client.config import DEFAULT_SERVER_NAME, resolve_server_config
from linear_mcp_client.errors import InvocationError


async def main() -> None:
    if len(sys.argv) < 3:
        print("Usage: python scripts/call_tool.py <tool_name> '<json-args>'")
        raise SystemExit(1)

    tool_name = sys.argv[1]
    raw_args = sys.argv[2]

    try:
        params: Dict[str, Any] = json.loads(raw_args)
    except ValueError as exc:
        print("Failed to parse JSON arguments")
        print(repr(exc))
        raise SystemExit(1)

    config = resolve_server_config()
    async with MCPClient(config.client_name, config, DEFAULT_SERVER_NAME) as client:
        try:
            result = await client.call_tool(tool_name, params)
            print("Tool call result:")
            for item in result.content:
                print(getattr(item, "text", item))
            if result.structuredContent is not None:
                print(json.dumps(result.structuredContent, indent=2, ensure_ascii=False))
        except InvocationError as exc:
            print("Tool call failed:")
            print(repr(exc))
            raise SystemExit(1)


if __name__ == "__main__":
    asyncio.run(main())

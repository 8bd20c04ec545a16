from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


CONFIG_ENV_VAR = "MCP_CLIENT_CONFIG"
DEFAULT_CLIENT_NAME = "linear-mcp-example"
DEFAULT_SERVER_NAME = "linear"


@dataclass
class ServerDefinition:
    """How to launch one MCP server as a child process."""

    command: str
    args: List[str] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)
    cwd: Optional[str] = None


@dataclass
class ServerConfig:
    mcp_servers: Dict[str, ServerDefinition] = field(default_factory=dict)
    client_name: str = DEFAULT_CLIENT_NAME


def default_server_config() -> ServerConfig:
    """
    Static launch configuration for the Linear MCP server.

    The token is forwarded as the literal template ``${LINEAR_API_TOKEN}``;
    the client expands it when it starts the child process.
    """
    return ServerConfig(
        mcp_servers={
            DEFAULT_SERVER_NAME: ServerDefinition(
                command="npx",
                args=["-y", "@tacticlaunch/mcp-linear"],
                env={"LINEAR_API_TOKEN": "${LINEAR_API_TOKEN}"},
            ),
        },
    )


def load_config(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"MCP client config not found at {path}")
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("Config root must be a mapping")
    return data


def _parse_definition(name: str, raw: Any) -> ServerDefinition:
    if not isinstance(raw, dict):
        raise ValueError(f'Server "{name}" must be a mapping')
    command = raw.get("command")
    if not command or not isinstance(command, str):
        raise ValueError(f'Server "{name}" is missing a command')
    args = raw.get("args", []) or []
    if not isinstance(args, list):
        raise ValueError(f'Server "{name}": args must be a list')
    env = raw.get("env", {}) or {}
    if not isinstance(env, dict):
        raise ValueError(f'Server "{name}": env must be a mapping')
    cwd = raw.get("cwd")
    return ServerDefinition(
        command=command,
        args=[str(arg) for arg in args],
        env={str(key): str(value) for key, value in env.items()},
        cwd=str(cwd) if cwd is not None else None,
    )


def parse_server_config(data: Dict[str, Any]) -> ServerConfig:
    servers_raw = data.get("mcpServers")
    if not isinstance(servers_raw, dict) or not servers_raw:
        raise ValueError("Config must define at least one entry under mcpServers")
    client_cfg = data.get("client", {}) or {}
    return ServerConfig(
        mcp_servers={
            str(name): _parse_definition(str(name), raw)
            for name, raw in servers_raw.items()
        },
        client_name=str(client_cfg.get("name", DEFAULT_CLIENT_NAME)),
    )


def resolve_server_config() -> ServerConfig:
    """Use the file named by MCP_CLIENT_CONFIG if set, else the static default."""
    path = os.getenv(CONFIG_ENV_VAR, "").strip()
    if not path:
        return default_server_config()
    return parse_server_config(load_config(Path(path)))

"""
Demo client for the Linear MCP server.

Startet den Linear MCP Server als Kindprozess (stdio), listet die
verfügbaren Tools und ruft ``list_issues`` auf.
"""
from __future__ import annotations

__version__ = "0.1.0"

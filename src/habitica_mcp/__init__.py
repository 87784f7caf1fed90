"""Habitica MCP - Model Context Protocol integration for Habitica."""

__version__ = "0.1.0"

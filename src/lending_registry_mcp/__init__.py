"""
Lending Registry MCP Server Package.

An MCP (Model Context Protocol) server that keeps track of books, people
and which copies are checked out to whom.

Key Components:
- models: Pydantic models for books, people and operation results
- registry: In-memory lending state and rules
- config: Configuration management with pydantic-settings
- resources: MCP resources (read-only endpoints)
- tools: MCP tools (lending operations)
"""

__version__ = "0.1.0"

from .registry import LendingRegistry, get_registry, reset_registry

__all__ = [
    "LendingRegistry",
    "__version__",
    "get_registry",
    "reset_registry",
]

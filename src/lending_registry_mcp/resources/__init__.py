"""Lending Registry MCP Resources Package

Resources are the read-only side of the server: clients read them to look at
the catalog and the loan index, and use tools to change anything.

- Resource: "Show me who has Dune" (read operation)
- Tool: "Issue Dune to p1" (write operation)
"""

from .books import book_resources

all_resources = book_resources

__all__ = [
    "all_resources",
    "book_resources",
]

"""
MCP Tools for the Lending Registry Server.

Tools are the calls clients make to change lending state (and the one
read-only lookup, get_book_details). Each tool is a dictionary with its name,
description, input schema and async handler, registered by the server at
startup.
"""

from .lending import (
    add_book,
    get_book_details,
    increment_book_copies,
    issue_book,
    register_person,
    return_book,
)

# Export all tools for server registration
all_tools = [
    add_book,
    issue_book,
    return_book,
    increment_book_copies,
    get_book_details,
    register_person,
]

__all__ = [
    "add_book",
    "all_tools",
    "get_book_details",
    "increment_book_copies",
    "issue_book",
    "register_person",
    "return_book",
]

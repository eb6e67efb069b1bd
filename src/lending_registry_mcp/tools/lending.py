"""
Lending tools implementation for the Lending Registry MCP Server.

This module exposes the registry's operations as MCP tools:
1. add_book: Add a new book to the catalog
2. issue_book: Issue a copy of a book to a registered person
3. return_book: Take a copy back from the person holding it
4. increment_book_copies: Add copies of an existing book
5. get_book_details: Describe a book and its availability
6. register_person: Register a borrower

Each handler takes the operation's parameters by name, so FastMCP publishes
them (with their constraints) as the tool's input schema. A Success result is
returned as ``{"kind": "Success", "message": ...}``. A Failure, malformed
arguments and unexpected errors are raised as ``ToolError`` so the client
receives a tool response with ``isError`` set and the reason as its text.
"""

import logging
from collections.abc import Callable
from typing import Annotated, Any

from fastmcp.exceptions import ToolError
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..models import BookId, Failure, PersonId, Success
from ..registry import LendingRegistry, get_registry

logger = logging.getLogger(__name__)

# Copy counts are unsigned 64-bit on the wire
MAX_COPIES = 2**64 - 1


# =============================================================================
# PARAMETER TYPES
# =============================================================================
# Shared by the handler signatures (what clients see) and the input models
# (what the handler validates against).

Isbn = Annotated[
    str,
    Field(
        description="Unique identifier of the book (canonical ISBN-like string)",
        min_length=1,
        examples=["978-1", "9780441013593"],
    ),
]

PersonIdParam = Annotated[
    str,
    Field(
        description="Identifier of a registered person",
        min_length=1,
        examples=["p1", "reader_042"],
    ),
]

CopyCount = Annotated[int, Field(ge=0, le=MAX_COPIES, examples=[1, 2, 10])]

Title = Annotated[str, Field(description="Title of the book", min_length=1, examples=["Dune"])]

AuthorName = Annotated[
    str, Field(description="Name of the book's author", min_length=1, examples=["Frank Herbert"])
]

DisplayName = Annotated[
    str, Field(description="Display name of the person", min_length=1, examples=["Paul Atreides"])
]


# =============================================================================
# INPUT SCHEMAS
# =============================================================================


class _ToolInput(BaseModel):
    """Common settings for tool inputs: trim identifiers, reject unknown fields."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


class AddBookInput(_ToolInput):
    """Input schema for the add_book tool."""

    title: Title
    author_name: AuthorName
    isbn: Isbn
    total_copies: CopyCount


class BookLoanInput(_ToolInput):
    """Input schema for the issue_book and return_book tools."""

    isbn: Isbn
    person_id: PersonIdParam


class IncrementBookCopiesInput(_ToolInput):
    """Input schema for the increment_book_copies tool."""

    isbn: Isbn
    additional_copies: CopyCount


class BookDetailsInput(_ToolInput):
    """Input schema for the get_book_details tool."""

    isbn: Isbn


class RegisterPersonInput(_ToolInput):
    """Input schema for the register_person tool."""

    person_id: PersonIdParam
    name: DisplayName


# =============================================================================
# EXECUTION
# =============================================================================


def _run_operation(
    operation: str,
    schema: type[_ToolInput],
    arguments: dict[str, Any],
    call: Callable[[LendingRegistry, Any], Success | Failure],
) -> dict[str, str]:
    """Validate ``arguments`` against ``schema`` and apply ``call`` to the registry.

    Raises:
        ToolError: On invalid arguments, a Failure result or an unexpected error
    """
    try:
        params = schema.model_validate(arguments)
    except ValidationError as e:
        logger.warning("Invalid %s parameters: %s", operation, e)
        raise ToolError(f"Invalid {operation} parameters: {e}") from e

    try:
        result = call(get_registry(), params)
    except Exception as e:
        # Catch-all so a tool never crashes the server
        logger.exception("Unexpected error in %s tool", operation)
        raise ToolError(f"An unexpected error occurred: {e!s}") from e

    if isinstance(result, Failure):
        logger.info("%s failed: %s", operation, result.message)
        raise ToolError(result.message)

    return result.model_dump()


# =============================================================================
# HANDLERS
# =============================================================================


async def add_book_handler(
    title: Title, author_name: AuthorName, isbn: Isbn, total_copies: CopyCount
) -> dict[str, str]:
    """Handler for the add_book tool."""
    return _run_operation(
        "add_book",
        AddBookInput,
        {"title": title, "author_name": author_name, "isbn": isbn, "total_copies": total_copies},
        lambda registry, p: registry.add_book(
            p.title, p.author_name, BookId(p.isbn), p.total_copies
        ),
    )


async def issue_book_handler(isbn: Isbn, person_id: PersonIdParam) -> dict[str, str]:
    """Handler for the issue_book tool."""
    return _run_operation(
        "issue_book",
        BookLoanInput,
        {"isbn": isbn, "person_id": person_id},
        lambda registry, p: registry.issue_book(BookId(p.isbn), PersonId(p.person_id)),
    )


async def return_book_handler(isbn: Isbn, person_id: PersonIdParam) -> dict[str, str]:
    """Handler for the return_book tool."""
    return _run_operation(
        "return_book",
        BookLoanInput,
        {"isbn": isbn, "person_id": person_id},
        lambda registry, p: registry.return_book(BookId(p.isbn), PersonId(p.person_id)),
    )


async def increment_book_copies_handler(
    isbn: Isbn, additional_copies: CopyCount
) -> dict[str, str]:
    """Handler for the increment_book_copies tool."""
    return _run_operation(
        "increment_book_copies",
        IncrementBookCopiesInput,
        {"isbn": isbn, "additional_copies": additional_copies},
        lambda registry, p: registry.increment_book_copies(
            BookId(p.isbn), p.additional_copies
        ),
    )


async def get_book_details_handler(isbn: Isbn) -> dict[str, str]:
    """Handler for the get_book_details tool. Read-only."""
    return _run_operation(
        "get_book_details",
        BookDetailsInput,
        {"isbn": isbn},
        lambda registry, p: registry.get_book_details(BookId(p.isbn)),
    )


async def register_person_handler(person_id: PersonIdParam, name: DisplayName) -> dict[str, str]:
    """Handler for the register_person tool."""
    return _run_operation(
        "register_person",
        RegisterPersonInput,
        {"person_id": person_id, "name": name},
        lambda registry, p: registry.register_person(PersonId(p.person_id), p.name),
    )


# =============================================================================
# TOOL REGISTRATION
# =============================================================================
# FastMCP derives each tool's input schema from its handler's signature

add_book = {
    "name": "add_book",
    "description": (
        "Add a new book to the library. All copies start available and the "
        "reader history starts empty. Fails if a book with the same ISBN exists."
    ),
    "handler": add_book_handler,
    "read_only": False,
}

issue_book = {
    "name": "issue_book",
    "description": (
        "Issue one copy of a book to a registered person. Fails if the book is "
        "unknown, has no copies left, or the person is not registered. A person "
        "may hold more than one copy of the same book."
    ),
    "handler": issue_book_handler,
    "read_only": False,
}

return_book = {
    "name": "return_book",
    "description": (
        "Return one copy of a book held by a person. Fails if the book was not "
        "issued to that person. The book's reader history is kept."
    ),
    "handler": return_book_handler,
    "read_only": False,
}

increment_book_copies = {
    "name": "increment_book_copies",
    "description": (
        "Add copies of an existing book. Both the total and the available "
        "counts grow by the given amount."
    ),
    "handler": increment_book_copies_handler,
    "read_only": False,
}

get_book_details = {
    "name": "get_book_details",
    "description": "Describe a book by ISBN: title, author and whether a copy is available.",
    "handler": get_book_details_handler,
    "read_only": True,
}

register_person = {
    "name": "register_person",
    "description": "Register a person so books can be issued to them.",
    "handler": register_person_handler,
    "read_only": False,
}

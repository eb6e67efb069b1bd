"""Book Resources - Lending Registry Catalog Access

Exposes book and loan state via read-only resources.
Clients use these to browse the catalog and see who holds which book.

Resources:
- library://books/list - Every book with its copy counts
- library://books/{isbn} - Individual book record by ISBN
- library://loans/{isbn} - Current holders and reader history of a book
"""

import logging
from typing import Any

from fastmcp.exceptions import ResourceError
from pydantic import BaseModel, Field

from ..models import Book, BookId, PersonId
from ..registry import RegistryInvariantError, get_registry

logger = logging.getLogger(__name__)


class BookListResponse(BaseModel):
    """Response schema for the catalog listing."""

    books: list[Book] = Field(..., description="Every book, in the order it was added")
    total: int = Field(..., description="Number of books in the catalog")
    available: int = Field(..., description="Number of books with at least one copy available")
    consistent: bool = Field(
        ..., description="Whether every book's loans match its checked-out copies"
    )


class LoanResponse(BaseModel):
    """Response schema for a book's loan state."""

    isbn: BookId = Field(..., description="Identifier of the book")
    holders: list[PersonId] = Field(..., description="People holding a copy right now")
    readers: list[PersonId] = Field(..., description="Everyone the book has ever been issued to")
    available_copies: int = Field(..., description="Copies on the shelf")
    total_copies: int = Field(..., description="Copies owned")


async def list_books_handler() -> dict[str, Any]:
    """Returns the whole catalog.

    Client requests library://books/list to browse every book.
    """
    try:
        logger.debug("MCP Resource Request - books/list")
        registry = get_registry()
        books = registry.list_books()

        try:
            registry.check_invariants()
            consistent = True
        except RegistryInvariantError:
            logger.exception("Lending state is inconsistent")
            consistent = False

        response = BookListResponse(
            books=books,
            total=len(books),
            available=sum(1 for book in books if book.is_available),
            consistent=consistent,
        )
        return response.model_dump()

    except Exception as e:
        logger.exception("Error in books/list resource")
        raise ResourceError(f"Failed to retrieve book list: {e!s}") from e


async def get_book_handler(isbn: str) -> dict[str, Any]:
    """Returns the record of a specific book.

    Client requests library://books/{isbn} for title, author,
    copy counts and reader history.
    """
    try:
        logger.debug("MCP Resource Request - books/%s", isbn)

        book = get_registry().get_book(BookId(isbn))
        if book is None:
            raise ResourceError(f"Book not found: {isbn}")

        return book.model_dump()

    except ResourceError:
        raise
    except Exception as e:
        logger.exception("Error in books/{isbn} resource")
        raise ResourceError(f"Failed to retrieve book details: {e!s}") from e


async def get_loans_handler(isbn: str) -> dict[str, Any]:
    """Returns who holds a book now and who has ever borrowed it."""
    try:
        logger.debug("MCP Resource Request - loans/%s", isbn)

        registry = get_registry()
        book = registry.get_book(BookId(isbn))
        if book is None:
            raise ResourceError(f"Book not found: {isbn}")

        response = LoanResponse(
            isbn=book.isbn,
            holders=registry.current_holders(book.isbn),
            readers=list(book.readers),
            available_copies=book.available_copies,
            total_copies=book.total_copies,
        )
        return response.model_dump()

    except ResourceError:
        raise
    except Exception as e:
        logger.exception("Error in loans/{isbn} resource")
        raise ResourceError(f"Failed to retrieve loans: {e!s}") from e


book_resources: list[dict[str, Any]] = [
    {
        "uri": "library://books/list",
        "name": "Book Catalog",
        "description": "Every book in the library with its total and available copies.",
        "mime_type": "application/json",
        "handler": list_books_handler,
    },
    {
        "uri_template": "library://books/{isbn}",
        "name": "Book Details",
        "description": "Full record of a specific book by ISBN, including its reader history",
        "mime_type": "application/json",
        "handler": get_book_handler,
    },
    {
        "uri_template": "library://loans/{isbn}",
        "name": "Book Loans",
        "description": "People currently holding a copy of a book, plus everyone who has borrowed it",
        "mime_type": "application/json",
        "handler": get_loans_handler,
    },
]

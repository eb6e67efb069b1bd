"""
Book model for the Lending Registry MCP Server.

A book is a catalog entry with a fixed identifier, a pool of copies and an
append-only log of everyone who has ever borrowed it. In the MCP architecture
books are exposed as resources:
- library://books/list
- library://books/{isbn}

Copy counts follow two rules:
1. ``0 <= available_copies <= total_copies`` at all times
2. ``available_copies`` only moves through issue, return and add-copies
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .identifiers import BookId, PersonId


class Book(BaseModel):
    """
    Represents a book held by the library.

    The ``readers`` list is a history, not the current loan set: it grows on
    every issue and is never trimmed on return. Current holders live in the
    registry's loan index.
    """

    isbn: BookId = Field(
        ...,
        description="Unique identifier of the book (canonical ISBN-like string)",
        min_length=1,
        examples=["978-1", "9780441013593"],
    )

    title: str = Field(
        ...,
        description="The title of the book",
        examples=["Dune", "The Left Hand of Darkness"],
    )

    author_name: str = Field(
        ...,
        description="Name of the book's author",
        examples=["Frank Herbert", "Ursula K. Le Guin"],
    )

    total_copies: int = Field(
        ...,
        description="Total number of copies owned by the library",
        ge=0,
        examples=[0, 2, 10],
    )

    available_copies: int = Field(
        ...,
        description="Number of copies currently available for issue",
        ge=0,
        examples=[0, 1, 5],
    )

    readers: list[PersonId] = Field(
        default_factory=list,
        description="Every person the book has been issued to, in issue order (repeats included)",
    )

    @model_validator(mode="after")
    def validate_copies(self) -> "Book":
        """Ensure available copies doesn't exceed total copies."""
        if self.available_copies > self.total_copies:
            raise ValueError("Available copies cannot exceed total copies")
        return self

    @property
    def is_available(self) -> bool:
        """Check if the book has any available copies."""
        return self.available_copies > 0

    @property
    def checked_out_copies(self) -> int:
        """Calculate number of copies currently issued."""
        return self.total_copies - self.available_copies

    def issue_copy(self, person_id: PersonId) -> None:
        """
        Take one copy off the shelf for ``person_id`` and log the borrow.

        Raises:
            ValueError: If no copies are available
        """
        if not self.is_available:
            raise ValueError(f"No copies of '{self.title}' are available")
        self.available_copies -= 1
        self.readers.append(person_id)

    def return_copy(self) -> None:
        """Put one copy back on the shelf."""
        if self.available_copies >= self.total_copies:
            raise ValueError("All copies are already returned")
        self.available_copies += 1

    def add_copies(self, count: int) -> None:
        """Grow both the total and the available pool by ``count``."""
        if count < 0:
            raise ValueError("Cannot add a negative number of copies")
        self.total_copies += count
        self.available_copies += count

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "isbn": "978-1",
                "title": "Dune",
                "author_name": "Frank Herbert",
                "total_copies": 2,
                "available_copies": 1,
                "readers": ["p1"],
            }
        },
    )

"""
Lending Registry for the Lending Registry MCP Server.

The registry is the single owner of lending state. It holds three mappings:

1. books:  BookId   -> Book
2. people: PersonId -> Person
3. loans:  BookId   -> list[PersonId]  (who holds a copy right now)

Every public operation is one check-then-mutate step that answers with a
``Success`` or ``Failure`` result. Expected problems (unknown book, no copies
left, person never borrowed the book, empty identifiers, negative copy
counts) are failures, not exceptions, and leave the mappings untouched.

Two invariants hold for every book after every operation:
- ``0 <= available_copies <= total_copies``
- ``len(loans[isbn]) == total_copies - available_copies``

The registry is synchronous and takes no locks. MCP handlers call into it
without awaiting in between, so operations never interleave.
"""

import logging

from .models import Book, BookId, Failure, Person, PersonId, Success

logger = logging.getLogger(__name__)


class RegistryInvariantError(RuntimeError):
    """Raised when lending state no longer satisfies its copy-count invariants."""


class LendingRegistry:
    """
    In-memory book, person and loan state with the lending rules on top.

    Construct one per server (or per test); nothing is shared between
    instances.
    """

    def __init__(self) -> None:
        self.books: dict[BookId, Book] = {}
        self.people: dict[PersonId, Person] = {}
        self.loans: dict[BookId, list[PersonId]] = {}

    # =========================================================================
    # LENDING OPERATIONS
    # =========================================================================

    def add_book(
        self, title: str, author_name: str, isbn: BookId, total_copies: int
    ) -> Success | Failure:
        """Add a new book with every copy available and an empty reader history."""
        if isbn in self.books:
            logger.info("add_book rejected - %s already exists", isbn)
            return Failure(message="Book already exists")

        if not isbn:
            logger.info("add_book rejected - empty book identifier")
            return Failure(message="Book identifier cannot be empty")

        if total_copies < 0:
            logger.info("add_book rejected - negative copy count %d for %s", total_copies, isbn)
            return Failure(message="Total copies cannot be negative")

        self.books[isbn] = Book(
            isbn=isbn,
            title=title,
            author_name=author_name,
            total_copies=total_copies,
            available_copies=total_copies,
        )
        logger.info("Added book %s (%s) with %d copies", isbn, title, total_copies)
        return Success(message=f"Book {title} added successfully")

    def issue_book(self, isbn: BookId, person_id: PersonId) -> Success | Failure:
        """
        Issue one copy of ``isbn`` to ``person_id``.

        A person who already holds a copy may be issued another one while
        copies remain. Each issue is appended to the book's reader history.
        """
        book = self.books.get(isbn)
        if book is None or not book.is_available:
            logger.info("issue_book rejected - %s not available", isbn)
            return Failure(message="Book not available for issue.")

        if person_id not in self.people:
            logger.info("issue_book rejected - person %s not found", person_id)
            return Failure(message="Person not found")

        book.issue_copy(person_id)
        self.loans.setdefault(isbn, []).append(person_id)
        logger.info(
            "Issued %s to %s (%d of %d available)",
            isbn,
            person_id,
            book.available_copies,
            book.total_copies,
        )
        return Success(message=f"Book {isbn} issued to {person_id}")

    def return_book(self, isbn: BookId, person_id: PersonId) -> Success | Failure:
        """
        Take back one copy of ``isbn`` from ``person_id``.

        Only one loan is closed even if the person holds several copies. The
        reader history is left as is.
        """
        book = self.books.get(isbn)
        holders = self.loans.get(isbn)
        if book is None or not holders or person_id not in holders:
            logger.info("return_book rejected - %s not issued to %s", isbn, person_id)
            return Failure(message="This book was not issued to the given person")

        book.return_copy()
        holders.remove(person_id)
        if not holders:
            del self.loans[isbn]
        logger.info(
            "Returned %s from %s (%d of %d available)",
            isbn,
            person_id,
            book.available_copies,
            book.total_copies,
        )
        return Success(message=f"Book {isbn} returned by {person_id}")

    def increment_book_copies(self, isbn: BookId, additional_copies: int) -> Success | Failure:
        """Add copies to both the total and the available pool. No upper bound."""
        book = self.books.get(isbn)
        if book is None:
            logger.info("increment_book_copies rejected - %s not found", isbn)
            return Failure(message="Book not found.")

        if additional_copies < 0:
            logger.info("increment_book_copies rejected - negative count for %s", isbn)
            return Failure(message="Additional copies cannot be negative")

        book.add_copies(additional_copies)
        logger.info(
            "Added %d copies to %s (now %d total)", additional_copies, isbn, book.total_copies
        )
        return Success(message=f"Added {additional_copies} copies to book {isbn}")

    def get_book_details(self, isbn: BookId) -> Success | Failure:
        """Describe a book and whether a copy can be issued right now."""
        book = self.books.get(isbn)
        if book is None:
            return Failure(message="Book not found.")

        availability = "Available" if book.is_available else "Not Available"
        return Success(message=f'Book "{book.title}" by {book.author_name} is {availability}.')

    # =========================================================================
    # PEOPLE
    # =========================================================================

    def register_person(self, person_id: PersonId, name: str) -> Success | Failure:
        """Register a borrower so books can be issued to them."""
        if person_id in self.people:
            logger.info("register_person rejected - %s already exists", person_id)
            return Failure(message="Person already exists")

        if not person_id:
            logger.info("register_person rejected - empty person identifier")
            return Failure(message="Person identifier cannot be empty")

        self.people[person_id] = Person(id=person_id, name=name)
        logger.info("Registered person %s (%s)", person_id, name)
        return Success(message=f"Person {name} registered with id {person_id}")

    # =========================================================================
    # READ ACCESSORS
    # =========================================================================

    def get_book(self, isbn: BookId) -> Book | None:
        return self.books.get(isbn)

    def get_person(self, person_id: PersonId) -> Person | None:
        return self.people.get(person_id)

    def current_holders(self, isbn: BookId) -> list[PersonId]:
        """People currently holding a copy of ``isbn``, in issue order."""
        return list(self.loans.get(isbn, []))

    def list_books(self) -> list[Book]:
        """All books in the order they were added."""
        return list(self.books.values())

    def check_invariants(self) -> None:
        """
        Verify the copy-count invariants for every book.

        Raises:
            RegistryInvariantError: Describing the first book that breaks them
        """
        for isbn, book in self.books.items():
            if not 0 <= book.available_copies <= book.total_copies:
                raise RegistryInvariantError(
                    f"Book {isbn} has {book.available_copies} available "
                    f"of {book.total_copies} total copies"
                )
            outstanding = len(self.loans.get(isbn, []))
            if outstanding != book.checked_out_copies:
                raise RegistryInvariantError(
                    f"Book {isbn} has {outstanding} outstanding loans "
                    f"but {book.checked_out_copies} copies checked out"
                )

        orphaned = set(self.loans) - set(self.books)
        if orphaned:
            raise RegistryInvariantError(f"Loans recorded for unknown books: {sorted(orphaned)}")


# === Process-wide Registry ===
# The MCP server owns one registry for its lifetime


class _RegistryStore:
    """Internal storage for the server's registry."""

    _instance: LendingRegistry | None = None


def get_registry() -> LendingRegistry:
    """Get or create the registry shared by the server's tools and resources."""
    if _RegistryStore._instance is None:  # type: ignore[reportPrivateUsage]
        _RegistryStore._instance = LendingRegistry()  # type: ignore[reportPrivateUsage]
    return _RegistryStore._instance  # type: ignore[reportPrivateUsage]


def reset_registry() -> None:
    """Drop the shared registry so the next access starts empty (useful for testing)."""
    _RegistryStore._instance = None  # type: ignore[reportPrivateUsage]

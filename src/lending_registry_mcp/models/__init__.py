"""
Lending Registry MCP Server Models.

Pydantic models for the lending domain:
- Book: catalog entry with copy counts and reader history
- Person: registered borrower
- Success / Failure: the two cases of every operation result
- BookId / PersonId: typed identifier keys
"""

from .book import Book
from .identifiers import BookId, PersonId
from .person import Person
from .result import Failure, OperationResult, Success, operation_result_adapter

__all__ = [
    "Book",
    "BookId",
    "Failure",
    "OperationResult",
    "Person",
    "PersonId",
    "Success",
    "operation_result_adapter",
]

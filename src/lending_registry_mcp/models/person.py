"""
Person model for the Lending Registry MCP Server.

People are the borrowers books are issued to. The lending operations only
read them: a person must be registered before a book can be issued to them.
"""

from pydantic import BaseModel, ConfigDict, Field

from .identifiers import PersonId


class Person(BaseModel):
    """A registered borrower."""

    id: PersonId = Field(
        ...,
        description="Unique identifier for the person",
        min_length=1,
        examples=["p1", "reader_042"],
    )

    name: str = Field(
        ...,
        description="Display name of the person",
        examples=["Paul Atreides", "Jane Doe"],
    )

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={"example": {"id": "p1", "name": "Paul Atreides"}},
    )

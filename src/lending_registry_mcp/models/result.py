"""
Operation results for the Lending Registry.

Every registry operation answers with exactly one of two cases:
- Success: carries a human-readable confirmation
- Failure: carries a human-readable reason

The union is discriminated on ``kind`` so the serialized form is
``{"kind": "Success", "message": "..."}`` or
``{"kind": "Failure", "message": "..."}``, and callers have to look at the
case before trusting the message.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class Success(BaseModel):
    """The operation was applied."""

    kind: Literal["Success"] = "Success"
    message: str = Field(..., description="Confirmation of what was done")

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return True


class Failure(BaseModel):
    """The operation was rejected and state was left untouched."""

    kind: Literal["Failure"] = "Failure"
    message: str = Field(..., description="Why the operation was rejected")

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return False


OperationResult = Annotated[Success | Failure, Field(discriminator="kind")]

operation_result_adapter: TypeAdapter[Success | Failure] = TypeAdapter(OperationResult)

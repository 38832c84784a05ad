"""
Submission outcomes returned by the update submitter.
"""

from typing import Any, Literal, Union

from pydantic import BaseModel, Field


class SubmitSuccess(BaseModel):
    """The store accepted the change set; applied_fields are the values it now holds."""

    status: Literal["success"] = "success"
    record_id: str
    applied_fields: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return True


class SubmitNoOp(BaseModel):
    """The change set was empty; nothing was sent and nothing was invalidated."""

    status: Literal["noop"] = "noop"
    record_id: str

    @property
    def ok(self) -> bool:
        return True

    @property
    def applied_fields(self) -> dict[str, Any]:
        return {}


class SubmitFailure(BaseModel):
    """The store rejected or failed the write; reason is the store's message."""

    status: Literal["failure"] = "failure"
    record_id: str
    reason: str

    @property
    def ok(self) -> bool:
        return False


SubmitResult = Union[SubmitSuccess, SubmitNoOp, SubmitFailure]

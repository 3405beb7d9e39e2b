"""Pydantic models and result types for the notes client."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Note(BaseModel):
    """A note as returned by the remote API.

    The API owns every field; the client only ever holds read-only copies.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(
        ...,
        validation_alias=AliasChoices("_id", "id"),
        description="Opaque identifier assigned by the API",
    )
    title: str = Field(..., description="Note title")
    content: str = Field(..., description="Note content")
    created_at: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("createdAt", "created_at"),
        description="Creation timestamp set by the API",
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value


class NoteDraft(BaseModel):
    """Request body for create and update."""

    title: str
    content: str


class SortOrder(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"


class ErrorKind(str, Enum):
    """Why an operation against the notes API did not succeed."""

    NETWORK = "network"
    HTTP_STATUS = "http_status"
    INVALID_RESPONSE = "invalid_response"
    SUPERSEDED = "superseded"


@dataclass(frozen=True)
class Ok:
    """Successful operation, carrying the note list after the final refresh."""

    notes: list[Note] = field(default_factory=list)
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class Err:
    """Failed operation."""

    kind: ErrorKind
    status_code: Optional[int] = None
    detail: str = ""
    ok: ClassVar[bool] = False


Result = Union[Ok, Err]

"""
Pydantic schemas for request/response validation.
Writes bind a strict Student shape; reads return open documents as stored.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

# A stored document as read back: _id and any extra fields pass through.
Document = dict[str, Any]


class StudentCreate(BaseModel):
    """Request body for creating a student. Unknown fields are dropped."""

    name: StrictStr
    age: StrictInt

    model_config = ConfigDict(extra="ignore")


class StudentCreated(BaseModel):
    """Confirmation returned after an insert."""

    message: str = "Student added successfully!"
    inserted_id: str = Field(alias="insertedID")

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    """Error payload for API responses."""

    error: str

    model_config = {"extra": "forbid"}

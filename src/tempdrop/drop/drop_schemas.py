"""Pydantic schemas for drop responses."""

from pydantic import BaseModel, ConfigDict, Field


class UploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    id: str
    type: str
    expire: int
    expire_at: int = Field(alias="expireAt")


class ErrorResponse(BaseModel):
    success: bool = False
    reason: str

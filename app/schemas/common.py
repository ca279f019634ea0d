"""Common schemas for standard API responses."""

from pydantic import BaseModel, ConfigDict, Field


class ListMeta(BaseModel):
    """Metadata for unpaginated collections."""

    total: int = Field(..., description="Number of items returned", ge=0)


class StandardResponse[T](BaseModel):
    """Standard response wrapper for single resources."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"data": {}, "meta": None, "error": None}}
    )

    data: T = Field(..., description="Response data")
    meta: dict | None = Field(None, description="Optional metadata")
    error: None = Field(None, description="Error object (null on success)")


class StandardListResponse[T](BaseModel):
    """Standard response wrapper for collections."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"data": [], "meta": {"total": 0}, "error": None}}
    )

    data: list[T] = Field(..., description="List of items")
    meta: ListMeta = Field(..., description="Collection metadata")
    error: None = Field(None, description="Error object (null on success)")


class ErrorDetail(BaseModel):
    """Error body returned by every failing endpoint."""

    code: str = Field(..., description="Error code (e.g., 'AUTOMATION_RULE_NOT_FOUND')")
    message: str = Field(..., description="Human-readable error message")
    details: dict | None = Field(None, description="Additional error details")


class ErrorResponse(BaseModel):
    """Error envelope."""

    error: ErrorDetail = Field(..., description="Error information")
    data: None = Field(None, description="Data object (null on error)")

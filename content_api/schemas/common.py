"""
Shared schema building blocks.

- CamelModel: snake_case in Python, camelCase on the wire
- ApiResponse: the uniform {status, message, data} success envelope
- ErrorResponse: the {status, message, error} failure envelope
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base model that accepts and emits camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(BaseModel, Generic[DataT]):
    """Success envelope returned by every endpoint."""
    status: int = Field(1, description="1 on success")
    message: str = Field("success", description="Human-readable outcome")
    data: Optional[DataT] = Field(None, description="Endpoint payload")


class ErrorResponse(BaseModel):
    """Failure envelope rendered by the exception handlers."""
    status: int = Field(0, description="0 on failure")
    message: str = Field(..., description="Human-readable error (first validation error only)")
    error: Optional[str] = Field(None, description="Machine-readable error code")

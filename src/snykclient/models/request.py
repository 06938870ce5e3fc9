"""Request descriptor model."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RequestDescriptor(BaseModel):
    """Single API call: method, relative path, query and JSON body.

    Built fresh for every call and never mutated.
    """

    model_config = ConfigDict(frozen=True)

    method: Literal["GET", "POST"] = Field(..., description="HTTP method")
    path: str = Field(..., min_length=1, description="Path relative to the API base URL")
    params: dict[str, str] | None = Field(default=None, description="Query parameters")
    body: Any = Field(default=None, description="JSON request body")

    @field_validator("path")
    @classmethod
    def strip_leading_slash(cls, v: str) -> str:
        """Keep paths relative so they join under the base URL."""
        return v.lstrip("/")

"""Request payload models for project imports and manifest tests."""

from typing import Any

from pydantic import BaseModel, Field


class ImportTarget(BaseModel):
    """Repository to import through an SCM integration."""

    owner: str = Field(..., description="Repository owner (user or organization)")
    name: str = Field(..., description="Repository name")
    branch: str = Field(..., description="Branch to import")

    def to_body(self) -> dict[str, Any]:
        """Render the import request body.

        Returns:
            Body of the form ``{"target": {"owner", "name", "branch"}}``.
        """
        return {"target": self.model_dump()}


class ManifestFile(BaseModel):
    """Primary manifest file submitted for testing."""

    contents: str = Field(..., description="Raw contents of the manifest")
    # The API also accepts base64; plain is the only encoding sent today.
    encoding: str = Field(default="plain", description="Encoding of the contents")

    def to_body(self) -> dict[str, Any]:
        """Render the test request body."""
        return {
            "encoding": self.encoding,
            "files": {"target": {"contents": self.contents}},
        }

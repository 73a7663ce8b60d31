"""Document model for parsed text supplied by the ingestion layer."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class Document(BaseModel):
    """A parsed document. Content may be empty when no text could be extracted."""

    model_config = ConfigDict(frozen=True)

    id: str | int
    name: str
    content: str = ""

    @field_validator("content", mode="before")
    @classmethod
    def absent_content_is_empty(cls, value: Any) -> Any:
        """Absent (null) content is stored as an empty string."""
        return "" if value is None else value

    @property
    def is_empty(self) -> bool:
        """True when the document has no non-whitespace text."""
        return not self.content.strip()

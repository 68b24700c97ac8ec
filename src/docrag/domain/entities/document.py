"""Source document entity."""

from dataclasses import dataclass, field
from typing import Any

from docrag.domain.exceptions import ValidationError


@dataclass(frozen=True)
class SourceDocument:
    """Document text handed in by the caller for retrieval."""

    id: str
    title: str
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.content, str):
            raise ValidationError(f"Document {self.id!r} content must be a string")
        if not self.title or not self.title.strip():
            object.__setattr__(self, "title", "Untitled")

    @property
    def has_content(self) -> bool:
        """True when content holds any non-whitespace text."""
        return bool(self.content.strip())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SourceDocument":
        """Build from an API payload record."""
        if not isinstance(data, dict):
            raise ValidationError("Document must be an object")
        doc_id = data.get("id")
        if doc_id is None or str(doc_id).strip() == "":
            raise ValidationError("Document id is required")
        content = data.get("content")
        if content is None:
            content = ""
        metadata = data.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise ValidationError(f"Document {doc_id!r} metadata must be an object")
        return cls(
            id=str(doc_id),
            title=str(data.get("title") or "Untitled"),
            content=content,
            metadata=metadata,
        )

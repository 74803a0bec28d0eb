"""
Record and document types shared by the embedders, vector stores and flows.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import numpy as np

NO_CONTENT_FALLBACK = "No content available"


@dataclass(frozen=True)
class TextPart:
    """A single text segment of structured document content."""

    text: str


@dataclass(frozen=True)
class StructuredContent:
    """Document content made of ordered parts; the first part carries the display text."""

    parts: List[TextPart]


@dataclass(frozen=True)
class FlatText:
    """Document content stored as a single text field."""

    text: str


DocumentContent = Union[StructuredContent, FlatText, None]


@dataclass(frozen=True)
class Document:
    """A retrieved policy document with optional metadata."""

    content: DocumentContent
    """Structured parts, flat text, or None when the store returned neither"""

    metadata: Dict[str, Any] = field(default_factory=dict)
    """Scalar metadata attached at indexing time (e.g. policyType)"""

    fallback_text: Optional[str] = None
    """Flat text kept alongside structured content when the store returned both"""

    @classmethod
    def from_text(cls, text: str, metadata: Optional[Dict[str, Any]] = None) -> "Document":
        return cls(content=FlatText(text), metadata=dict(metadata or {}))

    @classmethod
    def from_store_dict(cls, data: Dict[str, Any]) -> "Document":
        """Build a document from the store shape {content?: [{text}], text?, metadata?}."""
        raw_content = data.get("content")
        flat = data.get("text")
        metadata = dict(data.get("metadata") or {})

        if raw_content:
            parts = [TextPart(part.get("text") or "") for part in raw_content]
            return cls(content=StructuredContent(parts), metadata=metadata, fallback_text=flat)
        if flat is not None:
            return cls(content=FlatText(flat), metadata=metadata)
        return cls(content=None, metadata=metadata)

    @property
    def policy_type(self) -> Optional[str]:
        value = self.metadata.get("policyType")
        return value if value else None


def extract_text(document: Document, default: Optional[str] = NO_CONTENT_FALLBACK) -> Optional[str]:
    """
    Return the display text of a document.

    The first structured part wins, then flat text, then default.
    Empty strings fall through to the next candidate.
    """
    content = document.content
    if isinstance(content, StructuredContent):
        if content.parts and content.parts[0].text:
            return content.parts[0].text
        if document.fallback_text:
            return document.fallback_text
    elif isinstance(content, FlatText) and content.text:
        return content.text
    return default


def has_text(document: Document) -> bool:
    """True when the document carries non-empty structured or flat text."""
    return extract_text(document, default=None) is not None


def scalar_metadata(metadata: Dict[str, Any]) -> Dict[str, Any]:
    """
    Drop None values and reject anything that is not a str, int, float or bool.

    Chroma only stores flat scalar metadata.
    """
    for key, value in metadata.items():
        if value is not None and not isinstance(value, (str, int, float, bool)):
            raise ValueError(f"metadata value for {key!r} must be a scalar")
    return {key: value for key, value in metadata.items() if value is not None}


@dataclass
class VectorRecord:
    """Represents a vector record with its document text and metadata."""

    id: str
    """Unique identifier for the vector record"""

    vector: Optional[np.ndarray]
    """The vector representation of the content"""

    text: str
    """Document text the vector was computed from"""

    metadata: Dict[str, Any]
    """Additional metadata associated with the vector"""


@dataclass
class QueryResult:
    """Represents a search result from vector store."""

    id: str
    """Identifier for the matching record"""

    score: float
    """Similarity score of the match (higher is closer)"""

    text: str
    """Stored document text"""

    metadata: Dict[str, Any]
    """Metadata associated with the matched record"""

    def to_document(self) -> Document:
        return Document.from_text(self.text, self.metadata)

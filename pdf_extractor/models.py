"""
Data Models for Document Text Extraction

Defines:
1. DocumentMetadata - Source filename, page count and upload time
2. ExtractedDocument - Plain text of a document plus its metadata
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DocumentMetadata(BaseModel):
    """Document-level metadata attached to every chunk of a document."""
    model_config = ConfigDict(frozen=True)

    filename: str = Field(
        ...,
        description="Original filename of the uploaded document",
        min_length=1,
    )
    page_count: int = Field(
        ...,
        description="Number of pages in the document",
        ge=0,
    )
    uploaded_at: datetime = Field(
        default_factory=utc_now,
        description="When the document was uploaded (UTC)",
    )


class ExtractedDocument(BaseModel):
    """Output of the extractor: the full text and its metadata."""
    model_config = ConfigDict(frozen=True)

    text: str = Field(
        "",
        description="Extracted text, pages separated by a blank line",
    )
    metadata: DocumentMetadata

    @property
    def word_count(self) -> int:
        return len(self.text.split())

"""Source document, extraction result and rasterized page schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DocumentFormat(str, Enum):
    PDF = "pdf"
    DOCX = "docx"


class SourceDocument(BaseModel):
    """An uploaded CV file whose declared type has been accepted. Held in memory only."""

    model_config = ConfigDict(frozen=True)

    content: bytes = Field(..., description="Raw file bytes")
    format: DocumentFormat = Field(..., description="Declared document format")
    filename: str = Field(default="", description="Original file name, for display")

    @property
    def size(self) -> int:
        return len(self.content)


class ExtractionResult(BaseModel):
    """Text layer of a document and its page count."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(default="", description="Concatenated text of all pages")
    page_count: int = Field(default=0, ge=0, description="Number of pages (1 for DOCX)")


class PageImage(BaseModel):
    """One rasterized PDF page, encoded for transport to the OCR model."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=1, description="1-based page number")
    encoded_bytes: str = Field(..., description="Base64 image payload without a data-URL prefix")
    mime_type: str = Field(default="image/jpeg", description="Image encoding of the payload")

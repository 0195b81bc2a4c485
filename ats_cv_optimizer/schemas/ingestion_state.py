"""Ingestion state machine: statuses, snapshots and the events that drive it."""

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ats_cv_optimizer.errors import IngestionErrorKind


class IngestionStatus(str, Enum):
    IDLE = "idle"
    EXTRACTING = "extracting"
    SCANNING = "scanning"
    DONE = "done"
    FAILED = "failed"


class IngestionSnapshot(BaseModel):
    """Observable state after a transition. Text is only set in DONE."""

    model_config = ConfigDict(frozen=True)

    status: IngestionStatus = Field(default=IngestionStatus.IDLE)
    attempt: int = Field(default=0, description="Generation token of the attempt that produced this state")
    filename: Optional[str] = Field(default=None)
    file_size: int = Field(default=0, description="Size in bytes of the selected file")
    text: str = Field(default="")
    warnings: List[str] = Field(default_factory=list)
    error: Optional[IngestionErrorKind] = Field(default=None)
    error_message: Optional[str] = Field(default=None)

    @property
    def is_busy(self) -> bool:
        return self.status in (IngestionStatus.EXTRACTING, IngestionStatus.SCANNING)


class FileSelected(BaseModel):
    """A file picked by the user, with its declared MIME type."""

    model_config = ConfigDict(frozen=True)

    content: bytes
    mime_type: str = ""
    filename: str = ""


class IngestionCleared(BaseModel):
    """The user removed the file or cancelled the attempt."""

    model_config = ConfigDict(frozen=True)


IngestionEvent = Union[FileSelected, IngestionCleared]

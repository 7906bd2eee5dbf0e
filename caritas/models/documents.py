"""
Document processing models.

Upload jobs, per-file outcomes and the combined batch result.

Dependencies: pydantic
System role: Return types for DocumentProcessingOrchestrator.process_documents()
"""

from pydantic import BaseModel, ConfigDict, Field, computed_field

PARAGRAPH_SEPARATOR = "\n\n"


class UploadBlob(BaseModel):
    """One user file as received from the browser."""

    model_config = ConfigDict(frozen=True)

    file_name: str = Field(description="Original filename from user")
    content_type: str = Field(description="Declared MIME type")
    data: bytes = Field(repr=False, description="Raw file contents")

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def title(self) -> str:
        """Display title: file name without its extension."""
        stem = self.file_name.rsplit(".", 1)[0] if "." in self.file_name else self.file_name
        return stem or self.file_name


class UploadJob(BaseModel):
    """One file of a batch with the context needed to process it."""

    model_config = ConfigDict(frozen=True)

    blob: UploadBlob
    owner_id: str
    instruction: str
    storage_key: str


class UploadOutcome(BaseModel):
    """Settled result of one upload job. ``text`` is never empty."""

    model_config = ConfigDict(frozen=True)

    source_file_name: str
    succeeded: bool
    text: str = Field(min_length=1)


class CombinedResult(BaseModel):
    """All outcomes of a batch in input order, plus the joined text."""

    outcomes: list[UploadOutcome]

    @computed_field
    @property
    def text(self) -> str:
        return PARAGRAPH_SEPARATOR.join(outcome.text for outcome in self.outcomes)

    @property
    def succeeded_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.succeeded)

    @property
    def failed_count(self) -> int:
        return len(self.outcomes) - self.succeeded_count

    def __len__(self) -> int:
        return len(self.outcomes)


class ProcessDocumentsResponse(BaseModel):
    """Response schema for POST /documents/process."""

    result: str = Field(description="All outcomes joined into one document")
    outcomes: list[UploadOutcome]
    succeeded_count: int
    failed_count: int

    @classmethod
    def from_result(cls, combined: CombinedResult) -> "ProcessDocumentsResponse":
        return cls(
            result=combined.text,
            outcomes=combined.outcomes,
            succeeded_count=combined.succeeded_count,
            failed_count=combined.failed_count,
        )

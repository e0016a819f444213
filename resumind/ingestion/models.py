import mimetypes
from dataclasses import dataclass, field, replace
from pathlib import Path

from resumind.analysis.models import Feedback

RECORD_VERSION = 1


@dataclass(frozen=True)
class Document:
    """A user-submitted file as received: name, bytes and declared media type."""

    name: str
    data: bytes = field(repr=False)
    media_type: str = "application/pdf"

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: Path, media_type: str | None = None) -> "Document":
        if media_type is None:
            media_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(name=path.name, data=path.read_bytes(), media_type=media_type)


@dataclass(frozen=True)
class SubmissionMetadata:
    """Free-text details of the job the résumé is submitted for."""

    company_name: str = ""
    job_title: str = ""
    job_description: str = ""


@dataclass(frozen=True)
class DocumentRecord:
    """Durable state of one ingested résumé.

    ``feedback`` stays None until the analysis result has been merged in.
    """

    id: str
    resume_path: str
    image_path: str
    company_name: str = ""
    job_title: str = ""
    job_description: str = ""
    feedback: Feedback | None = None
    version: int = RECORD_VERSION

    @property
    def is_complete(self) -> bool:
        return self.feedback is not None

    def with_feedback(self, feedback: Feedback) -> "DocumentRecord":
        return replace(self, feedback=feedback)

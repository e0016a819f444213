from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from resumind.analysis.client_base import AnalysisFn
from resumind.ingestion.models import Document, DocumentRecord, SubmissionMetadata
from resumind.raster.models import RasterArtifact


@dataclass(slots=True)
class PipelineContext:
    document: Document
    metadata: SubmissionMetadata
    analysis_fn: AnalysisFn
    resume_path: str = ""
    artifact: RasterArtifact | None = None
    image_path: str = ""
    record: DocumentRecord | None = None
    analysis_text: str = ""


class PipelineStep(ABC):
    status: ClassVar[str] = ""

    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError

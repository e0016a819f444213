from collections.abc import Callable, Sequence

from resumind.analysis.client_base import AnalysisFn
from resumind.analysis.prompt_loader import PromptBuilder
from resumind.config.settings import Settings
from resumind.ingestion.exceptions import FileTooLargeError, IngestionError, NotAuthenticatedError
from resumind.ingestion.models import Document, DocumentRecord, SubmissionMetadata
from resumind.ingestion.pipeline import PipelineContext, PipelineStep
from resumind.ingestion.steps import (
    AnalyzeStep,
    PersistResultStep,
    PersistSkeletonStep,
    RasterizeStep,
    UploadOriginalStep,
    UploadRasterStep,
)
from resumind.logging.logger import Log
from resumind.raster.factory import RasterEngineFactory
from resumind.raster.models import RasterConfig
from resumind.raster.rasterizer import PageRasterizer
from resumind.storage.base import BaseBlobStore, BaseRecordStore

StatusCallback = Callable[[str], None]

COMPLETE_STATUS = "Analysis complete"


def _ignore_status(_status: str) -> None:
    return None


class IngestionPipeline:
    """Runs the ingestion steps strictly in order for one submission.

    Pipeline: upload original -> rasterize -> upload thumbnail -> persist
    skeleton record -> analyze -> persist feedback. Every failure is terminal;
    nothing is retried and nothing already stored is rolled back.
    """

    def __init__(
        self,
        steps: Sequence[PipelineStep],
        *,
        is_authenticated: Callable[[], bool],
        max_upload_size_bytes: int,
    ) -> None:
        self._steps = list(steps)
        self._is_authenticated = is_authenticated
        self._max_upload_size_bytes = max_upload_size_bytes

    async def ingest(
        self,
        document: Document,
        metadata: SubmissionMetadata,
        analysis_fn: AnalysisFn,
        on_status: StatusCallback | None = None,
    ) -> DocumentRecord:
        """Ingest ``document`` and return its completed record.

        Each stage transition is reported through ``on_status``.

        Raises:
            IngestionError: the terminal failure, after its status was reported.
        """
        report = on_status or _ignore_status
        Log.info(f"Ingesting '{document.name}' for {metadata.job_title!r}")
        context = PipelineContext(document=document, metadata=metadata, analysis_fn=analysis_fn)
        try:
            self._check_preconditions(document)
            for step in self._steps:
                report(step.status)
                context = await step.run(context)
        except IngestionError as exc:
            Log.error(f"Ingestion of '{document.name}' failed: {exc.reason}")
            report(exc.status)
            raise

        if context.record is None:
            raise ValueError("Pipeline finished without producing a record")
        report(COMPLETE_STATUS)
        Log.info(f"Ingestion of '{document.name}' complete: record {context.record.id}")
        return context.record

    def _check_preconditions(self, document: Document) -> None:
        if not self._is_authenticated():
            raise NotAuthenticatedError()
        if document.size > self._max_upload_size_bytes:
            limit_mb = self._max_upload_size_bytes / (1024 * 1024)
            raise FileTooLargeError(
                f"{FileTooLargeError.default_reason} (max {limit_mb:g}MB)"
            )


def build_pipeline(
    settings: Settings,
    *,
    blob_store: BaseBlobStore,
    record_store: BaseRecordStore,
    is_authenticated: Callable[[], bool],
    rasterizer: PageRasterizer | None = None,
    prompt_builder: PromptBuilder | None = None,
) -> IngestionPipeline:
    """Build an IngestionPipeline with all steps wired from settings."""
    if rasterizer is None:
        rasterizer = PageRasterizer(
            loader=RasterEngineFactory.create_loader(settings),
            config=RasterConfig.from_settings(settings),
        )
    prompt_builder = prompt_builder or PromptBuilder()
    prefix = settings.record_key_prefix
    steps: list[PipelineStep] = [
        UploadOriginalStep(blob_store),
        RasterizeStep(rasterizer),
        UploadRasterStep(blob_store),
        PersistSkeletonStep(record_store, key_prefix=prefix),
        AnalyzeStep(prompt_builder),
        PersistResultStep(record_store, key_prefix=prefix),
    ]
    return IngestionPipeline(
        steps,
        is_authenticated=is_authenticated,
        max_upload_size_bytes=settings.max_upload_size_bytes,
    )

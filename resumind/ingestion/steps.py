import uuid

from resumind.analysis.exceptions import FeedbackValidationError
from resumind.analysis.prompt_loader import PromptBuilder
from resumind.analysis.response_parser import extract_message_content, parse_feedback
from resumind.ingestion.exceptions import (
    AnalysisFailedError,
    PersistFailedError,
    ResultParseFailedError,
    ThumbnailFailedError,
    ThumbnailUploadFailedError,
    UploadFailedError,
)
from resumind.ingestion.models import DocumentRecord
from resumind.ingestion.pipeline import PipelineContext, PipelineStep
from resumind.ingestion.record_codec import DEFAULT_KEY_PREFIX, encode_record, record_key
from resumind.logging.logger import Log
from resumind.raster.rasterizer import PageRasterizer
from resumind.storage.base import BaseBlobStore, BaseRecordStore
from resumind.storage.exceptions import StoreError


def _require_record(context: PipelineContext) -> DocumentRecord:
    if context.record is None:
        raise ValueError("PipelineContext.record must be set before this step")
    return context.record


class UploadOriginalStep(PipelineStep):
    status = "Uploading the PDF..."

    def __init__(self, blob_store: BaseBlobStore) -> None:
        self._blob_store = blob_store

    async def run(self, context: PipelineContext) -> PipelineContext:
        try:
            path = await self._blob_store.put(context.document.data, context.document.name)
        except StoreError as exc:
            raise UploadFailedError() from exc
        if not path:
            raise UploadFailedError()
        context.resume_path = path
        Log.info(f"Uploaded '{context.document.name}' ({context.document.size} bytes) to {path}")
        return context


class RasterizeStep(PipelineStep):
    status = "Creating thumbnail..."

    def __init__(self, rasterizer: PageRasterizer) -> None:
        self._rasterizer = rasterizer

    async def run(self, context: PipelineContext) -> PipelineContext:
        result = await self._rasterizer.rasterize(context.document)
        if result.artifact is None:
            # The original upload is not rolled back; CleanupCoordinator owns deletion.
            Log.warning(f"Original blob {context.resume_path} left without a thumbnail")
            raise ThumbnailFailedError(result.reason or None)
        context.artifact = result.artifact
        return context


class UploadRasterStep(PipelineStep):
    status = "Uploading thumbnail..."

    def __init__(self, blob_store: BaseBlobStore) -> None:
        self._blob_store = blob_store

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.artifact is None:
            raise ValueError("PipelineContext.artifact must be set before thumbnail upload")
        try:
            path = await self._blob_store.put(context.artifact.data, context.artifact.name)
        except StoreError as exc:
            raise ThumbnailUploadFailedError() from exc
        if not path:
            raise ThumbnailUploadFailedError()
        context.image_path = path
        Log.info(f"Uploaded thumbnail '{context.artifact.name}' to {path}")
        return context


class PersistSkeletonStep(PipelineStep):
    status = "Preparing data..."

    def __init__(self, record_store: BaseRecordStore, key_prefix: str = DEFAULT_KEY_PREFIX) -> None:
        self._record_store = record_store
        self._key_prefix = key_prefix

    async def run(self, context: PipelineContext) -> PipelineContext:
        record = DocumentRecord(
            id=str(uuid.uuid4()),
            resume_path=context.resume_path,
            image_path=context.image_path,
            company_name=context.metadata.company_name,
            job_title=context.metadata.job_title,
            job_description=context.metadata.job_description,
        )
        key = record_key(record.id, self._key_prefix)
        try:
            await self._record_store.set(key, encode_record(record))
        except StoreError as exc:
            raise PersistFailedError() from exc
        context.record = record
        Log.info(f"Persisted record {key}")
        return context


class AnalyzeStep(PipelineStep):
    status = "Analyzing..."

    def __init__(self, prompt_builder: PromptBuilder) -> None:
        self._prompt_builder = prompt_builder

    async def run(self, context: PipelineContext) -> PipelineContext:
        record = _require_record(context)
        prompt = self._prompt_builder.build(
            company_name=record.company_name,
            job_title=record.job_title,
            job_description=record.job_description,
        )
        Log.debug(f"Analysis prompt:\n{prompt}")

        try:
            response = await context.analysis_fn(record.resume_path, prompt)
        except Exception as exc:
            Log.error(f"Analysis call failed for record {record.id}: {exc}")
            raise AnalysisFailedError() from exc
        Log.debug(f"Analysis raw response:\n{response}")

        text = extract_message_content(response)
        if text is None:
            raise AnalysisFailedError()
        context.analysis_text = text
        return context


class PersistResultStep(PipelineStep):
    status = "Saving feedback..."

    def __init__(self, record_store: BaseRecordStore, key_prefix: str = DEFAULT_KEY_PREFIX) -> None:
        self._record_store = record_store
        self._key_prefix = key_prefix

    async def run(self, context: PipelineContext) -> PipelineContext:
        record = _require_record(context)
        try:
            feedback = parse_feedback(context.analysis_text)
        except FeedbackValidationError as exc:
            Log.error(f"Unusable feedback for record {record.id}: {exc}")
            raise ResultParseFailedError() from exc

        updated = record.with_feedback(feedback)
        key = record_key(updated.id, self._key_prefix)
        try:
            await self._record_store.set(key, encode_record(updated))
        except StoreError as exc:
            raise PersistFailedError() from exc
        context.record = updated
        Log.info(f"Merged feedback into record {key} (overall score {feedback.overall_score})")
        return context

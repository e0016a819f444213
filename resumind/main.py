import asyncio
import sys
from collections.abc import Callable, Generator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import typer

from resumind.analysis.client_base import BaseAnalysisClient
from resumind.analysis.factory import AnalysisClientFactory
from resumind.cleanup.coordinator import CleanupCoordinator
from resumind.config.settings import Settings
from resumind.ingestion.catalog import ResumeCatalog
from resumind.ingestion.exceptions import IngestionError, MalformedRecordError
from resumind.ingestion.models import Document, SubmissionMetadata
from resumind.ingestion.processor import IngestionPipeline, build_pipeline
from resumind.logging.logger import Log
from resumind.storage.connection import close_pool, ensure_schema, init_pool
from resumind.storage.factory import BlobStoreFactory, RecordStoreFactory

app = typer.Typer(help="Resumind: résumé intake, feedback and cleanup")


@dataclass
class Services:
    pipeline: IngestionPipeline
    cleanup: CleanupCoordinator
    catalog: ResumeCatalog
    analysis_client: BaseAnalysisClient


def build_services(
    settings: Settings,
    is_authenticated: Callable[[], bool] = lambda: True,
) -> Services:
    """Wire stores, pipeline, catalog and cleanup from settings.

    The CLI runs as a trusted local operator, hence the default
    ``is_authenticated``; embedding applications pass their own signal.
    """
    blob_store = BlobStoreFactory.create(settings)
    record_store = RecordStoreFactory.create(settings)
    prefix = settings.record_key_prefix
    return Services(
        pipeline=build_pipeline(
            settings,
            blob_store=blob_store,
            record_store=record_store,
            is_authenticated=is_authenticated,
        ),
        cleanup=CleanupCoordinator(blob_store, record_store, key_prefix=prefix),
        catalog=ResumeCatalog(record_store, blob_store, key_prefix=prefix),
        analysis_client=AnalysisClientFactory.create(settings, blob_store),
    )


@contextmanager
def _services() -> Generator[Services, None, None]:
    """Load settings, open the database when it backs the record store, build services."""
    settings = Settings()
    Log.configure(settings.log_level, stream=sys.stderr)
    uses_db = settings.record_store.lower() == "postgres"
    if uses_db:
        init_pool(settings)
        ensure_schema()
    try:
        yield build_services(settings)
    finally:
        if uses_db:
            close_pool()


@app.command()
def ingest(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Résumé PDF"),
    company: str = typer.Option("", "--company", help="Company name"),
    title: str = typer.Option("", "--title", help="Job title"),
    description: str = typer.Option("", "--description", help="Job description"),
) -> None:
    """Upload a résumé, create its thumbnail and store AI feedback."""
    with _services() as services:
        metadata = SubmissionMetadata(
            company_name=company, job_title=title, job_description=description
        )
        try:
            record = asyncio.run(
                services.pipeline.ingest(
                    Document.from_path(path),
                    metadata,
                    services.analysis_client.analyze,
                    on_status=typer.echo,
                )
            )
        except IngestionError:
            raise typer.Exit(code=1) from None
    typer.echo(record.id)


@app.command("list")
def list_resumes() -> None:
    """List stored résumés with their overall score."""
    with _services() as services:
        records = asyncio.run(services.catalog.list_resumes())
    for record in records:
        score = record.feedback.overall_score if record.feedback is not None else "-"
        typer.echo(f"{record.id}\t{record.company_name}\t{record.job_title}\t{score}")


@app.command()
def delete(record_id: str = typer.Argument(..., help="Record identifier")) -> None:
    """Delete a résumé's files and record."""
    with _services() as services:
        try:
            record = asyncio.run(services.catalog.get(record_id))
        except MalformedRecordError as exc:
            typer.echo(
                f"Resume {record_id} is unreadable ({exc}); removing its record only", err=True
            )
            report = asyncio.run(services.cleanup.delete_unreadable(record_id))
        else:
            if record is None:
                typer.echo(f"Resume {record_id} not found", err=True)
                raise typer.Exit(code=1)
            report = asyncio.run(services.cleanup.delete(record))
    for result in report.steps:
        suffix = f": {result.reason}" if result.reason else ""
        typer.echo(f"{result.step}\t{result.outcome.value}{suffix}")
    if not report.record_deleted:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()

from resumind.analysis.client_base import BaseAnalysisClient
from resumind.analysis.example_client_adapter import ExampleAnalysisClient
from resumind.analysis.openai_client_adapter import OpenAIAnalysisClient
from resumind.config.settings import Settings
from resumind.storage.base import BaseBlobStore


class AnalysisClientFactory:
    """Creates the configured analysis client."""

    PROVIDERS = ("example", "openai")

    @classmethod
    def create(cls, settings: Settings, blob_store: BaseBlobStore) -> BaseAnalysisClient:
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return ExampleAnalysisClient()
        if provider == "openai":
            return OpenAIAnalysisClient(
                blob_store=blob_store,
                api_key=settings.analysis_openai_api_key,
                model=settings.analysis_openai_model_name,
                timeout_seconds=settings.analysis_openai_timeout_seconds,
                base_url=settings.analysis_openai_base_url,
            )
        raise ValueError(
            f"Unknown analysis provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

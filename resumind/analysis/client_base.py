from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

AnalysisResponse = dict[str, Any]
AnalysisFn = Callable[[str, str], Awaitable[AnalysisResponse | None]]


class BaseAnalysisClient(ABC):
    """Contract for provider-specific résumé analysis clients."""

    @abstractmethod
    async def analyze(self, document_path: str, prompt: str) -> AnalysisResponse | None:
        """Analyze the stored document at ``document_path`` following ``prompt``.

        Returns:
            ``{"message": {"content": str | [{"text": str}, ...]}}``, or None
            when the provider produced nothing.

        Raises:
            AnalysisError: on provider failure.
        """

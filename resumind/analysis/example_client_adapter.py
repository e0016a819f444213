"""Example analysis client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseAnalysisClient and register the provider in AnalysisClientFactory.
"""

import json
from typing import ClassVar

from resumind.analysis.client_base import AnalysisResponse, BaseAnalysisClient


class ExampleAnalysisClient(BaseAnalysisClient):
    """Example adapter that returns a fixed valid feedback JSON.

    No network calls. Useful for local development and tests. The content is
    returned in the list-of-parts shape some providers use.
    """

    DEFAULT_FEEDBACK: ClassVar[dict[str, object]] = {
        "overallScore": 72,
        "ATS": {
            "score": 80,
            "tips": [{"type": "good", "tip": "Standard section headings"}],
        },
        "toneAndStyle": {
            "score": 70,
            "tips": [
                {
                    "type": "improve",
                    "tip": "Use stronger action verbs",
                    "explanation": "Start bullet points with verbs such as 'led' or 'built'.",
                }
            ],
        },
        "content": {"score": 68, "tips": []},
        "structure": {"score": 75, "tips": []},
        "skills": {"score": 66, "tips": []},
    }

    async def analyze(self, document_path: str, prompt: str) -> AnalysisResponse | None:
        _ = document_path, prompt
        return {"message": {"content": [{"text": json.dumps(self.DEFAULT_FEEDBACK)}]}}

import base64
from pathlib import PurePosixPath

import httpx
import openai

from resumind.analysis.client_base import AnalysisResponse, BaseAnalysisClient
from resumind.analysis.exceptions import AnalysisNetworkError
from resumind.storage.base import BaseBlobStore


class OpenAIAnalysisClient(BaseAnalysisClient):
    """Analysis client built on the OpenAI-compatible chat API.

    The stored PDF is read back from the blob store and attached to the
    request as a base64 file part next to the prompt.
    """

    def __init__(
        self,
        *,
        blob_store: BaseBlobStore,
        api_key: str,
        model: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._blob_store = blob_store
        self._model = model
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    async def analyze(self, document_path: str, prompt: str) -> AnalysisResponse | None:
        pdf_bytes = await self._blob_store.get(document_path)
        encoded = base64.b64encode(pdf_bytes).decode("ascii")
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "file",
                                "file": {
                                    "filename": PurePosixPath(document_path).name,
                                    "file_data": f"data:application/pdf;base64,{encoded}",
                                },
                            },
                            {"type": "text", "text": prompt},
                        ],
                    }
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AnalysisNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise AnalysisNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            return None
        content = response.choices[0].message.content
        if content is None:
            return None
        return {"message": {"content": content}}

from pathlib import Path

from resumind.analysis.exceptions import AnalysisError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the feedback prompt template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled feedback_prompt.txt.

    Returns:
        The raw template string with placeholders.

    Raises:
        AnalysisError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "feedback_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise AnalysisError(f"Failed to load prompt template: {exc}") from exc


def load_response_format(path: Path | None = None) -> str:
    """Load the feedback response format description from a file.

    Raises:
        AnalysisError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "feedback_format.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise AnalysisError(f"Failed to load response format: {exc}") from exc


class PromptBuilder:
    """Fills the feedback prompt template with the submission's job metadata."""

    def __init__(
        self,
        template_path: Path | None = None,
        response_format_path: Path | None = None,
    ) -> None:
        self._template = load_prompt_template(template_path)
        self._response_format = load_response_format(response_format_path)

    def build(self, *, company_name: str, job_title: str, job_description: str) -> str:
        return self._template.format(
            company_name=company_name,
            job_title=job_title,
            job_description=job_description,
            response_format=self._response_format,
        )

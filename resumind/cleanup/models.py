from dataclasses import dataclass, field
from enum import Enum


class StepOutcome(str, Enum):
    SUCCEEDED = "succeeded"
    NOT_FOUND_OK = "not_found_ok"
    FAILED = "failed"


@dataclass(frozen=True)
class CleanupStepResult:
    step: str
    outcome: StepOutcome
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is not StepOutcome.FAILED


@dataclass
class CleanupReport:
    """Per-step outcome of deleting one record and its blobs."""

    record_id: str
    steps: list[CleanupStepResult] = field(default_factory=list)

    def outcome_of(self, step: str) -> StepOutcome | None:
        for result in self.steps:
            if result.step == step:
                return result.outcome
        return None

    @property
    def record_deleted(self) -> bool:
        """True when the record is gone, the minimum for dropping it from a list."""
        return self.outcome_of("record") in (StepOutcome.SUCCEEDED, StepOutcome.NOT_FOUND_OK)

    @property
    def succeeded(self) -> bool:
        return all(result.ok for result in self.steps)

    @property
    def failures(self) -> list[CleanupStepResult]:
        return [result for result in self.steps if not result.ok]

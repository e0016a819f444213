from dataclasses import dataclass, field

TIP_TYPES = frozenset({"good", "improve"})

# Serialized key -> Feedback attribute.
SECTION_KEYS: dict[str, str] = {
    "ATS": "ats",
    "toneAndStyle": "tone_and_style",
    "content": "content",
    "structure": "structure",
    "skills": "skills",
}


@dataclass(frozen=True)
class Tip:
    """A single piece of advice, either praise or an improvement."""

    type: str
    tip: str
    explanation: str = ""

    def to_dict(self) -> dict[str, str]:
        data = {"type": self.type, "tip": self.tip}
        if self.explanation:
            data["explanation"] = self.explanation
        return data


@dataclass(frozen=True)
class FeedbackSection:
    score: float
    tips: list[Tip] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {"score": self.score, "tips": [tip.to_dict() for tip in self.tips]}


@dataclass(frozen=True)
class Feedback:
    """Structured résumé feedback returned by the analysis step."""

    overall_score: float
    ats: FeedbackSection
    tone_and_style: FeedbackSection
    content: FeedbackSection
    structure: FeedbackSection
    skills: FeedbackSection

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"overallScore": self.overall_score}
        for key, attr in SECTION_KEYS.items():
            section: FeedbackSection = getattr(self, attr)
            data[key] = section.to_dict()
        return data

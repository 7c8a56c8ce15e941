"""Classifier output: outcome category plus extracted key points and recommendation."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    """Whether an analysis favors contesting the fine.

    Wire values are the ones the mobile client stores and the LLM prompt asks for.
    """
    FAVORABLE = "correct"
    PARTIAL = "partially"
    UNFAVORABLE = "incorrect"

    @classmethod
    def parse(cls, value: str | None) -> "Category | None":
        """Map a wire value or a member name (any case) to a Category."""
        if not value:
            return None
        key = value.strip().lower()
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        return None


class SentimentScore(BaseModel):
    """Accumulated weighted sentence scores from the sentiment pass."""
    positive: float = 0.0
    negative: float = 0.0

    @property
    def diff(self) -> float:
        return self.positive - self.negative

    def category(self, strong: float = 3.0, moderate: float = 1.5) -> Category:
        diff = self.diff
        if diff > strong or diff > moderate:
            return Category.FAVORABLE
        if diff < -strong or diff < -moderate:
            return Category.UNFAVORABLE
        return Category.PARTIAL


class Verdict(BaseModel):
    """Structured, immutable result of classifying one analysis document.

    `strategy` names the classifier pass that produced `category`
    (or "payload" when a stated result was used because there was no text
    to classify).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    category: Category = Category.PARTIAL
    key_points: list[str] = Field(default=[], alias="keyPoints")
    recommendation: str = ""
    strategy: str = "empty"

"""Fine report input and the parsed LLM analysis of it."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from models.schemas.verdict import Category


class FineReport(BaseModel):
    """Details of a traffic fine as entered or scanned by the recipient."""
    model_config = ConfigDict(populate_by_name=True)

    report_number: str = Field(..., alias="reportNumber", max_length=64)
    date: str = ""
    location: str = ""
    violation: str = ""
    amount: str = ""
    due_date: str = Field(default="", alias="dueDate")
    officer_name: str = Field(default="", alias="officerName")
    badge_number: str = Field(default="", alias="badgeNumber")
    description: str = Field(default="", max_length=5000)


class FineAnalysis(BaseModel):
    """Sections of an LLM analysis response.

    `result` is only set when the response states it explicitly.
    """
    model_config = ConfigDict(populate_by_name=True)

    summary: str = ""
    key_points: list[str] = Field(default=[], alias="keyPoints")
    recommendation: str = ""
    result: Category | None = None


class CancellationRequest(BaseModel):
    """Generated cancellation letter or list of contest arguments."""
    content: str
    type: Literal["full_letter", "bullet_points"] = "full_letter"

from pydantic import BaseModel, ConfigDict, Field

from config import settings
from models.schemas.fine_report import FineReport


class ClassifyRequest(BaseModel):
    text: str = Field(..., max_length=settings.max_text_length, description="Free-text analysis to classify")
    locale: str = Field("en", max_length=10, description="'en' or 'he'")


class AnalyzeRequest(BaseModel):
    report: FineReport
    locale: str = Field("en", max_length=10)


class CancellationBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    report: FineReport
    additional_info: str = Field("", alias="additionalInfo", max_length=5000)
    full_auto: bool = Field(True, alias="fullAuto")
    locale: str = Field("en", max_length=10)

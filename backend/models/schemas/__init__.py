"""Pydantic contracts shared by the classifier, the analyzer and the API."""

from models.schemas.fine_report import CancellationRequest, FineAnalysis, FineReport
from models.schemas.verdict import Category, SentimentScore, Verdict

__all__ = [
    "CancellationRequest",
    "Category",
    "FineAnalysis",
    "FineReport",
    "SentimentScore",
    "Verdict",
]

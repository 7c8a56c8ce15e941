from pydantic import BaseModel

from models.schemas.fine_report import FineAnalysis
from models.schemas.verdict import Verdict


class AnalysisResponse(BaseModel):
    analysis: FineAnalysis = FineAnalysis()
    verdict: Verdict = Verdict()
    degraded: bool = False

from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings
from models.requests import AnalyzeRequest, CancellationBody, ClassifyRequest
from models.responses import AnalysisResponse
from models.schemas.fine_report import CancellationRequest
from models.schemas.verdict import Verdict
from services import fine_analyzer, result_classifier

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "gemini_configured": bool(settings.gemini_api_key),
    }


@router.post("/classify", response_model=Verdict)
@limiter.limit("60/minute")
async def classify(request: Request, body: ClassifyRequest):
    return result_classifier.classify(body.text, body.locale)


@router.post("/analyze", response_model=AnalysisResponse)
@limiter.limit("10/minute")
async def analyze(request: Request, body: AnalyzeRequest):
    return await fine_analyzer.analyze_fine(body.report, body.locale)


@router.post("/cancellation", response_model=CancellationRequest)
@limiter.limit("10/minute")
async def cancellation(request: Request, body: CancellationBody):
    try:
        return await fine_analyzer.request_cancellation(
            body.report,
            additional_info=body.additional_info,
            full_auto=body.full_auto,
            locale=body.locale,
        )
    except fine_analyzer.AnalysisUnavailableError:
        raise HTTPException(
            status_code=503,
            detail="Cancellation request could not be generated, try again later",
        )

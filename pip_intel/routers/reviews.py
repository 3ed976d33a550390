from functools import lru_cache

from fastapi import APIRouter, Depends

from pip_intel.core.config import settings
from pip_intel.models.review import ReviewAnalysis
from pip_intel.schemas.review import ReviewAnalysisRequest
from pip_intel.services.ai_review_service import analyze_review
from pip_intel.services.lexicon import resolve_lexicons
from pip_intel.services.review_analyzer import ReviewAnalyzer

router = APIRouter(prefix="/reviews")


@lru_cache()
def get_review_analyzer() -> ReviewAnalyzer:
    lexicons = resolve_lexicons(settings.lexicon_dir)
    return ReviewAnalyzer(lexicons["performance"], lexicons["potential"])


@router.post("/analyze", response_model=ReviewAnalysis)
async def analyze(
    request: ReviewAnalysisRequest,
    analyzer: ReviewAnalyzer = Depends(get_review_analyzer),
):
    """
    Suggest a 9-box placement and draft a development plan from review text.
    With `use_ai` the external model is tried first; the keyword analysis
    answers whenever it is unavailable.
    """
    return await analyze_review(request.review_text, use_ai=request.use_ai, analyzer=analyzer)

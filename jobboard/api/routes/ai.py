"""CV analysis endpoint."""

from fastapi import APIRouter, Depends, Request

from jobboard.api.deps import get_analyzer
from jobboard.api.limiter import limiter
from jobboard.api.schemas import AnalyzeCvRequest, AnalyzeCvResponse
from jobboard.config import settings
from jobboard.services.cv_analysis import CvAnalyzer

router = APIRouter()


@router.post("/analyze-cv", response_model=AnalyzeCvResponse, response_model_exclude_none=True)
@limiter.limit(settings.rate_limit_analyze)
def analyze_cv(request: Request, data: AnalyzeCvRequest, analyzer: CvAnalyzer = Depends(get_analyzer)):
    """
    Score an uploaded CV against a job or internship.

    The CV must already be uploaded through ``/s3/pre-signed-url``. When the
    scoring model is unavailable a fixed fallback analysis is returned.
    """
    return analyzer.analyze(data.cvS3Key, job_id=data.jobId, internship_id=data.internshipId)

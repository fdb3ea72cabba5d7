"""
Feedback Routes - Reviewer feedback collection and summaries.
"""
from fastapi import APIRouter, HTTPException, Query
import structlog

from asset_factory.config.defaults import FEEDBACK_SUMMARY_DAYS, RATING_SCALE
from asset_factory.models import FeedbackEntry, FeedbackSummary, SubmitFeedbackRequest
from asset_factory.services.feedback_system import feedback_system

logger = structlog.get_logger()

router = APIRouter(prefix="/feedback", tags=["Feedback"])


@router.post("/submit", response_model=FeedbackEntry)
async def submit_feedback(request: SubmitFeedbackRequest):
    """
    Record a review of a generated asset.

    The timestamp is set by the server. Reviewer defaults to "Anonymous".
    """
    entry = FeedbackEntry(
        asset_id=request.asset_id,
        reviewer=request.reviewer or "Anonymous",
        overall_rating=request.rating,
        issues=request.issues,
        outcome=request.outcome,
        notes=request.notes
    )
    try:
        feedback_system.submit(entry)
    except Exception as e:
        logger.error("feedback_submit_failed", asset_id=request.asset_id, error=str(e))
        raise HTTPException(
            status_code=500,
            detail=f"Feedback submission failed: {str(e)}"
        )
    return entry


@router.get("/summary", response_model=FeedbackSummary)
async def get_summary(days: int = Query(FEEDBACK_SUMMARY_DAYS, gt=0)):
    """Summarize feedback submitted in the last ``days`` days."""
    return feedback_system.get_summary(days=days)


@router.get("/rating-scale")
async def get_rating_scale():
    """Rating bounds and labels shown to reviewers."""
    return {
        "min": RATING_SCALE["min"],
        "max": RATING_SCALE["max"],
        "labels": {str(k): v for k, v in RATING_SCALE["labels"].items()}
    }

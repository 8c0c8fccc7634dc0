"""
app/api/routers/summoner.py

Summoner lookup and stored insight endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.acquisition.errors import TotalFailure
from app.schemas.summoner import (
    InsightResponse,
    ProfileInsightListResponse,
    SummonerLookupRequest,
    SummonerProfileResponse,
    SummonerTotalFailureResponse,
)
from app.services.summoner_service import SummonerLookupService, get_summoner_lookup_service
from db.session import get_db

router = APIRouter(prefix="/api/summoner", tags=["summoner"])


@router.post(
    "",
    response_model=SummonerProfileResponse,
    response_model_exclude_none=True,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": SummonerTotalFailureResponse}},
)
def lookup_summoner(
    payload: SummonerLookupRequest,
    background_tasks: BackgroundTasks,
    lookup_service: SummonerLookupService = Depends(get_summoner_lookup_service),
) -> SummonerProfileResponse | JSONResponse:
    """
    Fetch a player's profile through the source failover chain.
    """

    try:
        identity = payload.to_identity()
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    try:
        outcome = lookup_service.lookup(identity)
    except TotalFailure as failure:
        background_tasks.add_task(lookup_service.persist_total_failure, failure)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=failure.to_envelope(),
            background=background_tasks,
        )

    background_tasks.add_task(lookup_service.persist_outcome, outcome)
    return SummonerProfileResponse.model_validate(outcome.profile.to_dict())


@router.get("/{profile_id}/insights", response_model=ProfileInsightListResponse)
def get_profile_insights(
    profile_id: str,
    db: Session = Depends(get_db),
    lookup_service: SummonerLookupService = Depends(get_summoner_lookup_service),
) -> ProfileInsightListResponse:
    """
    Stored insights for a previously looked-up profile, most urgent first.
    """

    insights = lookup_service.get_insights(db=db, profile_id=profile_id)
    if insights is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Profile '{profile_id}' not found.",
        )

    return ProfileInsightListResponse(
        profile_id=profile_id,
        insights=[
            InsightResponse(
                type=row.insight_type,
                title=row.title,
                description=row.description,
                priority=row.priority,
            )
            for row in insights
        ],
    )

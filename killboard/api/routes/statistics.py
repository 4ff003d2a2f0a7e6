"""
Statistic endpoints.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from killboard.api.dependencies import get_statistic_repository
from killboard.api.validation import StatisticPayload
from killboard.domain.models import Statistic
from killboard.repositories.statistics import StatisticRepository

router = APIRouter(prefix="/statistics", tags=["statistics"])

DATE_ORDER_MESSAGE = "End date must be more recent than start date"


def utc_today() -> date:
    """Current calendar date in UTC; an open-ended range runs up to it."""
    return datetime.now(timezone.utc).date()


@router.get("", response_model=List[Statistic])
async def list_statistics(repo: StatisticRepository = Depends(get_statistic_repository)):
    return await repo.list_all()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_statistic(
    payload: StatisticPayload,
    repo: StatisticRepository = Depends(get_statistic_repository),
):
    stat_id = await repo.create(payload.user_id, payload.kills, payload.date)
    return {"message": "Statistic created", "id": stat_id}


@router.get("/paginate", response_model=List[Statistic])
async def paginate_statistics(
    limit: int = Query(..., ge=0),
    offset: int = Query(0, ge=0),
    repo: StatisticRepository = Depends(get_statistic_repository),
):
    return await repo.paginate(limit, offset)


@router.get("/search", response_model=List[Statistic])
async def search_statistics_by_range(
    start_date: date = Query(...),
    end_date: Optional[date] = Query(None),
    repo: StatisticRepository = Depends(get_statistic_repository),
):
    end = end_date or utc_today()
    if start_date > end:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DATE_ORDER_MESSAGE)
    return await repo.search_by_date_range(start_date, end)


@router.get("/searchByDate", response_model=List[Statistic])
async def search_statistics_by_date(
    day: date = Query(..., alias="date"),
    repo: StatisticRepository = Depends(get_statistic_repository),
):
    return await repo.search_by_date(day)


@router.put("/{stat_id}")
async def replace_statistic(
    stat_id: int,
    payload: StatisticPayload,
    repo: StatisticRepository = Depends(get_statistic_repository),
):
    updated = await repo.replace(stat_id, payload.user_id, payload.kills, payload.date)
    return {"message": "Statistic updated", "affected_rows": updated}


@router.delete("/{stat_id}")
async def delete_statistic(
    stat_id: int, repo: StatisticRepository = Depends(get_statistic_repository)
):
    deleted = await repo.remove(stat_id)
    return {"message": "Statistic deleted", "affected_rows": deleted}

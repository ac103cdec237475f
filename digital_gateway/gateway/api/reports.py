"""Report history API endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from gateway.db.database import Database
from gateway.deps import get_database

router = APIRouter(prefix="/api", tags=["reports"])


class ReportListItem(BaseModel):
    id: str
    content_name: str
    score: float
    status: str
    source: str | None = None
    created_at: str = ""


class ReportListResponse(BaseModel):
    items: list[ReportListItem]
    total: int


class ReportDetailResponse(ReportListItem):
    source_url: str | None = None
    model: str | None = None
    details: dict[str, Any]


@router.get("/reports", response_model=ReportListResponse)
async def list_reports(
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    db: Database = Depends(get_database),
) -> ReportListResponse:
    """List stored report snapshots, newest first."""
    records, total = await db.list_reports(limit, offset)
    items = [
        ReportListItem(
            id=r.id,
            content_name=r.content_name,
            score=r.score,
            status=r.status,
            source=r.source,
            created_at=r.created_at,
        )
        for r in records
    ]
    return ReportListResponse(items=items, total=total)


@router.get("/reports/{report_id}", response_model=ReportDetailResponse)
async def get_report(
    report_id: str,
    db: Database = Depends(get_database),
) -> ReportDetailResponse:
    record = await db.get_report(report_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Report not found")

    return ReportDetailResponse(
        id=record.id,
        content_name=record.content_name,
        score=record.score,
        status=record.status,
        source=record.source,
        created_at=record.created_at,
        source_url=record.source_url,
        model=record.model,
        details=record.details,
    )


@router.delete("/reports/{report_id}")
async def delete_report(
    report_id: str,
    db: Database = Depends(get_database),
) -> dict:
    """Delete a stored report snapshot."""
    if not await db.delete_report(report_id):
        raise HTTPException(status_code=404, detail="Report not found")
    return {"deleted": True}

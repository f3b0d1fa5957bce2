"""
Finder-facing tag endpoints.

GET  /tags/{loqatr_id}        — what a finder sees after scanning
POST /tags/{loqatr_id}/scans  — log a physical scan, returns the scan id
                                the reveal function later anchors on
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status

from dependencies import get_tag_service
from schemas.dto.requests.scan import RecordScanRequest
from schemas.dto.responses.tag import FinderViewResponse, RecordScanResponse
from services.tag_service import TagService

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("/{loqatr_id}", response_model=FinderViewResponse)
async def get_tag(
    loqatr_id: str,
    service: TagService = Depends(get_tag_service),
) -> FinderViewResponse:
    return await service.get_finder_view(loqatr_id)


@router.post(
    "/{loqatr_id}/scans",
    response_model=RecordScanResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_scan(
    loqatr_id: str,
    body: Optional[RecordScanRequest] = None,
    service: TagService = Depends(get_tag_service),
) -> RecordScanResponse:
    return await service.record_scan(loqatr_id, body or RecordScanRequest())

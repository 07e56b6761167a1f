# school_portal/routes/opportunities.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from school_portal.core.deps import get_opportunity_service
from school_portal.core.errors import NotFound
from school_portal.models.report import ReportRow
from school_portal.services.opportunity_service import OpportunityService

router = APIRouter(tags=["opportunities"])


@router.get("/opportunities", response_model=List[ReportRow])
async def last_opportunities(
    email: Optional[str] = Query(None, description="Email of the requesting school official"),
    service: OpportunityService = Depends(get_opportunity_service),
):
    if not email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email is required.")
    try:
        result = await service.report_for_email(email)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return result.rows

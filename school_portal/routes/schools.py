# school_portal/routes/schools.py
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from school_portal.core.deps import get_school_service
from school_portal.core.errors import NotFound
from school_portal.models.common import MessageOut
from school_portal.services.school_service import SchoolService

router = APIRouter(tags=["schools"])


class ValidateSchoolIn(BaseModel):
    schoolCode: Optional[str] = None


class ChangeSchoolKeyIn(BaseModel):
    email: Optional[str] = None
    newSchoolCode: Optional[str] = None


@router.post("/validate-school", response_model=MessageOut)
async def validate_school(payload: ValidateSchoolIn, service: SchoolService = Depends(get_school_service)):
    if not await service.school_exists(payload.schoolCode or ""):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="School code not found")
    return {"message": "School code is valid"}


@router.get("/students/{email}", response_model=List[Dict[str, Any]])
async def list_students(email: str, service: SchoolService = Depends(get_school_service)):
    try:
        return await service.list_students(email)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.post("/changeSchoolKey", response_model=MessageOut)
async def change_school_key(payload: ChangeSchoolKeyIn, service: SchoolService = Depends(get_school_service)):
    if not payload.newSchoolCode:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="School code not found.")
    if not payload.email:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    try:
        await service.reassign(payload.email, payload.newSchoolCode)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return {"message": "School key updated successfully."}

# school_portal/routes/profile.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from school_portal.core.deps import get_member_service
from school_portal.core.errors import NotFound
from school_portal.models.common import MessageOut
from school_portal.services.member_service import MemberService

router = APIRouter(tags=["profile"])


class UpdateProfileIn(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None


@router.get("/profile/{email}", response_model=Dict[str, Any])
async def get_profile(email: str, service: MemberService = Depends(get_member_service)):
    try:
        return await service.get_profile(email)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.post("/updateProfile", response_model=MessageOut)
async def update_profile(payload: UpdateProfileIn, service: MemberService = Depends(get_member_service)):
    if not payload.email:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    try:
        await service.update_profile(payload.email, payload.model_dump(exclude={"email"}, exclude_unset=True))
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return {"message": "Profile updated successfully"}

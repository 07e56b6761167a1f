# school_portal/routes/auth.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from school_portal.core.deps import get_auth_service, get_member_service
from school_portal.core.errors import InvalidCredentials, NotFound, ValidationError
from school_portal.models.common import MessageOut
from school_portal.services.auth_service import AuthService
from school_portal.services.member_service import MemberService

router = APIRouter(tags=["auth"])


# fields are optional so missing ones reach the service's own validation
class SignupIn(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    uid: Optional[str] = None
    schoolCode: Optional[str] = None


class LoginIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginOut(MessageOut):
    uid: str


@router.post("/signup", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
async def signup(payload: SignupIn, service: MemberService = Depends(get_member_service)):
    try:
        await service.signup(
            name=payload.name,
            email=payload.email,
            password=payload.password,
            uid=payload.uid,
            school_code=payload.schoolCode,
        )
    except (ValidationError, NotFound) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return {"message": "User created successfully"}


@router.post("/login", response_model=LoginOut)
async def login(payload: LoginIn, service: AuthService = Depends(get_auth_service)):
    try:
        uid = await service.login(payload.email, payload.password)
    except InvalidCredentials as e:
        # do not reveal whether the email exists
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return {"message": f"Login successful for user: {uid}", "uid": uid}

# school_portal/services/member_service.py
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from school_portal.core.config import settings
from school_portal.core.errors import NotFound, StoreError, ValidationError
from school_portal.core.security import hash_password
from school_portal.db.store import SCHOOL_OFFICIALS, DocumentStore, is_valid_id, school_ref
from school_portal.models.utils import public_member
from school_portal.services.user_locator import UserLocator

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "phone", "location")


def validate_signup(name: Optional[str], email: Optional[str], password: Optional[str], school_code: Optional[str]) -> None:
    if not name or not email or "@" not in email:
        raise ValidationError("Invalid name, email, or password.")
    if not is_valid_id(school_code):
        raise ValidationError("Invalid school code.")
    if not password or len(password) < settings.PASSWORD_MIN_LENGTH:
        raise ValidationError("Invalid name, email, or password.")


class MemberService:
    """Signup and profile reads/writes for school officials."""

    def __init__(self, store: DocumentStore, locator: UserLocator) -> None:
        self.store = store
        self.locator = locator

    async def signup(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        uid: Optional[str],
        school_code: Optional[str],
    ) -> str:
        """
        Register an official under an existing school.
        Returns the new document id. Input is validated before any store access.
        """
        validate_signup(name, email, password, school_code)

        school = school_ref(school_code)
        officials = school.sub(SCHOOL_OFFICIALS)
        try:
            if await self.store.get(school) is None:
                raise NotFound("School code not found.")
            if await self.store.where(officials, "email", "==", email):
                raise ValidationError("Email already registered for this school.")

            member = {
                "name": name,
                "email": email,
                "schoolCode": school_code,
                "uid": uid,
                "passwordHash": hash_password(password),
                "createdAt": datetime.now(),
            }
            ref = await self.store.add(officials, member)
        except (NotFound, ValidationError):
            raise
        except Exception as e:
            raise StoreError("signup failed") from e

        logger.info("official %s signed up under school %s", ref.id, school_code)
        return ref.id

    async def get_profile(self, email: str) -> Dict[str, Any]:
        located = await self.locator.locate(email)
        if located is None:
            raise NotFound("User not found.")
        profile = public_member(located.member.data)
        # the school the record lives under wins over the denormalized copy
        profile["schoolCode"] = located.school_code
        return profile

    async def update_profile(self, email: str, changes: Dict[str, Any]) -> None:
        """
        Write only the provided profile fields; other fields are left alone.
        An explicit None is written as-is, which clears the field.
        """
        located = await self.locator.locate(email)
        if located is None:
            raise NotFound("User not found.")

        update = {k: v for k, v in changes.items() if k in PROFILE_FIELDS}
        if not update:
            return
        try:
            await self.store.update(located.member.ref, update)
        except Exception as e:
            raise StoreError("profile update failed") from e

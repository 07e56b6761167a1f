# school_portal/services/school_service.py
import logging
from typing import Any, Dict, List

from school_portal.core.errors import NotFound, StoreError
from school_portal.db.store import SCHOOL_OFFICIALS, SCHOOLS, STUDENTS, DocumentStore, collection, is_valid_id, school_ref
from school_portal.models.utils import serialize_doc
from school_portal.services.user_locator import UserLocator

logger = logging.getLogger(__name__)


class SchoolService:
    """School code checks, student listing and moving officials between schools."""

    def __init__(self, store: DocumentStore, locator: UserLocator) -> None:
        self.store = store
        self.locator = locator

    async def school_exists(self, school_code: str) -> bool:
        if not is_valid_id(school_code):
            return False
        try:
            return await self.store.get(school_ref(school_code)) is not None
        except Exception as e:
            raise StoreError("school lookup failed") from e

    async def count_schools(self) -> int:
        return await self.store.count(collection(SCHOOLS))

    async def list_students(self, email: str) -> List[Dict[str, Any]]:
        located = await self.locator.locate(email)
        if located is None:
            raise NotFound("School not found for the user.")

        try:
            students = await self.store.list(school_ref(located.school_code).sub(STUDENTS))
        except Exception as e:
            raise StoreError("student listing failed") from e
        if not students:
            raise NotFound("No students found.")
        return [serialize_doc(s.data) for s in students]

    async def reassign(self, email: str, new_school_code: str) -> None:
        """
        Move an official to another school, keeping their document id.

        The write to the new school and the delete from the old one happen in a
        single store move, so the official is never listed under both.
        """
        if not await self.school_exists(new_school_code):
            raise NotFound("School code not found.")

        located = await self.locator.locate(email)
        if located is None:
            raise NotFound("User not found.")

        old_ref = located.member.ref
        data = dict(located.member.data)
        data["schoolCode"] = new_school_code
        new_ref = school_ref(new_school_code).sub(SCHOOL_OFFICIALS).doc(old_ref.id)

        try:
            if new_ref == old_ref:
                await self.store.update(old_ref, {"schoolCode": new_school_code})
            else:
                await self.store.move(old_ref, new_ref, data)
        except Exception as e:
            raise StoreError("school reassignment failed") from e
        logger.info("moved official %s from %s to %s", old_ref.id, located.school_code, new_school_code)

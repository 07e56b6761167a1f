# school_portal/services/user_locator.py
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from school_portal.core.errors import StoreError
from school_portal.db.store import SCHOOL_OFFICIALS, SCHOOLS, Document, DocumentStore, collection

logger = logging.getLogger(__name__)


@dataclass
class LocatedMember:
    member: Document
    school_code: str


class UserLocator(Protocol):
    async def locate(self, email: str) -> Optional[LocatedMember]:
        """Find the school official registered with ``email``; None if nobody is."""
        ...


class ScanningUserLocator:
    """
    Walks every school and queries its officials by email, stopping at the first hit.

    One query per school per lookup, nothing cached. If an email were registered
    under two schools the winner is whichever school the store lists first.
    """

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def locate(self, email: str) -> Optional[LocatedMember]:
        try:
            schools = await self.store.list(collection(SCHOOLS))
            for school in schools:
                officials = school.ref.sub(SCHOOL_OFFICIALS)
                matches = await self.store.where(officials, "email", "==", email)
                if matches:
                    return LocatedMember(member=matches[0], school_code=school.id)
        except Exception as e:
            raise StoreError("lookup failed") from e

        logger.debug("no official with email %s in %d schools", email, len(schools))
        return None

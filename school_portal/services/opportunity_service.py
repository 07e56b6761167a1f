# school_portal/services/opportunity_service.py
import logging

from school_portal.core.errors import NotFound, StoreError
from school_portal.db.store import OPPORTUNITIES, STUDENTS, Document, DocumentStore, school_ref
from school_portal.models.report import AggregationResult, ReportRow, SkipReason
from school_portal.services.user_locator import UserLocator

logger = logging.getLogger(__name__)


def build_row(student: Document, opportunity: Document) -> ReportRow:
    s, o = student.data, opportunity.data
    return ReportRow(
        student_name=s.get("name"),
        opportunity_name=o.get("name"),
        hour=o.get("hour"),
        date=o.get("date"),
        level=s.get("level"),
        city=s.get("city"),
        description=o.get("description"),
        organization_name=o.get("organizationName"),
    )


class OpportunityService:
    """
    Builds the "last opportunities" report for a school.

    A student's lastOpportunity may point at an opportunity stored under any
    school, so each reference is resolved with a collection-group query on the
    opportunity ``id`` field rather than inside the student's own school.
    """

    def __init__(self, store: DocumentStore, locator: UserLocator) -> None:
        self.store = store
        self.locator = locator

    async def aggregate(self, school_code: str) -> AggregationResult:
        students_coll = school_ref(school_code).sub(STUDENTS)
        try:
            students = await self.store.where(students_coll, "lastOpportunity", "!=", "")
        except Exception as e:
            raise StoreError("student query failed") from e
        if not students:
            raise NotFound("No students found with opportunities.")

        result = AggregationResult()
        for student in students:
            opportunity_id = student.data["lastOpportunity"]
            try:
                matches = await self.store.collection_group(OPPORTUNITIES, "id", opportunity_id)
            except Exception:
                # one unreadable reference must not sink the whole report
                logger.exception(
                    "resolving opportunity %s for student %s failed", opportunity_id, student.id
                )
                result.skipped.append(
                    SkipReason(student_id=student.id, opportunity_id=str(opportunity_id), reason="error")
                )
                continue

            if not matches:
                logger.warning("student %s references missing opportunity %s", student.id, opportunity_id)
                result.skipped.append(
                    SkipReason(student_id=student.id, opportunity_id=str(opportunity_id), reason="not_found")
                )
                continue
            if len(matches) > 1:
                logger.warning("opportunity id %s matches %d documents, using the first", opportunity_id, len(matches))
            result.rows.append(build_row(student, matches[0]))

        return result

    async def report_for_email(self, email: str) -> AggregationResult:
        located = await self.locator.locate(email)
        if located is None:
            raise NotFound("School not found for the user.")
        return await self.aggregate(located.school_code)

# school_portal/models/report.py
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ReportRow(BaseModel):
    """One student joined with the opportunity their lastOpportunity points at."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    student_name: Optional[str] = None
    opportunity_name: Optional[str] = None
    hour: Any = None
    date: Any = None
    level: Any = None
    city: Optional[str] = None
    description: Optional[str] = None
    organization_name: Optional[str] = None


class SkipReason(BaseModel):
    student_id: str
    opportunity_id: str
    reason: Literal["not_found", "error"]


class AggregationResult(BaseModel):
    rows: List[ReportRow] = Field(default_factory=list)
    skipped: List[SkipReason] = Field(default_factory=list)

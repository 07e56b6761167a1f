# school_portal/models/utils.py
from typing import Any, Dict
from datetime import datetime
from bson import ObjectId

# stored on members but never returned to clients
PRIVATE_MEMBER_FIELDS = ("passwordHash",)


def _serialize_value(v: Any) -> Any:
    if isinstance(v, ObjectId):
        return str(v)
    if isinstance(v, datetime):
        return v.isoformat()
    if isinstance(v, dict):
        return serialize_doc(v)
    if isinstance(v, list):
        return [_serialize_value(i) for i in v]
    return v


def serialize_doc(doc: Dict) -> Dict:
    """
    Convert stored document data to a JSON-serializable dict:
    - ObjectId values become strings
    - datetimes become ISO strings
    """
    return {k: _serialize_value(v) for k, v in doc.items()}


def public_member(data: Dict) -> Dict:
    return serialize_doc({k: v for k, v in data.items() if k not in PRIVATE_MEMBER_FIELDS})

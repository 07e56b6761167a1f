# school_portal/models/common.py
from pydantic import BaseModel


class MessageOut(BaseModel):
    message: str

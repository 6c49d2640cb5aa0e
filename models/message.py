from pydantic import BaseModel, Field
from typing import Optional, Any, Dict, List

from utils.time_utils import utcnow


class SmsMessage(BaseModel):
    to: str
    content: str
    from_number: Optional[str] = None


class PushMessage(BaseModel):
    target: List[str] = Field(min_length=1)
    title: str = ""
    content: str
    payload: Dict[str, str] = {}
    overrides: Dict[str, Any] = {}


class SendResult(BaseModel):
    id: Any = None
    date: str = Field(default_factory=lambda: utcnow().isoformat())

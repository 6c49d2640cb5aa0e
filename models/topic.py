from pydantic import BaseModel, Field
from typing import List
from datetime import datetime

from utils.time_utils import utcnow


class Topic(BaseModel):
    organization_id: str
    environment_id: str
    key: str
    name: str
    subscribers: List[str] = []
    created_at: datetime = Field(default_factory=utcnow)

from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from enum import Enum


class ChannelType(str, Enum):
    SMS = "sms"
    PUSH = "push"


class ProviderId(str, Enum):
    SINCH_SMS = "sinch-sms"
    TWW_SMS = "tww-sms"
    FCM = "fcm"
    MOCK = "mock"


class ProviderConfig(BaseModel):
    provider_id: ProviderId
    credentials: Dict[str, Any] = {}
    from_number: Optional[str] = None
    batch_size: int = Field(default=10, gt=0)
    status: str = "active"

from abc import ABC, abstractmethod
from typing import Union
from models.message import SmsMessage, PushMessage, SendResult
from models.provider import ChannelType


class DispatchError(Exception):
    pass


class BaseSender(ABC):
    provider_id: str
    channel: ChannelType

    @abstractmethod
    async def send(self, message: Union[SmsMessage, PushMessage]) -> SendResult:
        pass

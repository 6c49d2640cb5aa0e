from .base_sender import BaseSender
from models.message import SmsMessage, SendResult
from models.provider import ChannelType, ProviderId
from typing import Dict, Any
from uuid import uuid4
import asyncio
import logging

logger = logging.getLogger("trigger_service")

class MockSender(BaseSender):
    provider_id = ProviderId.MOCK.value
    channel = ChannelType.SMS

    def __init__(self, config: Dict[str, Any]):
        self.config = config

    async def send(self, message: SmsMessage) -> SendResult:
        logger.info(f"[{self.provider_id}] Sending SMS...")
        logger.info(f"   From: {message.from_number}")
        logger.info(f"   To: {message.to}")
        logger.info(f"   Content: {message.content}")
        # Simulate network latency
        await asyncio.sleep(0.01)
        return SendResult(id=str(uuid4()))

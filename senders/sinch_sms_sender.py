import asyncio
import logging
from typing import Any, Dict

import requests

from models.message import SmsMessage, SendResult
from models.provider import ChannelType, ProviderId
from .base_sender import BaseSender, DispatchError

logger = logging.getLogger(__name__)


class SinchSmsSender(BaseSender):
    provider_id = ProviderId.SINCH_SMS.value
    channel = ChannelType.SMS

    def __init__(self, config: Dict[str, Any]):
        self.from_number = config.get("from")
        self.plan = config.get("plan")
        self.token = config.get("token")
        self.base_url = "https://us.sms.api.sinch.com/xms/v1"

    async def send(self, message: SmsMessage) -> SendResult:
        return await asyncio.to_thread(self._send_sync, message)

    def _send_sync(self, message: SmsMessage) -> SendResult:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.token}",
        }
        payload = {
            "from": message.from_number or self.from_number,
            "body": message.content,
            "to": [message.to],
        }
        response = requests.post(f"{self.base_url}/{self.plan}/batches", json=payload, headers=headers, timeout=30)
        if not response.ok:
            logger.error(f"Sinch error: {response.status_code} - {response.text}")
            raise DispatchError(f"Sinch SMS send failed with status {response.status_code}")

        data = response.json()
        logger.info(f"Sinch SMS batch {data.get('id')} accepted for {message.to}")
        return SendResult(id=data.get("id"))

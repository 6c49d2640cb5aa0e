import asyncio
import logging
from typing import Any, Dict

import requests

from models.message import SmsMessage, SendResult
from models.provider import ChannelType, ProviderId
from .base_sender import BaseSender, DispatchError

logger = logging.getLogger(__name__)


class TwwSmsSender(BaseSender):
    provider_id = ProviderId.TWW_SMS.value
    channel = ChannelType.SMS

    def __init__(self, config: Dict[str, Any]):
        self.user = config.get("user")
        self.password = config.get("password")
        self.reference = config.get("reference", "")
        self.url = "https://webservices2.twwwireless.com.br/reluzcap/wsreluzcap.asmx/EnviaSMS"

    async def send(self, message: SmsMessage) -> SendResult:
        return await asyncio.to_thread(self._send_sync, message)

    def _send_sync(self, message: SmsMessage) -> SendResult:
        payload = {
            "SeuNum": self.reference,
            "NumUsu": self.user,
            "Senha": self.password,
            "Mensagem": message.content,
            "Celular": message.to,
        }
        response = requests.post(self.url, json=payload, headers={"Content-Type": "application/json"}, timeout=30)
        if not response.ok:
            logger.error(f"TWW error: {response.status_code} - {response.text}")
            raise DispatchError(f"TWW SMS send failed with status {response.status_code}")

        logger.info(f"TWW SMS sent to {message.to}")
        return SendResult(id=response.text)

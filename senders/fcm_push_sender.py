import asyncio
import logging
from typing import Any, Dict
from uuid import uuid4

import firebase_admin
from firebase_admin import credentials, messaging

from models.message import PushMessage, SendResult
from models.provider import ChannelType, ProviderId
from .base_sender import BaseSender, DispatchError

logger = logging.getLogger(__name__)


class FcmPushSender(BaseSender):
    provider_id = ProviderId.FCM.value
    channel = ChannelType.PUSH

    def __init__(self, config: Dict[str, Any]):
        self.project_id = config.get("projectId")
        certificate = credentials.Certificate({
            "type": "service_account",
            "project_id": self.project_id,
            "client_email": config.get("email"),
            "private_key": config.get("secretKey"),
            "token_uri": "https://oauth2.googleapis.com/token",
        })
        # Each sender gets its own named app so several projects can coexist
        self.app = firebase_admin.initialize_app(certificate, name=f"fcm-{uuid4().hex[:8]}")

    async def send(self, message: PushMessage) -> SendResult:
        return await asyncio.to_thread(self._send_sync, message)

    def _send_sync(self, message: PushMessage) -> SendResult:
        overrides = dict(message.overrides)
        overrides.pop("deviceTokens", None)

        if overrides.pop("type", None) == "data":
            multicast = messaging.MulticastMessage(tokens=message.target, data=message.payload)
        else:
            data = overrides.pop("data", None)
            multicast = messaging.MulticastMessage(
                tokens=message.target,
                notification=messaging.Notification(
                    title=message.title,
                    body=message.content,
                    image=overrides.get("image"),
                ),
                data=data,
            )

        response = messaging.send_each_for_multicast(multicast, app=self.app)
        if response.failure_count > 0:
            error = next(r.exception for r in response.responses if not r.success)
            logger.error(f"FCM push failed for {response.failure_count} of {len(message.target)} device(s): {error}")
            raise DispatchError(f'Sending message failed due to "{error}"')

        logger.info(f"FCM push sent to {response.success_count} device(s) in project {self.project_id}")
        return SendResult(id=[r.message_id for r in response.responses])

import asyncio
import logging
import traceback
from datetime import datetime
from typing import Any, Dict, Optional

from api_clients.subscriber_client import SubscriberClient
from models.message import PushMessage, SmsMessage
from models.provider import ChannelType
from models.recipient import ResolvedRecipient
from models.resolution import ResolutionRequest

from .provider_builder import ProviderBuilder
from .recipient_resolver import RecipientResolver

logger = logging.getLogger("trigger_service")


class TriggerExecutor:
    def __init__(self, recipient_resolver: RecipientResolver = None, subscriber_client=None):
        self.recipient_resolver = recipient_resolver or RecipientResolver()
        self.subscriber_client = subscriber_client or SubscriberClient()

    async def execute(
        self,
        request: ResolutionRequest,
        content: str,
        provider_config: Dict[str, Any],
        title: str = "",
        payload: Dict[str, str] = None,
    ) -> Dict[str, Any]:
        """
        Resolves the recipients of a trigger and dispatches the message to each of them.
        Nothing is sent unless every recipient could be resolved.

        SMS providers send to the subscriber's phone, push providers to its device tokens.
        """
        transaction_id = request.transaction_id
        logger.info(f"Starting trigger {transaction_id} for user {request.user_id} [Env: {request.environment_id}]")
        start_time = datetime.now()

        try:
            provider = ProviderBuilder.validate_config(provider_config)
            recipients = await self.recipient_resolver.resolve(request)
            sender = ProviderBuilder.create_sender(provider)
        except Exception as e:
            logger.error(f"Trigger {transaction_id} failed: {e}")
            logger.error(traceback.format_exc())
            return {"status": "failed", "transaction_id": transaction_id, "error": str(e)}

        semaphore = asyncio.Semaphore(provider.batch_size)
        is_push = sender.channel == ChannelType.PUSH
        contact_field = "deviceTokens" if is_push else "phone"

        async def process_recipient(recipient: ResolvedRecipient) -> Dict[str, Any]:
            async with semaphore:
                subscriber_id = recipient.subscriber_id
                try:
                    contact = await self._get_contact(request, recipient, contact_field)
                    if not contact:
                        logger.warning(f"Subscriber {subscriber_id} has no {contact_field}, skipping")
                        return {"subscriber_id": subscriber_id, "status": "skipped"}

                    if is_push:
                        message = PushMessage(target=contact, title=title, content=content, payload=payload or {})
                    else:
                        message = SmsMessage(to=contact, content=content, from_number=provider.from_number)
                    result = await sender.send(message)
                    return {"subscriber_id": subscriber_id, "status": "success", "message_id": result.id}
                except Exception as e:
                    logger.error(f"Error sending to subscriber {subscriber_id}: {e}")
                    return {"subscriber_id": subscriber_id, "status": "failed", "error": str(e)}

        results = await asyncio.gather(*(process_recipient(r) for r in recipients))

        counts = {status: sum(1 for r in results if r["status"] == status) for status in ("success", "failed", "skipped")}
        logger.info(
            f"Trigger {transaction_id} complete in {(datetime.now() - start_time).total_seconds():.2f}s. "
            f"Sent: {counts['success']}, Failed: {counts['failed']}, Skipped: {counts['skipped']}"
        )
        return {
            "status": "success",
            "transaction_id": transaction_id,
            "total": len(recipients),
            "sent": counts["success"],
            "failed": counts["failed"],
            "skipped": counts["skipped"],
            "recipient_results": results,
        }

    async def _get_contact(self, request: ResolutionRequest, recipient: ResolvedRecipient, field: str) -> Optional[Any]:
        """Reads the field from the inline profile, falling back to the stored subscriber."""
        value = getattr(recipient, field, None)
        if value:
            return value
        subscriber = await asyncio.to_thread(
            self.subscriber_client.get,
            request.organization_id,
            request.environment_id,
            recipient.subscriber_id,
        )
        return subscriber.get(field) if subscriber else None

import asyncio
import logging
import os
from typing import Dict, Iterable, List

from api_clients.topic_client import TopicClient
from models.recipient import GroupRef, RecipientSpec, ResolvedRecipient, SubscriberDefine
from models.resolution import ResolutionRequest, TenantScope
from utils.feature_flags import is_topic_notification_enabled

from .recipient_parser import RecipientParser

logger = logging.getLogger("trigger_service")


class RecipientResolver:
    """
    Turns the raw recipients of a trigger into the final list of send targets.

    Subscriber ids and inline subscriber definitions are kept in input order
    and always come first. Topics are expanded into their members afterwards,
    so when the same subscriber is named directly and through a topic the
    direct entry is the one that survives deduplication. Topics are ignored
    altogether while the topic notification flag is off.

    Lookup failures are not caught here: resolution either returns the full
    list or raises.
    """

    def __init__(self, topic_client=None, max_concurrent_lookups: int = None):
        self.topic_client = topic_client or TopicClient()
        self.parser = RecipientParser()
        self.max_concurrent_lookups = max_concurrent_lookups or int(
            os.getenv("RESOLVER_MAX_CONCURRENT_LOOKUPS", "10")
        )

    async def resolve(self, request: ResolutionRequest) -> List[ResolvedRecipient]:
        specs = self.parser.parse(request.recipients)
        topics_enabled = is_topic_notification_enabled()

        direct: List[RecipientSpec] = []
        topics: List[GroupRef] = []
        for spec in specs:
            if isinstance(spec, GroupRef):
                topics.append(spec)
            else:
                direct.append(spec)

        if topics and not topics_enabled:
            logger.debug(
                f"[{request.transaction_id}] Topic notifications disabled, ignoring {len(topics)} topic recipient(s)"
            )
            topics = []

        members = await self._lookup_members(request.tenant, [t.topic_key for t in topics])

        candidates: List[ResolvedRecipient] = [spec.to_recipient() for spec in direct]
        for topic in topics:
            candidates.extend(SubscriberDefine(subscriber_id=m) for m in members[topic.topic_key])

        resolved = self.deduplicate(candidates)
        logger.info(
            f"[{request.transaction_id}] Resolved {len(resolved)} recipient(s) "
            f"from {len(direct)} direct and {len(topics)} topic recipient(s)"
        )
        return resolved

    @staticmethod
    def deduplicate(candidates: Iterable[ResolvedRecipient]) -> List[ResolvedRecipient]:
        """Keeps the first recipient seen for each subscriber id, in order."""
        unique: Dict[str, ResolvedRecipient] = {}
        for recipient in candidates:
            unique.setdefault(recipient.subscriber_id, recipient)
        return list(unique.values())

    async def _lookup_members(self, tenant: TenantScope, topic_keys: List[str]) -> Dict[str, List[str]]:
        """
        Fetches the members of every distinct topic key concurrently.
        Results are keyed by topic so completion order does not matter.
        """
        unique_keys = list(dict.fromkeys(topic_keys))
        if not unique_keys:
            return {}

        semaphore = asyncio.Semaphore(self.max_concurrent_lookups)

        async def lookup(topic_key: str):
            async with semaphore:
                subscribers = await asyncio.to_thread(
                    self.topic_client.get_subscribers,
                    tenant.organization_id,
                    tenant.environment_id,
                    topic_key,
                )
                logger.debug(f"Topic '{topic_key}' has {len(subscribers)} subscriber(s)")
                return topic_key, subscribers

        # Every lookup runs to completion; the first failure in topic order is raised
        results = await asyncio.gather(*(lookup(key) for key in unique_keys), return_exceptions=True)
        errors = [r for r in results if isinstance(r, BaseException)]
        if errors:
            logger.error(
                f"{len(errors)} topic lookup(s) failed for environment {tenant.environment_id}: {errors[0]}"
            )
            raise errors[0]
        return dict(results)

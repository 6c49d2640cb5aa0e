from typing import Any, Dict, List, Optional, Tuple
from models.topic import Topic
import logging

logger = logging.getLogger("trigger_service")


class InMemoryTopicClient:
    """Topic store kept in process memory, for local runs and tests."""

    def __init__(self):
        self._topics: Dict[Tuple[str, str, str], Topic] = {}

    def get(self, organization_id: str, environment_id: str, topic_key: str) -> Optional[Dict[str, Any]]:
        topic = self._topics.get((organization_id, environment_id, topic_key))
        return topic.model_dump() if topic else None

    def get_subscribers(self, organization_id: str, environment_id: str, topic_key: str) -> List[str]:
        topic = self._topics.get((organization_id, environment_id, topic_key))
        return list(topic.subscribers) if topic else []

    def create_topic(self, organization_id: str, environment_id: str, key: str, name: str) -> Dict[str, Any]:
        scope = (organization_id, environment_id, key)
        if scope in self._topics:
            raise ValueError(f"Topic '{key}' already exists.")
        topic = Topic(organization_id=organization_id, environment_id=environment_id, key=key, name=name)
        self._topics[scope] = topic
        logger.info(f"[InMemoryTopicClient] Created topic '{key}'")
        return topic.model_dump()

    def add_subscribers(self, organization_id: str, environment_id: str, key: str, subscriber_ids: List[str]) -> bool:
        topic = self._topics.get((organization_id, environment_id, key))
        if topic is None:
            raise ValueError(f"Topic '{key}' does not exist.")
        for subscriber_id in subscriber_ids:
            if subscriber_id not in topic.subscribers:
                topic.subscribers.append(subscriber_id)
        return True


class InMemorySubscriberClient:
    def __init__(self):
        self._subscribers: Dict[Tuple[str, str, str], Dict[str, Any]] = {}

    def upsert(self, organization_id: str, environment_id: str, subscriber: Dict[str, Any]):
        self._subscribers[(organization_id, environment_id, subscriber["subscriberId"])] = subscriber

    def get(self, organization_id: str, environment_id: str, subscriber_id: str) -> Optional[Dict[str, Any]]:
        return self._subscribers.get((organization_id, environment_id, subscriber_id))

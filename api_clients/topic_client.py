from typing import Any, Dict, List, Optional
from api_clients.base_client import BaseClient, BackendRequestError
import logging

logger = logging.getLogger("trigger_service")


def _unique(ids: List[str]) -> List[str]:
    return list(dict.fromkeys(ids))


class TopicClient(BaseClient):
    """Topic store backed by the notification backend API."""

    def _topic_path(self, organization_id: str, environment_id: str, topic_key: str = None) -> str:
        path = f"/organizations/{organization_id}/environments/{environment_id}/topics"
        return f"{path}/{topic_key}" if topic_key else path

    def get(self, organization_id: str, environment_id: str, topic_key: str) -> Optional[Dict[str, Any]]:
        return self._get(self._topic_path(organization_id, environment_id, topic_key))

    def get_subscribers(self, organization_id: str, environment_id: str, topic_key: str) -> List[str]:
        """
        Returns the external subscriber ids of the topic members, in store order.
        An unknown topic has no members; backend failures raise BackendRequestError.
        """
        topic = self.get(organization_id, environment_id, topic_key)
        if topic is None:
            logger.debug(f"Topic '{topic_key}' not found in environment {environment_id}")
            return []
        return _unique(topic.get("subscribers") or [])

    def create_topic(self, organization_id: str, environment_id: str, key: str, name: str) -> Dict[str, Any]:
        resp = self._post(
            self._topic_path(organization_id, environment_id),
            json={"key": key, "name": name},
        )
        if resp is None:
            raise BackendRequestError(f"Topic endpoint not found for environment {environment_id}", status_code=404)
        return resp

    def add_subscribers(self, organization_id: str, environment_id: str, key: str, subscriber_ids: List[str]) -> bool:
        resp = self._post(
            f"{self._topic_path(organization_id, environment_id, key)}/subscribers",
            json={"subscribers": _unique(subscriber_ids)},
        )
        if resp is None:
            raise ValueError(f"Topic '{key}' does not exist.")
        return True

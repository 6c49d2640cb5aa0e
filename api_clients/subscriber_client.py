from typing import Any, Dict, Optional
from api_clients.base_client import BaseClient


class SubscriberClient(BaseClient):

    def get(self, organization_id: str, environment_id: str, subscriber_id: str) -> Optional[Dict[str, Any]]:
        return self._get(
            f"/organizations/{organization_id}/environments/{environment_id}/subscribers/{subscriber_id}"
        )

import requests
from typing import Any, Dict, Optional
import os
import logging

logger = logging.getLogger("trigger_service")


class BackendRequestError(Exception):
    """Raised when the backend cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BaseClient:
    def __init__(self):
        self.base_url = os.getenv("NOTIFY_BACKEND_URL", "http://localhost:8000/api")
        self.timeout = float(os.getenv("NOTIFY_BACKEND_TIMEOUT", "10"))
        self.session = requests.Session()
        api_key = os.getenv("NOTIFY_BACKEND_API_KEY")
        if api_key:
            self.session.headers.update({"Authorization": f"ApiKey {api_key}"})

    def _request(self, method: str, endpoint: str, **kwargs) -> Optional[Any]:
        """
        Performs a request and returns the decoded JSON body.
        Returns None on 404, raises BackendRequestError on anything else that fails.
        """
        url = f"{self.base_url}{endpoint}"
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{method} {endpoint} failed: {e}")
            raise BackendRequestError(f"{method} {endpoint} failed: {e}") from e

        if resp.status_code == 404:
            return None
        if resp.status_code >= 400:
            logger.error(f"{method} {endpoint} failed: {resp.status_code} - {resp.text}")
            raise BackendRequestError(
                f"{method} {endpoint} returned {resp.status_code}",
                status_code=resp.status_code,
            )
        if not resp.content:
            return {}
        return resp.json()

    def _get(self, endpoint: str, params: Dict = None) -> Optional[Any]:
        return self._request("GET", endpoint, params=params)

    def _post(self, endpoint: str, json: Dict = None) -> Optional[Any]:
        return self._request("POST", endpoint, json=json)

    def _put(self, endpoint: str, json: Dict = None) -> Optional[Any]:
        return self._request("PUT", endpoint, json=json)

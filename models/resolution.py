from pydantic import BaseModel, ConfigDict
from typing import Any, NamedTuple


class TenantScope(NamedTuple):
    organization_id: str
    environment_id: str


class ResolutionRequest(BaseModel):
    """One trigger invocation's worth of recipients to resolve.

    `recipients` holds the raw input exactly as received: a single spec or a
    list of specs, possibly duplicated and in no meaningful order.
    """
    model_config = ConfigDict(frozen=True)

    organization_id: str
    environment_id: str
    transaction_id: str
    user_id: str
    recipients: Any

    @property
    def tenant(self) -> TenantScope:
        return TenantScope(self.organization_id, self.environment_id)

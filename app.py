from fastapi import FastAPI, HTTPException, BackgroundTasks
from pydantic import BaseModel
from typing import Optional, Dict, Any
from uuid import uuid4
import os
import logging

from dotenv import load_dotenv

from api_clients.base_client import BackendRequestError
from api_clients.mock_clients import InMemoryTopicClient, InMemorySubscriberClient
from api_clients.subscriber_client import SubscriberClient
from api_clients.topic_client import TopicClient
from executor.recipient_resolver import RecipientResolver
from executor.trigger_executor import TriggerExecutor
from models.recipient import TriggerRecipients
from models.resolution import ResolutionRequest

# Load environment variables from .env file
load_dotenv()

handlers = [logging.StreamHandler()]
if os.getenv("LOG_FILE"):
    handlers.append(logging.FileHandler(os.getenv("LOG_FILE")))

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
    handlers=handlers
)
logger = logging.getLogger("trigger_service")

app = FastAPI(title="Trigger Recipients Service")


def build_clients():
    if os.getenv("TOPIC_STORE", "http").lower() == "memory":
        logger.info("Using in-memory topic and subscriber stores")
        return InMemoryTopicClient(), InMemorySubscriberClient()
    return TopicClient(), SubscriberClient()


topic_client, subscriber_client = build_clients()


class ResolvePayload(BaseModel):
    organization_id: str
    environment_id: str
    user_id: str
    transaction_id: Optional[str] = None
    to: TriggerRecipients

    def to_request(self) -> ResolutionRequest:
        return ResolutionRequest(
            organization_id=self.organization_id,
            environment_id=self.environment_id,
            user_id=self.user_id,
            transaction_id=self.transaction_id or str(uuid4()),
            recipients=self.to,
        )


class TriggerPayload(ResolvePayload):
    content: str
    provider: Dict[str, Any]
    title: str = ""
    payload: Dict[str, str] = {}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.post("/api/v1/recipients/resolve")
async def resolve_recipients(payload: ResolvePayload):
    request = payload.to_request()
    resolver = RecipientResolver(topic_client=topic_client)
    try:
        recipients = await resolver.resolve(request)
    except BackendRequestError as e:
        logger.error(f"Recipient resolution failed for {request.transaction_id}: {e}")
        raise HTTPException(status_code=502, detail=f"Topic lookup failed: {e}")

    return {
        "transaction_id": request.transaction_id,
        "recipients": [r.to_payload() for r in recipients],
    }


@app.post("/api/v1/trigger")
async def trigger(payload: TriggerPayload, background_tasks: BackgroundTasks):
    request = payload.to_request()
    executor = TriggerExecutor(
        recipient_resolver=RecipientResolver(topic_client=topic_client),
        subscriber_client=subscriber_client,
    )
    background_tasks.add_task(
        executor.execute, request, payload.content, payload.provider, title=payload.title, payload=payload.payload
    )
    logger.info(f"Queued trigger {request.transaction_id}")
    return {"status": "queued", "transaction_id": request.transaction_id}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8050")))

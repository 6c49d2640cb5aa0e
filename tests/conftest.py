import pytest
from api_clients.mock_clients import InMemoryTopicClient
from models.resolution import ResolutionRequest
from utils.feature_flags import TOPIC_NOTIFICATION_FLAG

ORGANIZATION_ID = "org-1"
ENVIRONMENT_ID = "env-1"


@pytest.fixture
def topics_enabled(monkeypatch):
    monkeypatch.setenv(TOPIC_NOTIFICATION_FLAG, "true")


@pytest.fixture
def topics_disabled(monkeypatch):
    monkeypatch.setenv(TOPIC_NOTIFICATION_FLAG, "false")


@pytest.fixture
def topic_store():
    store = InMemoryTopicClient()

    def add_topic(key, subscribers, organization_id=ORGANIZATION_ID, environment_id=ENVIRONMENT_ID):
        store.create_topic(organization_id, environment_id, key, f"{key}-name")
        store.add_subscribers(organization_id, environment_id, key, subscribers)

    store.add_topic = add_topic
    return store


@pytest.fixture
def make_request():
    def _make(recipients, transaction_id="txn-1"):
        return ResolutionRequest(
            organization_id=ORGANIZATION_ID,
            environment_id=ENVIRONMENT_ID,
            transaction_id=transaction_id,
            user_id="user-1",
            recipients=recipients,
        )
    return _make


@pytest.fixture
def subscriber_profile():
    return {
        "subscriberId": "s2",
        "firstName": "Test Name",
        "lastName": "Last of name",
        "email": "test@email.novu",
    }

from typing import Any, List, Mapping
from pydantic import ValidationError
from models.recipient import (
    DirectId,
    DirectProfile,
    GroupRef,
    RecipientSpec,
    SubscriberDefine,
    TopicRecipient,
    TriggerRecipientsType,
)


class InvalidRecipientError(ValueError):
    pass


class RecipientParser:
    """
    Classifies raw trigger recipients into DirectId / DirectProfile / GroupRef.

    Accepts a single recipient or a list of them, either as plain data
    (str / dict) or as already validated request models. Input order is
    kept as is; nothing is deduplicated or looked up here.
    """

    def parse(self, raw: Any) -> List[RecipientSpec]:
        items = raw if isinstance(raw, (list, tuple)) else [raw]
        return [self.classify(item) for item in items]

    def classify(self, item: Any) -> RecipientSpec:
        if isinstance(item, str):
            if not item:
                raise InvalidRecipientError("Subscriber id must not be empty.")
            return DirectId(value=item)

        if isinstance(item, TopicRecipient):
            return GroupRef(topic_key=item.topic_key)

        if isinstance(item, SubscriberDefine):
            return DirectProfile(profile=item)

        if isinstance(item, Mapping):
            if self._is_topic(item):
                topic_key = item.get("topicKey") or item.get("topic")
                if not isinstance(topic_key, str) or not topic_key:
                    raise InvalidRecipientError(f"Topic recipient without a topic key: {dict(item)}")
                return GroupRef(topic_key=topic_key)

            if "subscriberId" in item or "subscriber_id" in item:
                try:
                    return DirectProfile(profile=SubscriberDefine.model_validate(dict(item)))
                except ValidationError as e:
                    raise InvalidRecipientError(f"Invalid subscriber definition: {e}") from e

        raise InvalidRecipientError(f"Unsupported recipient: {item!r}")

    @staticmethod
    def _is_topic(item: Mapping) -> bool:
        return item.get("type") == TriggerRecipientsType.TOPIC.value or "topic" in item

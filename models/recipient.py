from pydantic import BaseModel, ConfigDict, Field, AliasChoices
from typing import Optional, Dict, Any, List, Literal, Union, Annotated
from enum import Enum


class TriggerRecipientsType(str, Enum):
    SUBSCRIBER = "Subscriber"
    TOPIC = "Topic"


class SubscriberDefine(BaseModel):
    """
    Inline subscriber profile. Also used as the resolved recipient unit:
    a bare id resolves to a SubscriberDefine carrying only subscriberId.

    Unknown profile fields are kept as extras so that they survive the
    round trip through resolution untouched.
    """
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    subscriber_id: str = Field(alias="subscriberId", min_length=1)
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    email: Optional[str] = None
    phone: Optional[str] = None
    avatar: Optional[str] = None
    locale: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class TopicRecipient(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["Topic"] = TriggerRecipientsType.TOPIC.value
    topic_key: str = Field(
        validation_alias=AliasChoices("topicKey", "topic", "topic_key"),
        serialization_alias="topicKey",
        min_length=1,
    )


# What callers may put in the "to" field of a trigger
SubscriberId = Annotated[str, Field(min_length=1)]
RecipientInput = Union[SubscriberId, TopicRecipient, SubscriberDefine]
TriggerRecipients = Union[RecipientInput, List[RecipientInput]]

# Output unit of the resolver
ResolvedRecipient = SubscriberDefine


class RecipientKind(str, Enum):
    SUBSCRIBER_ID = "subscriber_id"
    SUBSCRIBER_DEFINE = "subscriber_define"
    TOPIC = "topic"


class DirectId(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[RecipientKind.SUBSCRIBER_ID] = RecipientKind.SUBSCRIBER_ID
    value: str

    @property
    def subscriber_id(self) -> str:
        return self.value

    def to_recipient(self) -> ResolvedRecipient:
        return SubscriberDefine(subscriber_id=self.value)


class DirectProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[RecipientKind.SUBSCRIBER_DEFINE] = RecipientKind.SUBSCRIBER_DEFINE
    profile: SubscriberDefine

    @property
    def subscriber_id(self) -> str:
        return self.profile.subscriber_id

    def to_recipient(self) -> ResolvedRecipient:
        return self.profile


class GroupRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[RecipientKind.TOPIC] = RecipientKind.TOPIC
    topic_key: str


RecipientSpec = Union[DirectId, DirectProfile, GroupRef]

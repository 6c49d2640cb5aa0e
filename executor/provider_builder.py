from typing import Dict, Any
from models.provider import ProviderConfig, ProviderId
from senders.base_sender import BaseSender
from senders.fcm_push_sender import FcmPushSender
from senders.sinch_sms_sender import SinchSmsSender
from senders.tww_sms_sender import TwwSmsSender
from senders.mock_senders import MockSender


REQUIRED_CREDENTIALS = {
    ProviderId.SINCH_SMS: ["from", "plan", "token"],
    ProviderId.TWW_SMS: ["user", "password"],
    ProviderId.FCM: ["projectId", "email", "secretKey"],
    ProviderId.MOCK: [],
}


class ProviderBuilder:

    @staticmethod
    def validate_config(config: Dict[str, Any]) -> ProviderConfig:
        """Validates provider configuration. Raises ValueError if invalid."""
        provider_id = config.get("provider_id")
        if not provider_id:
            raise ValueError("Missing 'provider_id' in configuration.")

        # Reject inactive providers
        if config.get("status", "active") != "active":
            raise ValueError(f"Provider '{provider_id}' is not active.")

        try:
            provider_config = ProviderConfig.model_validate(
                {**config, "provider_id": str(getattr(provider_id, "value", provider_id)).lower()}
            )
        except ValueError as e:
            raise ValueError(f"Unsupported provider configuration: {e}") from e

        missing = [
            f for f in REQUIRED_CREDENTIALS[provider_config.provider_id]
            if not provider_config.credentials.get(f)
        ]
        if missing:
            raise ValueError(f"{provider_config.provider_id.value} requires: {missing}")
        return provider_config

    @staticmethod
    def create_sender(provider_config: ProviderConfig) -> BaseSender:
        credentials = provider_config.credentials

        if provider_config.provider_id == ProviderId.SINCH_SMS:
            return SinchSmsSender(credentials)
        elif provider_config.provider_id == ProviderId.TWW_SMS:
            return TwwSmsSender(credentials)
        elif provider_config.provider_id == ProviderId.FCM:
            return FcmPushSender(credentials)
        return MockSender(credentials)

    @staticmethod
    def build(config: Dict[str, Any]) -> BaseSender:
        return ProviderBuilder.create_sender(ProviderBuilder.validate_config(config))

import os

TOPIC_NOTIFICATION_FLAG = "FF_IS_TOPIC_NOTIFICATION_ENABLED"


def is_topic_notification_enabled() -> bool:
    """Topic recipients are only expanded when the flag is set to "true"."""
    return os.getenv(TOPIC_NOTIFICATION_FLAG, "false").strip().lower() == "true"

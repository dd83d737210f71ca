import logging

from ..utils import now_ms

logger = logging.getLogger(__name__)

VARIANTS_REGENERATED = "VARIANTS_REGENERATED"
PLAYER_REGISTERED = "PLAYER_REGISTERED"


def match_topic(match_id: int) -> str:
    return f"match:{match_id}"


class Publisher:
    """Push-notification sink handed to services.

    The default only logs; a transport (WebSocket, SSE, a broker) subclasses
    it and overrides publish().
    """

    def publish(self, topic: str, message: dict) -> None:
        logger.info("publish %s %s", topic, message.get("type"))


def notify(publisher: Publisher | None, match_id: int, event_type: str, **fields) -> None:
    if publisher is None:
        return
    message = {"type": event_type, "match_id": match_id, "timestamp": now_ms(), **fields}
    publisher.publish(match_topic(match_id), message)

import uuid
from collections import deque
from datetime import datetime, timezone

from . import config
from .logging_config import get_logger

logger = get_logger(__name__)


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_event(event_type: str, data: dict) -> dict:
    return {
        "event_id": str(uuid.uuid4()),
        "event_type": event_type,
        "occurred_at": utcnow_iso(),
        "data": data,
    }


class EventLog:
    """
    Append-only record of the most recent domain events of a repository.

    Stands in for the message broker: nothing consumes these events, they
    are kept for inspection and written to the structured log.
    """

    def __init__(self, limit: int = config.EVENT_LOG_LIMIT):
        # oldest events drop off once the limit is reached
        self._events: deque[dict] = deque(maxlen=limit)

    def record(self, event_type: str, data: dict) -> dict:
        event = build_event(event_type, data)
        self._events.append(event)
        logger.info("domain_event", event_type=event_type, event_id=event["event_id"], **data)
        return event

    def of_type(self, event_type: str) -> list[dict]:
        return [e for e in self._events if e["event_type"] == event_type]

    def clear(self):
        self._events.clear()

    def __iter__(self):
        return iter(list(self._events))

    def __len__(self):
        return len(self._events)

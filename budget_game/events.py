from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

__all__ = [
    'Event', 'EventBus',
    'CHECKOUT_COMMITTED', 'MONTH_ADVANCED', 'QUARTERLY_EVENT',
    'GAME_COMPLETED', 'GAME_RESTARTED',
]

CHECKOUT_COMMITTED = "CHECKOUT_COMMITTED"
MONTH_ADVANCED = "MONTH_ADVANCED"
QUARTERLY_EVENT = "QUARTERLY_EVENT"
GAME_COMPLETED = "GAME_COMPLETED"
GAME_RESTARTED = "GAME_RESTARTED"


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], object]


class EventBus:
    """Synchronous in-process notifications.

    Handlers run in subscription order after the game state has been
    committed; their return values are handed back to the publisher.
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, name: str, payload: dict) -> List[object]:
        handlers = list(self._subscribers.get(name, []))
        if not handlers:
            return []
        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        return [handler(event, payload) for handler in handlers]

    def subscribers(self, name: str) -> int:
        return len(self._subscribers.get(name, []))

"""
Typed event bus for decoupled communication.

Event types are Enum members, so the game framework declares its own
event enums (SaveEvent, ProgressionEvent, CombatEvent, SessionEvent)
next to the code that publishes them.

Usage:
    class CombatEvent(Enum):
        HERO_ATTACKED = auto()

    bus.subscribe(CombatEvent.HERO_ATTACKED, on_attack)
    bus.publish(CombatEvent.HERO_ATTACKED, hero_id="hero_azal", damage=22)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Dictionary of event-specific data
        consumed: Whether a handler stopped propagation
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Stop delivery to lower-priority handlers."""
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


@dataclass
class _Subscription:
    priority: int
    target: Any  # handler, ref or WeakMethod
    one_shot: bool = False

    def resolve(self) -> EventHandler | None:
        if isinstance(self.target, (ref, WeakMethod)):
            return self.target()
        return self.target


class EventBus:
    """
    Publish/subscribe hub.

    Features:
    - Enum-keyed events
    - Priority ordering (higher first, FIFO among equals)
    - Weak references by default (handlers vanish with their owner)
    - One-shot handlers
    - Consumption stops propagation
    - Events published from inside a handler are queued until the
      current dispatch finishes
    """

    def __init__(self):
        self._subscriptions: dict[Enum, list[_Subscription]] = {}
        self._queue: list[Event] = []
        self._dispatching = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback function(event: Event)
            priority: Higher priority handlers are called first
            one_shot: Remove the handler after its first call
            weak: Hold the handler through a weak reference. Pass False
                for lambdas and closures that nothing else keeps alive.
        """
        target: Any = handler
        if weak:
            target = WeakMethod(handler) if hasattr(handler, '__self__') else ref(handler)

        subs = self._subscriptions.setdefault(event_type, [])
        index = len(subs)
        for i, existing in enumerate(subs):
            if priority > existing.priority:
                index = i
                break
        subs.insert(index, _Subscription(priority, target, one_shot))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        subs = self._subscriptions.get(event_type)
        if not subs:
            return
        subs[:] = [s for s in subs if s.resolve() != handler]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event.

        Returns:
            The Event object (check .consumed to see if it was handled)
        """
        event = Event(type=event_type, data=data)
        if self._dispatching:
            self._queue.append(event)
        else:
            self._dispatch(event)
        return event

    def clear(self, event_type: Enum | None = None) -> None:
        """Drop handlers for one event type, or all of them."""
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)

    def subscriber_count(self, event_type: Enum) -> int:
        return sum(1 for s in self._subscriptions.get(event_type, []) if s.resolve() is not None)

    def _dispatch(self, event: Event) -> None:
        subs = self._subscriptions.get(event.type)
        if subs:
            self._dispatching = True
            spent: list[_Subscription] = []
            try:
                for sub in list(subs):
                    if not any(sub is s for s in subs):
                        continue  # unsubscribed by an earlier handler
                    handler = sub.resolve()
                    if handler is None:
                        spent.append(sub)
                        continue
                    try:
                        handler(event)
                    except Exception:
                        logger.exception(f"Error in event handler for {event.type}")
                    if sub.one_shot:
                        spent.append(sub)
                    if event.consumed:
                        break
            finally:
                if spent:
                    subs[:] = [s for s in subs if not any(s is x for x in spent)]
                self._dispatching = False

        while self._queue and not self._dispatching:
            self._dispatch(self._queue.pop(0))

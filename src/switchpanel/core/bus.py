"""Event bus for panel-wide event publishing and subscription.

Events are declared once with a pydantic properties model and published
through a bus instance that the owner passes to its collaborators.

Example:
    class SelectionChangedProps(BaseModel):
        server: Optional[str] = None

    SelectionChanged = BusEvent.define("panel.selection.changed", SelectionChangedProps)

    bus = Bus()
    unsubscribe = bus.subscribe(SelectionChanged, on_selection_changed)
    await bus.publish(SelectionChanged, SelectionChangedProps(server="srvA"))
    unsubscribe()
"""

from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel

T = TypeVar('T', bound=BaseModel)

# Lazy logger to avoid circular imports
_log: Optional[Any] = None


def _get_log():
    """Get logger instance lazily to avoid circular imports."""
    global _log
    if _log is None:
        from ..util.log import Log
        _log = Log.create({"service": "bus"})
    return _log


class BusEvent(Generic[T]):
    """Event definition with type and properties schema.

    Attributes:
        type: Unique event type identifier (e.g., "panel.status.synced")
        properties_type: Pydantic model class for event properties
    """

    def __init__(self, event_type: str, properties_type: type[T]):
        self.type = event_type
        self.properties_type = properties_type

    @staticmethod
    def define(event_type: str, properties_type: type[T]) -> 'BusEvent[T]':
        """Define and register a new event type."""
        event = BusEvent(event_type, properties_type)
        _registry[event_type] = event
        return event


# Global event registry for introspection
_registry: Dict[str, BusEvent] = {}


class EventPayload(BaseModel):
    """Payload structure delivered to event subscribers."""
    type: str
    properties: Dict[str, Any]


SubscriptionCallback = Callable[[EventPayload], Union[None, Awaitable[None]]]


class Bus:
    """Event bus owned by a single controller.

    Subscriber failures are logged and never propagate to the publisher.
    """

    def __init__(self) -> None:
        self._subscriptions: Dict[str, List[SubscriptionCallback]] = {}

    async def publish(self, event: BusEvent[T], properties: T) -> None:
        if not isinstance(properties, event.properties_type):
            if isinstance(properties, dict):
                properties = event.properties_type(**properties)
            else:
                raise TypeError(
                    f"Properties must be instance of {event.properties_type.__name__}"
                )

        payload = EventPayload(
            type=event.type,
            properties=properties.model_dump()
        )

        callbacks = []
        for key in [event.type, "*"]:
            callbacks.extend(self._subscriptions.get(key, []))

        for callback in callbacks:
            try:
                result = callback(payload)
                if hasattr(result, '__await__'):
                    await result
            except Exception as e:
                import traceback
                _get_log().error("subscription callback failed", {
                    "error": str(e),
                    "type": event.type,
                    "traceback": traceback.format_exc(),
                })

    def subscribe(self, event: BusEvent[T], callback: SubscriptionCallback) -> Callable[[], None]:
        return self._raw_subscribe(event.type, callback)

    def subscribe_all(self, callback: SubscriptionCallback) -> Callable[[], None]:
        return self._raw_subscribe("*", callback)

    def _raw_subscribe(
        self,
        event_type: str,
        callback: SubscriptionCallback,
    ) -> Callable[[], None]:
        if event_type not in self._subscriptions:
            self._subscriptions[event_type] = []

        self._subscriptions[event_type].append(callback)

        def unsubscribe() -> None:
            subs = self._subscriptions.get(event_type, [])
            if callback in subs:
                subs.remove(callback)

        return unsubscribe

    def subscriber_count(self, event: BusEvent[T]) -> int:
        return len(self._subscriptions.get(event.type, []))

    def clear(self) -> None:
        self._subscriptions.clear()

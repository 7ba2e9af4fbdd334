"""
Central domain event bus (Mediator Pattern).
"""
import asyncio
import logging
from collections import defaultdict
from typing import Awaitable, Callable, Dict, List, Type

from share_agent.core.events.domain_event import DomainEvent

# An event handler is an async function that takes a DomainEvent and returns None
EventHandler = Callable[[DomainEvent], Awaitable[None]]


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__name__", repr(handler))


class Subscription:
    """
    Handle returned by DomainEventBus.subscribe().

    Disposing it removes the handler again. Disposing twice is a no-op.
    """

    def __init__(self, bus: "DomainEventBus", event_type: Type[DomainEvent], handler: EventHandler):
        self._bus = bus
        self._event_type = event_type
        self._handler = handler
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    async def dispose(self) -> None:
        if not self._active:
            return
        self._active = False
        await self._bus.unsubscribe(self._event_type, self._handler)


class DomainEventBus:
    """
    A robust, asynchronous event bus for domain event propagation.

    If one event handler fails it does not prevent other handlers from being
    executed; the error is logged and publication continues.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = defaultdict(list)
        self._lock = asyncio.Lock()

    async def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> Subscription:
        """
        Subscribes a handler to a specific event type.

        Args:
            event_type: The class of the domain event to subscribe to.
            handler: The asynchronous function to call when the event is published.

        Returns:
            A Subscription whose dispose() detaches the handler.
        """
        async with self._lock:
            self._handlers[event_type].append(handler)
            logging.debug(f"Handler {_handler_name(handler)} subscribed to {event_type.__name__}")
        return Subscription(self, event_type, handler)

    async def unsubscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        async with self._lock:
            handlers = self._handlers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)
                logging.debug(f"Handler {_handler_name(handler)} unsubscribed from {event_type.__name__}")

    async def publish(self, event: DomainEvent) -> None:
        """
        Publishes a domain event, calling all subscribed handlers concurrently.

        Args:
            event: The domain event instance to publish.
        """
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            logging.debug(f"No handlers for event {event.name}")
            return

        logging.info(f"Publishing {event.name} to {len(handlers)} handler(s)")

        tasks = [self._safe_execute(handler, event) for handler in handlers]
        await asyncio.gather(*tasks)

    async def _safe_execute(self, handler: EventHandler, event: DomainEvent) -> None:
        """
        Executes a single event handler safely, catching and logging any exceptions.
        """
        try:
            await handler(event)
        except Exception as e:
            logging.error(
                f"Unhandled exception in handler '{_handler_name(handler)}' for event "
                f"'{event.name}': {e}",
                exc_info=True,
            )

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Type, TypeVar

from torchlight.types import EntityId, PlayerId

if TYPE_CHECKING:
    from torchlight.core.world import World

_LOGGER = logging.getLogger(__name__)

E = TypeVar("E")
Listener = Callable[[Any], None]


class Event:
    """Base class for all Events."""

    pass


@dataclass(frozen=True)
class InventoryChanged(Event):
    """Some living entity's inventory changed. Not necessarily a player."""

    world: World
    entity: EntityId


@dataclass(frozen=True)
class PlayerDisconnected(Event):
    player_id: PlayerId


class EventRegistration:
    """Handle returned by EventRegistry.register(); call unregister() to stop."""

    def __init__(self, registry: EventRegistry, event_type: Type[Any], listener: Listener):
        self._registry = registry
        self.event_type = event_type
        self.listener = listener

    @property
    def registered(self) -> bool:
        return self._registry.is_registered(self)

    def unregister(self) -> None:
        self._registry.unregister(self)


class EventRegistry:
    """
    Synchronous pub/sub. dispatch() calls listeners on the caller's thread,
    so a listener that touches world data must go through world.execute().
    """

    def __init__(self):
        self._listeners: Dict[Type[Any], List[EventRegistration]] = defaultdict(list)
        self._lock = threading.Lock()

    def register(self, event_type: Type[E], listener: Callable[[E], None]) -> EventRegistration:
        registration = EventRegistration(self, event_type, listener)
        with self._lock:
            self._listeners[event_type].append(registration)
        return registration

    def unregister(self, registration: EventRegistration) -> None:
        with self._lock:
            listeners = self._listeners.get(registration.event_type, [])
            if registration in listeners:
                listeners.remove(registration)

    def is_registered(self, registration: EventRegistration) -> bool:
        with self._lock:
            return registration in self._listeners.get(registration.event_type, [])

    def dispatch(self, event: Any) -> int:
        """Delivers the event to every listener. Returns how many were called."""
        with self._lock:
            registrations = list(self._listeners.get(type(event), []))

        for registration in registrations:
            try:
                registration.listener(event)
            except Exception:
                _LOGGER.exception(
                    "Listener %r failed on %s", registration.listener, type(event).__name__
                )
        return len(registrations)

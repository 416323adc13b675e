"""Notifications emitted by the resolvers for renderers and audio.

Events are plain data; nothing in the physics core reads them back.
"""
from collections import deque
from dataclasses import dataclass, field


@dataclass(frozen=True)
class CollisionEvent:
    """Two bodies merged; ``position`` is the midpoint before the merge."""

    position: tuple
    combined_mass: float
    color: tuple
    survivor_id: int = -1
    absorbed_id: int = -1
    time: float = 0.0


@dataclass(frozen=True)
class DisruptionEvent:
    """A body was torn apart inside another body's Roche limit."""

    position: tuple
    mass: float
    color: tuple
    body_id: int = -1
    disruptor_id: int = -1
    fragment_ids: tuple = field(default_factory=tuple)
    time: float = 0.0


def blend_color(a, b, t):
    """Linear interpolation between two RGB tuples."""
    return tuple(float(x + (y - x) * t) for x, y in zip(a, b))


class EventBus:
    """Fan-out to subscribers plus a bounded queue for polling consumers."""

    def __init__(self, max_pending=10000):
        self._subscribers = []
        self._pending = deque(maxlen=max_pending)

    def subscribe(self, callback):
        """Register ``callback(event)``; returns the callback for later removal."""
        self._subscribers.append(callback)
        return callback

    def unsubscribe(self, callback):
        try:
            self._subscribers.remove(callback)
        except ValueError:
            pass

    def publish(self, events):
        for event in events:
            self._pending.append(event)
            for callback in list(self._subscribers):
                callback(event)

    def drain(self):
        """Return and forget every event published since the last drain."""
        events = list(self._pending)
        self._pending.clear()
        return events

    def clear(self):
        self._pending.clear()

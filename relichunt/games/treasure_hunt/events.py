"""
Treasure Hunt Events - Ambient room events and flavor text.
"""

from __future__ import annotations
from dataclasses import dataclass

from ...engine_core.state import EventType


@dataclass(frozen=True)
class AmbientEvent:
    """An event attached to an empty room. value is the health change magnitude."""
    event_type: EventType
    message: str
    value: int = 0


EVENT_TABLE: tuple[AmbientEvent, ...] = (
    AmbientEvent(
        EventType.HEAL,
        "You find a magical spring! Health restored by 20.",
        20,
    ),
    AmbientEvent(
        EventType.DAMAGE,
        "You trip over debris and hurt yourself. Lost 10 health.",
        10,
    ),
    AmbientEvent(
        EventType.NOTHING,
        "The room is eerily quiet. Nothing happens.",
    ),
    AmbientEvent(
        EventType.HINT,
        "Ancient runes on the wall whisper secrets of nearby treasures.",
    ),
)

_EVENTS_BY_TYPE = {event.event_type: event for event in EVENT_TABLE}

# Rooms without an event pick one of these
EMPTY_ROOM_MESSAGES: tuple[str, ...] = (
    "The room is empty, but you sense adventure nearby.",
    "Dust motes dance in the dim light. Nothing of interest here.",
    "Your footsteps echo in the hollow chamber.",
    "Ancient stone walls hold their secrets.",
)


def get_event(event_type: EventType) -> AmbientEvent:
    return _EVENTS_BY_TYPE[event_type]

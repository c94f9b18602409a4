"""
Join/leave rules for events.

Checks run against a fresh read so callers get a precise error, and the write
itself is a guarded atomic update: two concurrent joins on the last free slot
cannot both succeed. When the guarded write matches nothing the event is read
again to report why.
"""

import logging

from beanie import PydanticObjectId

from meetup.errors import Conflict, NotFound, PersistenceError
from meetup.models.event import Event
from meetup.services.event_gateway import EventGateway

logger = logging.getLogger(__name__)

EVENT_NOT_FOUND = "Event not found"
ALREADY_JOINED = "User already joined the event"
EVENT_FULL = "Event is at full capacity"
NOT_AN_ATTENDEE = "User is not an attendee of the event"
UPDATE_FAILED = "Failed to update event"


def check_can_join(event: Event, user_id: PydanticObjectId) -> None:
    if user_id in event.attendees:
        raise Conflict(ALREADY_JOINED)
    if len(event.attendees) >= event.capacity:
        raise Conflict(EVENT_FULL)


def check_can_leave(event: Event, user_id: PydanticObjectId) -> None:
    if user_id not in event.attendees:
        raise Conflict(NOT_AN_ATTENDEE)


async def _load(gateway: EventGateway, event_id: PydanticObjectId) -> Event:
    event = await gateway.find_by_id(event_id)
    if event is None:
        raise NotFound(EVENT_NOT_FOUND)
    return event


async def join_event(
    gateway: EventGateway,
    event_id: PydanticObjectId,
    user_id: PydanticObjectId,
) -> Event:
    event = await _load(gateway, event_id)
    check_can_join(event, user_id)

    updated = await gateway.add_attendee(event_id, user_id, event.capacity)
    if updated is None:
        # Lost a race: re-read to report duplicate/full, or that it vanished
        current = await gateway.find_by_id(event_id)
        if current is None:
            raise PersistenceError(UPDATE_FAILED)
        check_can_join(current, user_id)
        raise PersistenceError(UPDATE_FAILED)

    logger.info("User %s joined event %s", user_id, event_id)
    return updated


async def leave_event(
    gateway: EventGateway,
    event_id: PydanticObjectId,
    user_id: PydanticObjectId,
) -> Event:
    event = await _load(gateway, event_id)
    check_can_leave(event, user_id)

    updated = await gateway.remove_attendee(event_id, user_id)
    if updated is None:
        current = await gateway.find_by_id(event_id)
        if current is None:
            raise PersistenceError(UPDATE_FAILED)
        check_can_leave(current, user_id)
        raise PersistenceError(UPDATE_FAILED)

    logger.info("User %s left event %s", user_id, event_id)
    return updated

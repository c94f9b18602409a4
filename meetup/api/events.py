"""
Event APIs.

GET /events, GET /events/{id}: public listing and lookup.
POST, PUT, DELETE and join/leave require an authenticated caller.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from meetup.api.auth import CurrentUser
from meetup.api.deps import get_event_gateway, parse_object_id
from meetup.api.responses import envelope, serialize
from meetup.errors import NotFound, PersistenceError
from meetup.schemas.event import EventCreateRequest, EventUpdate
from meetup.services import event_service
from meetup.services.event_gateway import EventGateway

logger = logging.getLogger(__name__)
router = APIRouter()

INVALID_EVENT_ID = "Invalid event id"

Events = Annotated[EventGateway, Depends(get_event_gateway)]


@router.get("", summary="List events")
async def list_events(events: Events) -> dict:
    """All events, newest date first."""
    found = await events.find_all()
    return envelope("Events fetched successfully", {"events": [serialize(e) for e in found]})


@router.get("/{event_id}", summary="Get an event")
async def get_event(event_id: str, events: Events) -> dict:
    oid = parse_object_id(event_id, INVALID_EVENT_ID)
    event = await events.find_by_id(oid)
    if event is None:
        raise NotFound(event_service.EVENT_NOT_FOUND)
    return envelope("Event fetched successfully", {"event": serialize(event)})


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create an event")
async def create_event(
    body: EventCreateRequest,
    events: Events,
    current_user: CurrentUser,
) -> dict:
    """Create an event owned by the caller."""
    payload = body.model_dump(exclude_unset=True)
    payload["created_by"] = current_user.id
    event = await events.create(payload)
    return envelope("Event created successfully", {"event": serialize(event)})


@router.put("/join/{event_id}", summary="Join an event")
async def join_event(event_id: str, events: Events, current_user: CurrentUser) -> dict:
    oid = parse_object_id(event_id, INVALID_EVENT_ID)
    event = await event_service.join_event(events, oid, current_user.id)
    return envelope("Joined event successfully", {"event": serialize(event)})


@router.put("/leave/{event_id}", summary="Leave an event")
async def leave_event(event_id: str, events: Events, current_user: CurrentUser) -> dict:
    oid = parse_object_id(event_id, INVALID_EVENT_ID)
    event = await event_service.leave_event(events, oid, current_user.id)
    return envelope("Left event successfully", {"event": serialize(event)})


@router.put("/{event_id}", summary="Update an event")
async def update_event(
    event_id: str,
    body: EventUpdate,
    events: Events,
    current_user: CurrentUser,
) -> dict:
    """Replace only the fields present in the body."""
    oid = parse_object_id(event_id, INVALID_EVENT_ID)
    if await events.find_by_id(oid) is None:
        raise NotFound(event_service.EVENT_NOT_FOUND)
    updated = await events.update(oid, body)
    if updated is None:
        raise PersistenceError(event_service.UPDATE_FAILED)
    logger.info("Event %s updated by %s", oid, current_user.id)
    return envelope("Event updated successfully", {"event": serialize(updated)})


@router.delete("/{event_id}", summary="Delete an event")
async def delete_event(event_id: str, events: Events, current_user: CurrentUser) -> dict:
    oid = parse_object_id(event_id, INVALID_EVENT_ID)
    if await events.find_by_id(oid) is None:
        raise NotFound(event_service.EVENT_NOT_FOUND)
    await events.delete(oid)
    logger.info("Event %s deleted by %s", oid, current_user.id)
    return envelope("Event deleted successfully")

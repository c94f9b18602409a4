"""
Event persistence, including the guarded attendee updates used by join/leave.
"""

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from beanie import PydanticObjectId
from pymongo.errors import PyMongoError

from meetup.errors import Conflict, PersistenceError
from meetup.models.event import Event
from meetup.schemas.event import EventCreate, EventUpdate
from meetup.services.gateway import Gateway

logger = logging.getLogger(__name__)

ATTENDEES_EXCEED_CAPACITY = "Event capacity cannot be less than the number of attendees"


class EventGateway(Gateway[Event]):
    document_model = Event
    create_schema = EventCreate
    update_schema = EventUpdate
    entity = "event"
    entity_plural = "events"

    def _find_all_query(self):
        # Newest first
        return Event.find_all().sort(-Event.date)

    def _update_guard(self, changes: Mapping[str, Any]) -> dict:
        # attendees and capacity sent together are checked by EventUpdate
        if "attendees" in changes and "capacity" in changes:
            return {}
        if "attendees" in changes:
            return {"capacity": {"$gte": len(changes["attendees"])}}
        if "capacity" in changes:
            # at most capacity attendees: no element at index capacity
            return {f"attendees.{changes['capacity']}": {"$exists": False}}
        return {}

    async def _on_guard_failed(self, doc_id: PydanticObjectId, changes: Mapping[str, Any]) -> None:
        if await self.find_by_id(doc_id) is not None:
            logger.warning("Rejected update of event %s: %s", doc_id, ATTENDEES_EXCEED_CAPACITY)
            raise Conflict(ATTENDEES_EXCEED_CAPACITY)

    async def add_attendee(
        self,
        event_id: PydanticObjectId,
        user_id: PydanticObjectId,
        capacity: int,
    ) -> Optional[Event]:
        """
        Append user_id only if it is absent, capacity is still the value the
        caller checked against, and slot capacity-1 is empty. Returns None
        when any guard fails or the event is gone.
        """
        query = {
            "_id": event_id,
            "capacity": capacity,
            "attendees": {"$ne": user_id},
            f"attendees.{capacity - 1}": {"$exists": False},
        }
        update = {
            "$push": {"attendees": user_id},
            "$set": {"updated_at": datetime.utcnow()},
        }
        return await self._apply_update(query, update)

    async def remove_attendee(
        self,
        event_id: PydanticObjectId,
        user_id: PydanticObjectId,
    ) -> Optional[Event]:
        """Pull user_id if present; None when not an attendee or event gone."""
        query = {"_id": event_id, "attendees": user_id}
        update = {
            "$pull": {"attendees": user_id},
            "$set": {"updated_at": datetime.utcnow()},
        }
        return await self._apply_update(query, update)

    async def remove_attendee_everywhere(self, user_id: PydanticObjectId) -> int:
        """Drop user_id from every attendee list; returns events modified."""
        try:
            result = await Event.find({"attendees": user_id}).update_many(
                {
                    "$pull": {"attendees": user_id},
                    "$set": {"updated_at": datetime.utcnow()},
                }
            )
        except PyMongoError as e:
            logger.exception("Error removing attendee %s from events: %s", user_id, e)
            raise PersistenceError("Failed to update events") from e
        modified = getattr(result, "modified_count", 0) or 0
        if modified:
            logger.info("Removed user %s from %d event(s)", user_id, modified)
        return modified

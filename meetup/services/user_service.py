"""
Account removal.

Deleting a user first drops them from every event's attendee list so no event
keeps a dangling membership. Events the user created are left in place.
"""

import logging

from beanie import PydanticObjectId

from meetup.services.event_gateway import EventGateway
from meetup.services.user_gateway import UserGateway

logger = logging.getLogger(__name__)


async def delete_user(
    users: UserGateway,
    events: EventGateway,
    user_id: PydanticObjectId,
) -> None:
    # Memberships first: a failure here leaves the user in place for a retry
    await events.remove_attendee_everywhere(user_id)
    await users.delete(user_id)
    logger.info("Deleted account %s", user_id)

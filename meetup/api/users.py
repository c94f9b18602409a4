"""
User APIs.

GET /users/profile returns the caller; POST /users updates the caller's own
profile; DELETE /users removes the caller's account.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from meetup.api.auth import CurrentUser
from meetup.api.deps import get_event_gateway, get_user_gateway, parse_object_id
from meetup.api.responses import envelope, serialize
from meetup.errors import NotFound, PersistenceError
from meetup.schemas.user import UserUpdate
from meetup.services import user_service
from meetup.services.event_gateway import EventGateway
from meetup.services.user_gateway import UserGateway

logger = logging.getLogger(__name__)
router = APIRouter()

INVALID_USER_ID = "Invalid user id"
USER_NOT_FOUND = "User not found"

Users = Annotated[UserGateway, Depends(get_user_gateway)]
Events = Annotated[EventGateway, Depends(get_event_gateway)]


@router.get("", summary="List users")
async def list_users(users: Users) -> dict:
    found = await users.find_all()
    return envelope("Users fetched successfully", {"users": [serialize(u) for u in found]})


@router.get("/profile", summary="Get the caller's profile")
async def get_profile(current_user: CurrentUser) -> dict:
    return envelope("Profile fetched successfully", {"user": serialize(current_user)})


@router.post("", summary="Update the caller's profile")
async def update_profile(body: UserUpdate, users: Users, current_user: CurrentUser) -> dict:
    updated = await users.update(current_user.id, body)
    if updated is None:
        raise NotFound(USER_NOT_FOUND)
    return envelope("Profile updated successfully", {"user": serialize(updated)})


@router.delete("", summary="Delete the caller's account")
async def delete_account(users: Users, events: Events, current_user: CurrentUser) -> dict:
    await user_service.delete_user(users, events, current_user.id)
    return envelope("Account deleted successfully")


@router.get("/{user_id}", summary="Get a user")
async def get_user(user_id: str, users: Users) -> dict:
    oid = parse_object_id(user_id, INVALID_USER_ID)
    user = await users.find_by_id(oid)
    if user is None:
        raise NotFound(USER_NOT_FOUND)
    return envelope("User fetched successfully", {"user": serialize(user)})


@router.put("/{user_id}", summary="Update a user")
async def update_user(
    user_id: str,
    body: UserUpdate,
    users: Users,
    current_user: CurrentUser,
) -> dict:
    oid = parse_object_id(user_id, INVALID_USER_ID)
    if await users.find_by_id(oid) is None:
        raise NotFound(USER_NOT_FOUND)
    updated = await users.update(oid, body)
    if updated is None:
        raise PersistenceError("Failed to update user")
    logger.info("User %s updated by %s", oid, current_user.id)
    return envelope("User updated successfully", {"user": serialize(updated)})


@router.delete("/{user_id}", summary="Delete a user by id")
async def delete_user(user_id: str, users: Users, events: Events) -> dict:
    """Administrative delete; no credential required."""
    oid = parse_object_id(user_id, INVALID_USER_ID)
    if await users.find_by_id(oid) is None:
        raise NotFound(USER_NOT_FOUND)
    await user_service.delete_user(users, events, oid)
    return envelope("User deleted successfully")

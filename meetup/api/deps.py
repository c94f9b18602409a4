"""
Request-scoped dependencies: gateways from app.state and path id parsing.
"""

from beanie import PydanticObjectId
from bson import ObjectId
from fastapi import Request

from meetup.errors import ValidationError
from meetup.services.event_gateway import EventGateway
from meetup.services.user_gateway import UserGateway


def get_event_gateway(request: Request) -> EventGateway:
    return request.app.state.event_gateway


def get_user_gateway(request: Request) -> UserGateway:
    return request.app.state.user_gateway


def parse_object_id(value: str, message: str) -> PydanticObjectId:
    """Reject malformed ids with a 400 before they reach a gateway."""
    if not ObjectId.is_valid(value):
        raise ValidationError(message)
    return PydanticObjectId(value)

"""Beanie document models."""

from meetup.models.event import Event
from meetup.models.user import SkillLevel, User

__all__ = ["User", "Event", "SkillLevel"]

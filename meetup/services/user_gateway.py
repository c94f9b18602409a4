"""
User persistence.
"""

import logging
from typing import Optional

from pymongo.errors import DuplicateKeyError, PyMongoError

from meetup.errors import Conflict, PersistenceError
from meetup.models.user import User
from meetup.schemas.user import UserCreate, UserUpdate
from meetup.services.gateway import Gateway

logger = logging.getLogger(__name__)


class UserGateway(Gateway[User]):
    document_model = User
    create_schema = UserCreate
    update_schema = UserUpdate
    entity = "user"
    entity_plural = "users"

    def _handle_create_error(self, error: PyMongoError) -> None:
        # email and google_id carry unique indexes
        if isinstance(error, DuplicateKeyError):
            logger.warning("Duplicate user rejected: %s", error)
            raise Conflict("User already exists") from error

    async def find_by_google_id(self, google_id: str) -> Optional[User]:
        try:
            return await User.find_one({"google_id": google_id})
        except PyMongoError as e:
            logger.exception("Error finding user by google id: %s", e)
            raise PersistenceError("Failed to find user") from e

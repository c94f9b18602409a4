"""
Persistence gateway shared by the User and Event collections.

A gateway validates payloads against the entity's create/update schemas and
wraps Beanie calls, turning driver failures into PersistenceError with a
fixed, entity-specific message. "Not found" is never an error here: lookups
and updates return None instead.
"""

import logging
from datetime import datetime
from typing import Any, ClassVar, Generic, List, Mapping, Optional, Type, TypeVar

from beanie import Document, PydanticObjectId, UpdateResponse
from pydantic import BaseModel
from pymongo.errors import PyMongoError

from meetup.errors import PersistenceError
from meetup.schemas.validation import parse_payload

logger = logging.getLogger(__name__)

DocT = TypeVar("DocT", bound=Document)

INVALID_DATA_MESSAGE = "Invalid update data"


class Gateway(Generic[DocT]):
    """CRUD operations for one document collection."""

    document_model: ClassVar[Type[Document]]
    create_schema: ClassVar[Type[BaseModel]]
    update_schema: ClassVar[Type[BaseModel]]
    entity: ClassVar[str]
    entity_plural: ClassVar[str]

    async def create(self, data: Any) -> DocT:
        validated = parse_payload(self.create_schema, data, INVALID_DATA_MESSAGE)
        doc = self.document_model(**validated.model_dump())
        try:
            await doc.insert()
        except PyMongoError as e:
            self._handle_create_error(e)
            logger.exception("Error creating %s: %s", self.entity, e)
            raise PersistenceError(f"Failed to create {self.entity}") from e
        logger.info("Created %s %s", self.entity, doc.id)
        return doc

    def _handle_create_error(self, error: PyMongoError) -> None:
        """Hook for subclasses to map specific driver errors on insert."""

    async def update(self, doc_id: PydanticObjectId, data: Any) -> Optional[DocT]:
        validated = parse_payload(self.update_schema, data, INVALID_DATA_MESSAGE)
        changes = validated.model_dump(exclude_unset=True)
        if not changes:
            return await self.find_by_id(doc_id)
        guard = self._update_guard(changes)
        updated = await self._apply_update(
            {"_id": doc_id, **guard},
            {"$set": {**changes, "updated_at": datetime.utcnow()}},
        )
        if updated is None and guard:
            await self._on_guard_failed(doc_id, changes)
        return updated

    def _update_guard(self, changes: Mapping[str, Any]) -> dict:
        """Extra filter conditions the stored document must meet for an update."""
        return {}

    async def _on_guard_failed(self, doc_id: PydanticObjectId, changes: Mapping[str, Any]) -> None:
        """Called when a guarded update matched nothing; may raise."""

    async def _apply_update(
        self,
        query: Mapping[str, Any],
        update: Mapping[str, Any],
    ) -> Optional[DocT]:
        """Run one atomic find-and-modify; None when the query matches nothing."""
        try:
            return await self.document_model.find_one(query).update(
                update,
                response_type=UpdateResponse.NEW_DOCUMENT,
            )
        except PyMongoError as e:
            logger.exception("Error updating %s: %s", self.entity, e)
            raise PersistenceError(f"Failed to update {self.entity}") from e

    async def delete(self, doc_id: PydanticObjectId) -> None:
        try:
            await self.document_model.find_one({"_id": doc_id}).delete()
        except PyMongoError as e:
            logger.exception("Error deleting %s: %s", self.entity, e)
            raise PersistenceError(f"Failed to delete {self.entity}") from e
        logger.info("Deleted %s %s", self.entity, doc_id)

    async def find_by_id(self, doc_id: PydanticObjectId) -> Optional[DocT]:
        try:
            return await self.document_model.get(doc_id)
        except PyMongoError as e:
            logger.exception("Error finding %s by id: %s", self.entity, e)
            raise PersistenceError(f"Failed to find {self.entity}") from e

    async def find_all(self) -> List[DocT]:
        try:
            return await self._find_all_query().to_list()
        except PyMongoError as e:
            logger.exception("Error fetching all %s: %s", self.entity_plural, e)
            raise PersistenceError(f"Failed to fetch {self.entity_plural}") from e

    def _find_all_query(self):
        return self.document_model.find_all()

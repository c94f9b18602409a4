"""
Uniform JSON envelope: {"message": ..., "data": {...}} on success.
"""

from typing import Any, Optional

from beanie import Document


def serialize(doc: Document) -> dict:
    """JSON-safe dict of a document; ObjectIds and datetimes become strings."""
    data = doc.model_dump(mode="json", exclude={"id", "revision_id"})
    data["id"] = str(doc.id)
    return data


def envelope(message: str, data: Optional[dict] = None) -> dict:
    body: dict[str, Any] = {"message": message}
    if data is not None:
        body["data"] = data
    return body

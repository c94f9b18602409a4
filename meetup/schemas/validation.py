"""
Schema parsing shared by gateways and the request-validation handler.
"""

from typing import Any, ClassVar, Iterable, List, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic import ValidationError as PydanticValidationError

from meetup.errors import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class PayloadSchema(BaseModel):
    """Base for payload schemas: trims strings, ignores unknown keys."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


class PartialPayloadSchema(PayloadSchema):
    """
    Update schema: every field is optional, but fields listed in
    non_nullable may not be sent as an explicit null.
    """

    non_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulled = [
            name for name in self.non_nullable
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"{', '.join(nulled)} cannot be null")
        return self


def format_errors(errors: Iterable[Mapping[str, Any]]) -> List[str]:
    """Render pydantic error dicts as "field: reason" strings."""
    formatted: List[str] = []
    for err in errors:
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        msg = err.get("msg", "invalid value")
        formatted.append(f"{loc}: {msg}" if loc else msg)
    return formatted


def parse_payload(
    schema: Type[SchemaT],
    payload: Any,
    message: Optional[str] = None,
) -> SchemaT:
    """
    Validate payload against schema, raising ValidationError listing every
    violated field. Model instances are re-validated from their set fields.
    """
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(message, errors=format_errors(e.errors())) from e

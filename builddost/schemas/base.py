"""Base schema: snake_case attributes, camelCase JSON."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every wire-facing schema.

    Inbound payloads may use either the camelCase alias or the field name;
    FastAPI serializes responses by alias.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ExtensibleModel(CamelModel):
    """Typed bag that keeps unknown keys for forward compatibility."""

    model_config = ConfigDict(extra="allow")

"""Common pydantic configuration for request and response bodies.

JSON field names are camelCase on the wire (``prepTime``, ``categoryId``)
while the Python attributes stay snake_case; input is accepted under either
name.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


_CAMEL_CASE = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    serialize_by_alias=True,
    use_enum_values=True,
    validate_default=True,
    validate_assignment=True,
)


class APIRequest(BaseModel):
    """Body or query model sent by a client; unknown keys are dropped."""

    model_config = ConfigDict(**_CAMEL_CASE, extra="ignore")


class APIResponse(BaseModel):
    """Body returned to a client; every field must be declared."""

    model_config = ConfigDict(**_CAMEL_CASE, extra="forbid")

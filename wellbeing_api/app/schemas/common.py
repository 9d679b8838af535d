"""
Shared pydantic building blocks.

The public API speaks camelCase while the store and the Python code use
snake_case.  ``CamelModel`` bridges the two: fields are declared in
snake_case, accepted from clients by their camelCase alias (or by
name) and serialised by alias in responses.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class OkResponse(CamelModel):
    """Acknowledgement returned by write endpoints with no payload."""

    ok: bool = True

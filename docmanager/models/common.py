"""
Common response models and utilities.

Base schema with camelCase aliases plus a plain message wrapper.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CamelModel(BaseModel):
    """
    Base schema serialized with camelCase keys.

    Requests accept either camelCase or snake_case field names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


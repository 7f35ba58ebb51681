"""
Base model for rows received from the server.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

__all__ = [
    "BaseRowModel",
]


class BaseRowModel(BaseModel):
    """
    Row as received from the server: camelCase on the wire, snake_case in
    Python. Either form is accepted when validating.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

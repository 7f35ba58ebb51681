from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import field_validator

from ..model import BaseRowModel

__all__ = [
    "AttributeType",
    "Attribute",
]


class AttributeType(StrEnum):
    """
    Type of attribute.
    """

    LABEL = "label"
    """Tag, optionally carrying a value"""

    LABEL_DEFINITION = "label-definition"
    """Definition (promoted attribute) of a label"""

    RELATION = "relation"
    """Named edge whose value is a target note id"""

    RELATION_DEFINITION = "relation-definition"
    """Definition (promoted attribute) of a relation"""


class Attribute(BaseRowModel):
    """
    Encapsulates an attribute, a typed key-value record attached to a note.

    Attributes are immutable once loaded; the {obj}`TreeCache` replaces the
    instance when the owning note is refreshed. Notes reference attributes by
    id only.
    """

    attribute_id: str
    """Unique id"""

    note_id: str
    """Id of note which owns this attribute"""

    type: AttributeType
    """Attribute type"""

    name: str
    """Attribute name"""

    value: str = ""
    """Label value, or target note id for relations"""

    is_inheritable: bool = False
    """Whether attribute propagates to children"""

    position: int = 0
    """Position among the owning note's attributes"""

    @field_validator("value", mode="before")
    @classmethod
    def validate_value(cls, value: Any) -> Any:
        return "" if value is None else value

    def __str__(self):
        prefix = "~" if self.is_relation else "#"
        value = f"={self.value}" if self.value else ""
        return f"{prefix}{self.name}{value}"

    @property
    def is_label(self) -> bool:
        return self.type in {
            AttributeType.LABEL,
            AttributeType.LABEL_DEFINITION,
        }

    @property
    def is_relation(self) -> bool:
        return self.type in {
            AttributeType.RELATION,
            AttributeType.RELATION_DEFINITION,
        }

    @property
    def target_note_id(self) -> str | None:
        """
        Id of note this relation points at, or `None`{l=python} for labels
        and relations with an empty value.
        """
        if self.type is not AttributeType.RELATION or not self.value:
            return None
        return self.value

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ...attribute import Attribute, AttributeType

__all__ = [
    "AttributeFilter",
]


@dataclass(frozen=True)
class AttributeFilter:
    """
    Query options for attribute lookups. A field set to `None`{l=python}
    places no constraint on the attributes matched.
    """

    type: AttributeType | None = None
    name: str | None = None

    @classmethod
    def create(
        cls, attribute_type: AttributeType | str | None, name: str | None
    ) -> AttributeFilter:
        """
        Create filter, normalizing type given as string.

        :raises ValueError: Unknown attribute type
        """
        return cls(
            type=None if attribute_type is None else AttributeType(attribute_type),
            name=name,
        )

    def matches(self, attribute: Attribute) -> bool:
        if self.type is not None and attribute.type is not self.type:
            return False
        if self.name is not None and attribute.name != self.name:
            return False
        return True

    def apply(self, attributes: Iterable[Attribute]) -> list[Attribute]:
        """
        Return matching attributes, preserving order.
        """
        return [a for a in attributes if self.matches(a)]

from __future__ import annotations

from typing import TYPE_CHECKING

from ...attribute import Attribute, AttributeType
from .attributes import AttributesMixin

if TYPE_CHECKING:
    from ...cache import NoteStore

__all__ = [
    "LabelsMixin",
]

LABEL = AttributeType.LABEL
LABEL_DEFINITION = AttributeType.LABEL_DEFINITION


class LabelsMixin(AttributesMixin):
    """
    Accessors for labels. Owned variants are synchronous and exclude
    inherited labels.
    """

    def get_owned_labels(
        self, cache: NoteStore, name: str | None = None
    ) -> list[Attribute]:
        """
        Get labels owned by this note, optionally filtered by name.
        """
        return self.get_owned_attributes(cache, LABEL, name)

    async def get_labels(
        self, cache: NoteStore, name: str | None = None
    ) -> list[Attribute]:
        """
        Get labels including inherited ones, optionally filtered by name.
        """
        return await self.get_attributes(cache, LABEL, name)

    async def get_label_definitions(
        self, cache: NoteStore, name: str | None = None
    ) -> list[Attribute]:
        return await self.get_attributes(cache, LABEL_DEFINITION, name)

    def has_owned_label(self, cache: NoteStore, name: str) -> bool:
        return self.has_owned_attribute(cache, LABEL, name)

    async def has_label(self, cache: NoteStore, name: str) -> bool:
        return await self.has_attribute(cache, LABEL, name)

    def get_owned_label(self, cache: NoteStore, name: str) -> Attribute | None:
        return self.get_owned_attribute(cache, LABEL, name)

    async def get_label(self, cache: NoteStore, name: str) -> Attribute | None:
        return await self.get_attribute(cache, LABEL, name)

    def get_owned_label_value(self, cache: NoteStore, name: str) -> str | None:
        """
        Get value of first owned label with provided name, or `None`.
        """
        return self.get_owned_attribute_value(cache, LABEL, name)

    async def get_label_value(self, cache: NoteStore, name: str) -> str | None:
        """
        Get value of first label with provided name including inherited
        ones, or `None`.
        """
        return await self.get_attribute_value(cache, LABEL, name)

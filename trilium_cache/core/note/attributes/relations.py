from __future__ import annotations

from typing import TYPE_CHECKING

from ...attribute import Attribute, AttributeType
from .attributes import AttributesMixin

if TYPE_CHECKING:
    from ...cache import NoteStore
    from ..note import Note

__all__ = [
    "RelationsMixin",
]

RELATION = AttributeType.RELATION
RELATION_DEFINITION = AttributeType.RELATION_DEFINITION


class RelationsMixin(AttributesMixin):
    """
    Accessors for relations and their target notes.
    """

    def get_owned_relations(
        self, cache: NoteStore, name: str | None = None
    ) -> list[Attribute]:
        return self.get_owned_attributes(cache, RELATION, name)

    async def get_relations(
        self, cache: NoteStore, name: str | None = None
    ) -> list[Attribute]:
        return await self.get_attributes(cache, RELATION, name)

    async def get_relation_definitions(
        self, cache: NoteStore, name: str | None = None
    ) -> list[Attribute]:
        return await self.get_attributes(cache, RELATION_DEFINITION, name)

    def has_owned_relation(self, cache: NoteStore, name: str) -> bool:
        return self.has_owned_attribute(cache, RELATION, name)

    async def has_relation(self, cache: NoteStore, name: str) -> bool:
        return await self.has_attribute(cache, RELATION, name)

    def get_owned_relation(
        self, cache: NoteStore, name: str
    ) -> Attribute | None:
        return self.get_owned_attribute(cache, RELATION, name)

    async def get_relation(
        self, cache: NoteStore, name: str
    ) -> Attribute | None:
        return await self.get_attribute(cache, RELATION, name)

    def get_owned_relation_value(
        self, cache: NoteStore, name: str
    ) -> str | None:
        return self.get_owned_attribute_value(cache, RELATION, name)

    async def get_relation_value(
        self, cache: NoteStore, name: str
    ) -> str | None:
        return await self.get_attribute_value(cache, RELATION, name)

    async def get_relation_target(
        self, cache: NoteStore, name: str | None = None
    ) -> Note | None:
        """
        Get target note of first relation with provided name, or `None` if
        there's no such relation or its target doesn't exist.
        """
        targets = await self.get_relation_targets(cache, name)
        return targets[0] if len(targets) else None

    async def get_relation_targets(
        self, cache: NoteStore, name: str | None = None
    ) -> list[Note | None]:
        """
        Get target notes of relations including inherited ones, in relation
        order. A relation whose target doesn't exist or is deleted yields
        `None` in its place.
        """
        targets: list[Note | None] = []

        for relation in await self.get_relations(cache, name):
            note = await cache.get_note(relation.value, silent=True)
            targets.append(None if note is None or note.is_deleted else note)

        return targets

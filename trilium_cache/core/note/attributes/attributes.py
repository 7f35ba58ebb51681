from __future__ import annotations

import asyncio
import itertools
from typing import TYPE_CHECKING

from ...attribute import Attribute, AttributeType
from ...utils import ROOT_NOTE_ID, TEMPLATE_RELATION
from ._filters import AttributeFilter

if TYPE_CHECKING:
    from ...cache import NoteStore
    from ..note import Note

__all__ = [
    "AttributesMixin",
]


class AttributesMixin:
    """
    Attribute resolution for a note.

    Attributes visible to a note come from three sources, concatenated in
    this order:

    1. Owned attributes
    2. All attributes of each note targeted by an owned `~template` relation,
    regardless of inheritability
    3. Inheritable attributes of each parent note, unless this is the root
    note

    Nothing is memoized; each call resolves against the current state of
    the store.
    """

    note_id: str
    attributes: list[str]
    target_relations: list[str]
    parents: list[str]

    _attribute_cache: list[Attribute] | None = None

    def get_owned_attributes(
        self,
        cache: NoteStore,
        attribute_type: AttributeType | str | None = None,
        name: str | None = None,
    ) -> list[Attribute]:
        """
        Get attributes owned by this note, optionally filtered by type and/or
        name. Ids which no longer resolve are skipped.
        """
        attributes = [
            attribute
            for attribute_id in self.attributes
            if (attribute := cache.attributes.get(attribute_id)) is not None
        ]

        return AttributeFilter.create(attribute_type, name).apply(attributes)

    async def get_attributes(
        self,
        cache: NoteStore,
        attribute_type: AttributeType | str | None = None,
        name: str | None = None,
    ) -> list[Attribute]:
        """
        Get owned, templated and inherited attributes, optionally filtered
        by type and/or name. Fetches notes as needed.
        """
        attributes = await self._resolve_attributes(cache, frozenset())
        return AttributeFilter.create(attribute_type, name).apply(attributes)

    async def get_inheritable_attributes(
        self, cache: NoteStore
    ) -> list[Attribute]:
        """
        Get attributes which this note propagates to its children.
        """
        return await self._resolve_inheritable(cache, frozenset())

    def get_owned_attribute(
        self,
        cache: NoteStore,
        attribute_type: AttributeType | str | None,
        name: str | None,
    ) -> Attribute | None:
        """
        Get first owned attribute with provided type and name, or `None`
        if no such attribute exists.
        """
        attributes = self.get_owned_attributes(cache, attribute_type, name)
        return attributes[0] if len(attributes) else None

    async def get_attribute(
        self,
        cache: NoteStore,
        attribute_type: AttributeType | str | None,
        name: str | None,
    ) -> Attribute | None:
        """
        Get first attribute with provided type and name, including
        inherited ones, or `None` if no such attribute exists.
        """
        attributes = await self.get_attributes(cache, attribute_type, name)
        return attributes[0] if len(attributes) else None

    def has_owned_attribute(
        self,
        cache: NoteStore,
        attribute_type: AttributeType | str | None,
        name: str | None,
    ) -> bool:
        return self.get_owned_attribute(cache, attribute_type, name) is not None

    async def has_attribute(
        self,
        cache: NoteStore,
        attribute_type: AttributeType | str | None,
        name: str | None,
    ) -> bool:
        return (await self.get_attribute(cache, attribute_type, name)) is not None

    def get_owned_attribute_value(
        self,
        cache: NoteStore,
        attribute_type: AttributeType | str | None,
        name: str | None,
    ) -> str | None:
        attribute = self.get_owned_attribute(cache, attribute_type, name)
        return None if attribute is None else attribute.value

    async def get_attribute_value(
        self,
        cache: NoteStore,
        attribute_type: AttributeType | str | None,
        name: str | None,
    ) -> str | None:
        attribute = await self.get_attribute(cache, attribute_type, name)
        return None if attribute is None else attribute.value

    def get_target_relations(self, cache: NoteStore) -> list[Attribute]:
        """
        Get relations of other notes which target this note.
        """
        return [
            attribute
            for attribute_id in self.target_relations
            if (attribute := cache.attributes.get(attribute_id)) is not None
        ]

    def invalidate_attribute_cache(self):
        """
        Clear note's attribute cache to force a fresh resolution for the next
        attribute request. Invoked by the tree cache when the note is
        refreshed.
        """
        self._attribute_cache = None

    async def _resolve_attributes(
        self, cache: NoteStore, path: frozenset[str]
    ) -> list[Attribute]:
        """
        Resolve all attributes given the ids of notes currently being
        resolved further up the template/parent chain. A note reached again
        on its own chain contributes nothing.
        """
        if self.note_id in path:
            cache.logger.debug(
                f"Inheritance cycle at note '{self.note_id}', skipping"
            )
            return []

        path = path | {self.note_id}
        owned = self.get_owned_attributes(cache)

        template_ids = [
            attribute.value
            for attribute in owned
            if attribute.type is AttributeType.RELATION
            and attribute.name == TEMPLATE_RELATION
        ]

        parents: list[Note] = (
            []
            if self.note_id == ROOT_NOTE_ID
            else await cache.get_notes(self.parents)
        )

        async def resolve_template(note_id: str) -> list[Attribute]:
            template = await cache.get_note(note_id)
            if template is None:
                return []
            return await template._resolve_attributes(cache, path)

        # sub-resolutions only read the store, so issue them concurrently
        results = await asyncio.gather(
            *[resolve_template(note_id) for note_id in template_ids],
            *[parent._resolve_inheritable(cache, path) for parent in parents],
        )

        return list(itertools.chain(owned, *results))

    async def _resolve_inheritable(
        self, cache: NoteStore, path: frozenset[str]
    ) -> list[Attribute]:
        attributes = await self._resolve_attributes(cache, path)
        return [a for a in attributes if a.is_inheritable]

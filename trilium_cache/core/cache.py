"""
Implements the client-side cache of notes, branches and attributes.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from logging import Logger
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, TypeVar

from .attribute import Attribute, AttributeType
from .branch import Branch
from .note.model import NoteRow
from .note.note import Note
from .utils import NONE_NOTE_ID, NOTE_TYPES

if TYPE_CHECKING:
    from pydantic import BaseModel

    from .server import Server

__all__ = [
    "NoteStore",
    "TreeCache",
]

Row: TypeAlias = "Mapping[str, Any] | BaseModel"

ModelT = TypeVar("ModelT", bound="BaseModel")


class NoteStore(Protocol):
    """
    Read-only interface to the store which owns all entities. Passed
    explicitly to {obj}`Note` methods which need to resolve ids.
    """

    attributes: dict[str, Attribute]

    @property
    def server(self) -> Server:
        ...

    @property
    def logger(self) -> Logger:
        ...

    async def get_note(
        self, note_id: str | None, *, silent: bool = False
    ) -> Note | None:
        ...

    async def get_notes(
        self, note_ids: Iterable[str], *, silent: bool = False
    ) -> list[Note]:
        ...

    def get_branch(
        self, branch_id: str, *, silent: bool = False
    ) -> Branch | None:
        ...

    async def get_branches(self, branch_ids: Iterable[str]) -> list[Branch]:
        ...


class TreeCache:
    """
    Single owner of all {obj}`Note`, {obj}`Branch` and {obj}`Attribute`
    instances, keyed by id. Notes missing from the cache are fetched from
    the server on demand; concurrent requests for the same note share one
    fetch.
    """

    notes: dict[str, Note]
    """Mapping of note id to note"""

    branches: dict[str, Branch]
    """Mapping of branch id to branch"""

    attributes: dict[str, Attribute]
    """Mapping of attribute id to attribute"""

    _server: Server
    _logger: Logger

    _pending: dict[str, asyncio.Task[None]]
    """In-flight fetches by note id"""

    def __init__(self, server: Server, *, logger: Logger | None = None):
        """
        :param server: Server from which to fetch missing notes and content
        :param logger: Logger to use, or `None` to use default logger
        """
        self._server = server
        self._logger = logger or logging.getLogger()
        self._pending = dict()

        self.notes = dict()
        self.branches = dict()
        self.attributes = dict()

    def __str__(self):
        return f"TreeCache: notes={len(self.notes)}, branches={len(self.branches)}, attributes={len(self.attributes)}"

    @property
    def server(self) -> Server:
        return self._server

    @property
    def logger(self) -> Logger:
        return self._logger

    def load(
        self,
        note_rows: Iterable[Row],
        branch_rows: Iterable[Row],
        attribute_rows: Iterable[Row] = (),
    ):
        """
        Discard all cached entities and populate from provided rows.
        """
        self.notes = dict()
        self.branches = dict()
        self.attributes = dict()

        self.add_resp(note_rows, branch_rows, attribute_rows)

    def add_resp(
        self,
        note_rows: Iterable[Row],
        branch_rows: Iterable[Row],
        attribute_rows: Iterable[Row] = (),
    ):
        """
        Merge rows as returned by the server into the cache.

        Existing notes are updated in place; their owned attribute ids are
        replaced by the attributes in this response. Branches are linked to
        already-cached parents and children.
        """
        notes = [_validate(NoteRow, row) for row in note_rows]
        branches = [_validate(Branch, row) for row in branch_rows]
        attributes = [_validate(Attribute, row) for row in attribute_rows]

        self._logger.debug(
            f"Adding to cache: {len(notes)} notes, {len(branches)} branches, {len(attributes)} attributes"
        )

        created: list[Note] = []

        for note_row in notes:
            if note_row.type not in NOTE_TYPES:
                self._logger.warning(
                    f"Unknown type '{note_row.type}' of note '{note_row.note_id}'"
                )

            note = self.notes.get(note_row.note_id)

            if note is None:
                note = Note(note_row)
                self.notes[note.note_id] = note
                created.append(note)
            else:
                note.update(note_row)

                # attributes are re-added below
                for attribute_id in note.attributes:
                    self.attributes.pop(attribute_id, None)
                note.attributes = []
                note.invalidate_attribute_cache()

        for branch in branches:
            self.branches[branch.branch_id] = branch
            self._link_branch(branch)

        created_ids = {note.note_id for note in created}

        if len(created_ids):
            # link branches and relations loaded earlier which refer to
            # newly created notes
            for branch in self.branches.values():
                if (
                    branch.child_note_id in created_ids
                    or branch.parent_note_id in created_ids
                ):
                    self._link_branch(branch)

            for attribute in self.attributes.values():
                target_note_id = attribute.target_note_id
                if target_note_id in created_ids:
                    _append_unique(
                        self.notes[target_note_id].target_relations,
                        attribute.attribute_id,
                    )

        for attribute in attributes:
            self._add_attribute(attribute)

    def get_note_from_cache(self, note_id: str) -> Note | None:
        """
        Get note if already cached, without fetching.
        """
        return self.notes.get(note_id)

    async def get_note(
        self, note_id: str | None, *, silent: bool = False
    ) -> Note | None:
        """
        Get note by id, fetching it if not cached.

        :param note_id: Note id
        :param silent: Don't log an error if note can't be found
        :returns: Note, or `None`{l=python} if it doesn't exist
        """
        if note_id == NONE_NOTE_ID:
            return None

        if not note_id:
            if not silent:
                self._logger.error("Empty note_id")
            return None

        notes = await self.get_notes([note_id], silent=silent)
        return notes[0] if len(notes) else None

    async def get_notes(
        self, note_ids: Iterable[str], *, silent: bool = False
    ) -> list[Note]:
        """
        Get notes by id, fetching all missing ones in a single request.

        Notes which can't be found are omitted from the result.

        :param note_ids: Note ids
        :param silent: Don't log an error for notes which can't be found
        """
        note_ids = list(note_ids)

        missing = [
            note_id
            for note_id in dict.fromkeys(note_ids)
            if note_id not in self.notes
        ]

        if len(missing):
            await self.reload_notes(missing)

        notes: list[Note] = []

        for note_id in note_ids:
            note = self.notes.get(note_id)

            if note is None:
                if not silent:
                    self._logger.error(f"Can't find note '{note_id}'")
                continue

            notes.append(note)

        return notes

    def get_branch(
        self, branch_id: str, *, silent: bool = False
    ) -> Branch | None:
        """
        Get cached branch by id.

        :param silent: Don't log an error if branch isn't cached
        """
        branch = self.branches.get(branch_id)

        if branch is None and not silent:
            self._logger.error(f"Not existing branch '{branch_id}'")

        return branch

    async def get_branches(self, branch_ids: Iterable[str]) -> list[Branch]:
        """
        Get cached branches by id, omitting any which aren't cached.
        """
        branches = [self.get_branch(branch_id) for branch_id in branch_ids]
        return [branch for branch in branches if branch is not None]

    def delete_branch(self, branch_id: str):
        """
        Remove branch from cache and unlink its parent and child notes.
        No-op if branch isn't cached.
        """
        branch = self.branches.pop(branch_id, None)

        if branch is None:
            return

        self._logger.debug(f"Deleting from cache: {branch}")

        child = self.notes.get(branch.child_note_id)
        if child is not None:
            child.remove_parent(branch.parent_note_id)

        parent = self.notes.get(branch.parent_note_id)
        if parent is not None:
            parent.remove_child(branch.child_note_id)

    async def reload_notes(self, note_ids: Iterable[str]):
        """
        Fetch notes along with their branches and attributes from the
        server and merge them into the cache. Notes already being fetched
        are awaited rather than requested again.
        """
        note_ids = list(dict.fromkeys(note_ids))

        waits: set[asyncio.Task[None]] = {
            self._pending[note_id]
            for note_id in note_ids
            if note_id in self._pending
        }
        fetch_ids = [
            note_id for note_id in note_ids if note_id not in self._pending
        ]

        if len(fetch_ids):
            task = asyncio.create_task(self._fetch(fetch_ids))

            for note_id in fetch_ids:
                self._pending[note_id] = task

            waits.add(task)

        # a cancelled caller leaves the shared fetch running for other callers
        await asyncio.shield(asyncio.gather(*waits))

    async def _fetch(self, note_ids: list[str]):
        self._logger.debug(f"Loading notes: {note_ids}")

        try:
            resp = await self._server.post("tree/load", {"noteIds": note_ids})
        finally:
            for note_id in note_ids:
                self._pending.pop(note_id, None)

        self.add_resp(
            resp.get("notes", []),
            resp.get("branches", []),
            resp.get("attributes", []),
        )

    def _link_branch(self, branch: Branch):
        child = self.notes.get(branch.child_note_id)
        if child is not None:
            child.add_parent(branch.parent_note_id, branch.branch_id)

        parent = self.notes.get(branch.parent_note_id)
        if parent is not None:
            parent.add_child(self, branch.child_note_id, branch.branch_id)

    def _add_attribute(self, attribute: Attribute):
        self.attributes[attribute.attribute_id] = attribute

        owner = self.notes.get(attribute.note_id)
        if owner is not None:
            _append_unique(owner.attributes, attribute.attribute_id)

        if attribute.type is AttributeType.RELATION:
            target = self.notes.get(attribute.value)
            if target is not None:
                _append_unique(target.target_relations, attribute.attribute_id)


def _validate(model_cls: type[ModelT], row: Row) -> ModelT:
    if isinstance(row, model_cls):
        return row
    return model_cls.model_validate(row)


def _append_unique(ids: list[str], id_: str):
    if id_ not in ids:
        ids.append(id_)

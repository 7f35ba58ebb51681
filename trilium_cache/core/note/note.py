from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .attributes.labels import LabelsMixin
from .attributes.relations import RelationsMixin
from .branches import BranchesMixin
from .content import ContentMixin
from .model import NoteRow

__all__ = [
    "Note",
]


class Note(LabelsMixin, RelationsMixin, BranchesMixin, ContentMixin):
    """
    Client-side representation of a note as kept in the {obj}`TreeCache`.

    A note references attributes, branches and other notes by id only; the
    store which owns them is passed to each method that resolves ids. The
    same instance is updated in place when the note is refreshed.
    """

    note_id: str
    title: str
    content_length: int
    is_protected: bool
    type: str
    """One of `text`, `code`, `file`, `render`, ..."""
    mime: str
    """Content type, e.g. `application/json`"""
    is_deleted: bool

    attributes: list[str]
    """Ids of owned attributes"""

    target_relations: list[str]
    """Ids of relations of other notes targeting this note"""

    parents: list[str]
    children: list[str]
    parent_to_branch: dict[str, str]
    child_to_branch: dict[str, str]

    def __init__(self, row: NoteRow | Mapping[str, Any]):
        """
        :param row: Note row, as model or raw mapping
        """
        self.attributes = []
        self.target_relations = []

        self.parents = []
        self.children = []

        self.parent_to_branch = {}
        self.child_to_branch = {}

        self.update(row)

    def __str__(self):
        return f"Note(note_id={self.note_id}, title={self.title})"

    def __repr__(self):
        return str(self)

    def update(self, row: NoteRow | Mapping[str, Any]):
        """
        Overwrite note fields from row. Relationships are left unchanged.
        """
        if not isinstance(row, NoteRow):
            row = NoteRow.model_validate(row)

        self.note_id = row.note_id
        self.title = row.title
        self.content_length = row.content_length
        self.is_protected = row.is_protected
        self.type = row.type
        self.mime = row.mime
        self.is_deleted = row.is_deleted

    @property
    def dto(self) -> dict[str, Any]:
        """
        Shallow copy of this note's fields for passing to other contexts.
        """
        return {
            name: value
            for name, value in vars(self).items()
            if not name.startswith("_")
        }

from __future__ import annotations

from pydantic import AliasChoices, Field

from ..model import BaseRowModel

__all__ = [
    "Branch",
]


class Branch(BaseRowModel):
    """
    Encapsulates a branch, the edge placing a child note under a parent note.

    The branch's `note_position` defines the order of the child among its
    siblings.
    """

    branch_id: str
    parent_note_id: str
    child_note_id: str = Field(
        validation_alias=AliasChoices(
            "childNoteId", "noteId", "child_note_id"
        )
    )
    note_position: int = 0
    prefix: str | None = None
    is_expanded: bool = False

    def __str__(self):
        return f"Branch(branch_id={self.branch_id}, parent_note_id={self.parent_note_id}, child_note_id={self.child_note_id})"

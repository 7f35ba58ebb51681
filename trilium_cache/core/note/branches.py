from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..branch import Branch
    from ..cache import NoteStore
    from .note import Note

__all__ = [
    "BranchesMixin",
]


class BranchesMixin:
    """
    Placement of a note in the tree: parent and child note ids along with
    the branches linking them.
    """

    note_id: str

    parents: list[str]
    children: list[str]
    parent_to_branch: dict[str, str]
    child_to_branch: dict[str, str]

    def add_parent(self, parent_note_id: str, branch_id: str):
        """
        Add parent note, or update its branch if it's already a parent.
        """
        if parent_note_id not in self.parents:
            self.parents.append(parent_note_id)

        self.parent_to_branch[parent_note_id] = branch_id

    def add_child(self, cache: NoteStore, child_note_id: str, branch_id: str):
        """
        Add child note, or update its branch if it's already a child, then
        re-sort children by branch position.

        Children with equal positions keep their current relative order.
        A branch missing from the cache sorts as position 0.
        """
        if child_note_id not in self.children:
            self.children.append(child_note_id)

        self.child_to_branch[child_note_id] = branch_id

        positions: dict[str, int] = {}

        for child_branch_id in self.child_to_branch.values():
            branch = cache.get_branch(child_branch_id)
            positions[child_branch_id] = 0 if branch is None else branch.note_position

        self.children.sort(
            key=lambda child_id: positions[self.child_to_branch[child_id]]
        )

    def remove_parent(self, parent_note_id: str):
        if parent_note_id in self.parents:
            self.parents.remove(parent_note_id)

        self.parent_to_branch.pop(parent_note_id, None)

    def remove_child(self, child_note_id: str):
        if child_note_id in self.children:
            self.children.remove(child_note_id)

        self.child_to_branch.pop(child_note_id, None)

    def has_children(self) -> bool:
        return len(self.children) > 0

    def get_parent_note_ids(self) -> list[str]:
        return self.parents

    def get_child_note_ids(self) -> list[str]:
        return self.children

    async def get_parent_notes(self, cache: NoteStore) -> list[Note]:
        return await cache.get_notes(self.parents)

    async def get_child_notes(self, cache: NoteStore) -> list[Note]:
        return await cache.get_notes(self.children)

    async def get_branches(self, cache: NoteStore) -> list[Branch]:
        """
        Get branches placing this note under its parents.
        """
        return await cache.get_branches(self.parent_to_branch.values())

    async def get_child_branches(self, cache: NoteStore) -> list[Branch]:
        """
        Get branches to this note's children, in child order.
        """
        # map from children rather than values() to keep child order
        branch_ids = [
            self.child_to_branch[child_note_id]
            for child_note_id in self.children
        ]

        return await cache.get_branches(branch_ids)

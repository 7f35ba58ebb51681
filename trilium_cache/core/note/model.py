from __future__ import annotations

from ..model import BaseRowModel

__all__ = [
    "NoteRow",
]


class NoteRow(BaseRowModel):
    """
    Raw note row as received from the server, used to create or refresh a
    {obj}`Note`.
    """

    note_id: str
    title: str = ""
    content_length: int = 0
    is_protected: bool = False
    type: str = "text"
    mime: str = ""
    is_deleted: bool = False

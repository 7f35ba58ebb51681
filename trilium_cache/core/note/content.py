from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..cache import NoteStore

__all__ = [
    "ContentMixin",
]

JSON_MIME = "application/json"


class ContentMixin:
    """
    Access to a note's content, which is fetched from the server on every
    request.
    """

    note_id: str
    mime: str

    def is_json(self) -> bool:
        return self.mime == JSON_MIME

    async def get_content(self, cache: NoteStore) -> str | None:
        """
        Fetch note content from the server.
        """
        # not cached since notes are long lived in the tree cache and
        # content may change on the server
        note = await cache.server.get(f"notes/{self.note_id}")

        return note.get("content")

    async def get_json_content(self, cache: NoteStore) -> Any:
        """
        Fetch note content and parse it as JSON, or return `None` if it
        can't be parsed.
        """
        content = await self.get_content(cache)

        try:
            return json.loads(content)
        except (TypeError, ValueError) as e:
            cache.logger.warning(
                f"Cannot parse content of note {self.note_id}: {e}"
            )
            return None

"""
Common constants.
"""

__all__ = [
    "ROOT_NOTE_ID",
    "NONE_NOTE_ID",
    "TEMPLATE_RELATION",
    "NOTE_TYPES",
]

ROOT_NOTE_ID = "root"
"""
Id of the root note; root has no parents to inherit from.
"""

NONE_NOTE_ID = "none"
"""
Placeholder id used by the server for "no note".
"""

TEMPLATE_RELATION = "template"
"""
Name of relation whose target's attributes are imported wholesale.
"""

NOTE_TYPES = [
    "text",
    "code",
    "file",
    "render",
    "image",
    "search",
    "relation-map",
    "book",
]
"""
Note types known to the tree cache.
"""

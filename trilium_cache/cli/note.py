import json
from typing import Any, NoReturn

from click import Choice
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from typer import Argument, Context, Exit, Option

from ..core import Attribute, AttributeType, Branch, Note, TreeCache
from ._utils import MainTyper, run_operation

app = MainTyper(
    "note",
    help="Inspect notes as resolved by the tree cache",
)

console = Console()

NOTE_ID_ARGUMENT = Argument(help="Note id, e.g. root")


@app.command()
def attrs(
    ctx: Context,
    note_id: str = NOTE_ID_ARGUMENT,
    attribute_type: str = Option(
        None,
        "--type",
        help="Only show attributes of this type",
        show_choices=True,
        click_type=Choice([t.value for t in AttributeType]),
    ),
    name: str = Option(None, help="Only show attributes with this name"),
    owned: bool = Option(False, help="Only show owned attributes"),
):
    """
    Show attributes of a note, including templated and inherited ones
    """

    async def get_attributes(cache: TreeCache) -> list[Attribute] | None:
        note = await cache.get_note(note_id)
        if note is None:
            return None

        if owned:
            return note.get_owned_attributes(cache, attribute_type, name)
        return await note.get_attributes(cache, attribute_type, name)

    attributes = run_operation(ctx, get_attributes)
    if attributes is None:
        _not_found(note_id)

    table = Table("Type", "Name", "Value", "Owner", "Inheritable")

    for attribute in attributes:
        table.add_row(
            str(attribute.type),
            escape(attribute.name),
            escape(attribute.value),
            attribute.note_id,
            "yes" if attribute.is_inheritable else "no",
        )

    console.print(table)


@app.command()
def children(
    ctx: Context,
    note_id: str = NOTE_ID_ARGUMENT,
):
    """
    Show children of a note in branch order
    """

    async def get_children(
        cache: TreeCache,
    ) -> list[tuple[Branch, Note]] | None:
        note = await cache.get_note(note_id)
        if note is None:
            return None

        branches = await note.get_child_branches(cache)
        notes = await cache.get_notes(
            [branch.child_note_id for branch in branches]
        )
        notes_map = {child.note_id: child for child in notes}

        return [
            (branch, notes_map[branch.child_note_id])
            for branch in branches
            if branch.child_note_id in notes_map
        ]

    result = run_operation(ctx, get_children)
    if result is None:
        _not_found(note_id)

    for branch, child in result:
        prefix = f"{branch.prefix} - " if branch.prefix else ""
        console.print(
            f"{branch.note_position:>6} {escape(prefix + child.title)} ({child.note_id})",
            highlight=False,
        )


@app.command()
def content(
    ctx: Context,
    note_id: str = NOTE_ID_ARGUMENT,
    as_json: bool = Option(
        False, "--json", help="Parse and pretty-print content as JSON"
    ),
):
    """
    Show content of a note
    """

    async def get_content(cache: TreeCache) -> tuple[bool, Any]:
        note = await cache.get_note(note_id)
        if note is None:
            return (False, None)

        if as_json:
            return (True, await note.get_json_content(cache))
        return (True, await note.get_content(cache))

    found, value = run_operation(ctx, get_content)
    if not found:
        _not_found(note_id)

    if as_json:
        if value is None:
            console.print(f"Content of note '{note_id}' is not JSON")
            raise Exit(1)
        value = json.dumps(value, indent=2)

    console.print(value or "", markup=False, highlight=False)


def _not_found(note_id: str) -> NoReturn:
    console.print(f"Note '{note_id}' not found")
    raise Exit(1)

"""
Entry point of `trilium-cache` CLI.
"""

import logging
from pathlib import Path

import dotenv
from rich.console import Console
from rich.logging import RichHandler
from typer import Context, Option

from . import note
from ._utils import OPERATION_EPILOG, MainTyper, OperationContext

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    handlers=[
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_level=True,
            show_time=True,
            show_path=False,
        )
    ],
)

dotenv.load_dotenv()

app = MainTyper(
    "trilium-cache",
    help="Trilium tree cache inspector",
    epilog=OPERATION_EPILOG,
)
app.add_typer(note.app)


@app.callback()
def main(
    ctx: Context,
    host: str = Option(
        None,
        help="Trilium host, e.g. http://localhost:8080",
        envvar="TRILIUM_HOST",
        show_envvar=True,
    ),
    token: str = Option(
        None,
        help="Token sent with each request",
        envvar="TRILIUM_TOKEN",
        show_envvar=True,
    ),
    config: Path = Option(
        None,
        "--config",
        help="Config .yaml file with host and token",
        exists=True,
        dir_okay=False,
    ),
):
    ctx.obj = OperationContext(host=host, token=token, config_file=config)


def run():
    app()


if __name__ == "__main__":
    app()

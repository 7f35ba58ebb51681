from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from click import BadParameter, MissingParameter
from pydantic import ValidationError
from typer import Context, Exit, Typer

from ..config import Config
from ..core import ServerError, TreeCache

OPERATION_EPILOG = """
    Trilium options can be passed in the following order of precedence:

    * CLI options

    * Environment variables

    * .env file

    * Config file passed with --config
    """
"""
Epilog to show under main command options.
"""

OPTION_MSG = "Set via CLI option, environment variable, .env file, or config file."
"""
Message to show upon missing option.
"""


class MainTyper(Typer):
    """
    Typer app with preconfigured settings.
    """

    def __init__(self, name: str, *, help: str, epilog: str | None = None):
        return super().__init__(
            name=name,
            help=help,
            epilog=epilog,
            rich_markup_mode="markdown",
            no_args_is_help=True,
            add_completion=False,
        )


@dataclass(kw_only=True)
class OperationContext:
    """
    Encapsulates raw Trilium options from user.
    """

    host: str | None
    token: str | None
    config_file: Path | None


def get_config(ctx: Context) -> Config:
    """
    Get config from config file and/or CLI options and environment
    variables, the latter taking precedence.
    """
    operation = ctx.obj
    assert isinstance(operation, OperationContext)

    values: dict[str, str] = {}

    if operation.config_file is not None:
        try:
            config = Config.load_yaml(operation.config_file)
        except (ValueError, OSError) as e:
            raise BadParameter(
                str(e), ctx=ctx, param_hint="'--config'"
            ) from e

        values = config.model_dump(exclude_none=True)

    if operation.host:
        values["host"] = operation.host
    if operation.token:
        values["token"] = operation.token

    if not values.get("host"):
        raise MissingParameter(
            message=OPTION_MSG,
            ctx=ctx,
            param_hint="'--host'",
            param_type="option",
        )

    try:
        return Config.model_validate(values)
    except ValidationError as e:
        raise BadParameter(str(e), ctx=ctx) from e


T = TypeVar("T")


def run_operation(
    ctx: Context, operation: Callable[[TreeCache], Awaitable[T]]
) -> T:
    """
    Run async operation against a fresh tree cache, exiting with an error
    if the server can't be reached.
    """
    config = get_config(ctx)
    logger = logging.getLogger()

    async def run() -> T:
        async with config.create_server(logger=logger) as server:
            return await operation(TreeCache(server, logger=logger))

    try:
        return asyncio.run(run())
    except ServerError as e:
        logging.error(f"Failed to communicate with Trilium: {e}")
        raise Exit(1)

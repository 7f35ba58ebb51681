"""
Interface to configuration as persisted in .yaml file or passed through the
environment.
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from logging import Logger
from pathlib import Path
from typing import Any, Self

import dotenv
import httpx
import yaml
from pydantic import BaseModel, field_validator

from .core import Server
from .core.server import REQUEST_TIMEOUT

__all__ = [
    "BaseYamlModel",
    "Config",
]

ENV_HOST = "TRILIUM_HOST"
ENV_TOKEN = "TRILIUM_TOKEN"
ENV_TIMEOUT = "TRILIUM_TIMEOUT"


class BaseYamlModel(BaseModel):
    """
    Base pydantic model which can be loaded from and dumped to a .yaml file.
    """

    @classmethod
    def load_yaml(cls, file: Path) -> Self:
        """
        Load model from .yaml file.

        :raises ValueError: File doesn't contain a mapping
        """
        with file.open() as fh:
            model = yaml.safe_load(fh)

        if not isinstance(model, dict):
            raise ValueError(f"Invalid yaml contents in '{file}': {model}")

        return cls.model_validate(model)

    def dump_yaml(self, file: Path):
        """
        Dump model to .yaml file.
        """
        file.write_text(
            yaml.safe_dump(
                self.model_dump(exclude_none=True),
                default_flow_style=False,
                sort_keys=False,
            )
        )


class Config(BaseYamlModel):
    """
    Encapsulates info needed to connect to a Trilium server.
    """

    host: str
    """
    Host including scheme, e.g. `http://localhost:8080`.
    """

    token: str | None = None
    """
    Token sent with each request, if the server requires one.
    """

    timeout: float = REQUEST_TIMEOUT
    """
    Request timeout in seconds.
    """

    @field_validator("host")
    @classmethod
    def validate_host(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"host must start with http:// or https://: '{value}'")
        return value.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError(f"timeout must be positive, got {value}")
        return value

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Self:
        """
        Get config from environment variables, loading `.env` first if no
        mapping is provided.
        """
        if env is None:
            dotenv.load_dotenv()
            env = os.environ

        values: dict[str, Any] = {
            "host": env.get(ENV_HOST),
            "token": env.get(ENV_TOKEN),
        }

        if ENV_TIMEOUT in env:
            values["timeout"] = env[ENV_TIMEOUT]

        return cls.model_validate(values)

    def create_server(
        self,
        *,
        logger: Logger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Server:
        """
        Get server client from this config's fields.
        """
        return Server(
            self.host,
            token=self.token,
            timeout=self.timeout,
            logger=logger,
            transport=transport,
        )

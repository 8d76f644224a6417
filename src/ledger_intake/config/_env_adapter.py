"""Reads config from ``os.environ`` and a JSON config file."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from ._types import ConfigError

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "LEDGER_INTAKE_CONFIG"
DEFAULT_CONFIG_FILE = "ledger_intake.json"


class EnvFileConfigRepository:
    """Environment variables plus an optional JSON object on disk.

    The file is ``$LEDGER_INTAKE_CONFIG`` if set, else ``ledger_intake.json``
    in the working directory. A missing file is treated as empty.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        if path is None:
            path = os.environ.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_FILE
        self.path = Path(path)
        self._file: dict[str, Any] | None = None

    def get_env(self, key: str) -> str | None:
        return os.environ.get(key)

    def get_file_config(self, key: str) -> Any:
        return self._load().get(key)

    def _load(self) -> dict[str, Any]:
        if self._file is None:
            self._file = {}
            if self.path.is_file():
                try:
                    data = json.loads(self.path.read_text(encoding="utf-8"))
                except json.JSONDecodeError as exc:
                    raise ConfigError(f"Config file {self.path} is not valid JSON: {exc}") from exc
                if not isinstance(data, dict):
                    raise ConfigError(f"Config file {self.path} must contain a JSON object.")
                self._file = data
                logger.debug("Loaded config file %s", self.path)
        return self._file

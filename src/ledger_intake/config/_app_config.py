"""Typed config groups using Pydantic BaseModel.

Subclass ``AppConfig`` and declare fields + a ``Meta`` inner class to map
config keys automatically::

    class StoreConfig(AppConfig):
        class Meta:
            prefix = "store"
            env_prefix = "LEDGER_INTAKE_STORE"

        path: str | None = None

    cfg = StoreConfig.load()
    cfg.path    # read from LEDGER_INTAKE_STORE_PATH env / store_path in the config file
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from ._repository import ConfigRepository
from ._types import UNDEFINED, _Undefined


class AppConfig(BaseModel):
    """Base class for declarative, typed config groups."""

    model_config = ConfigDict(frozen=True)

    class Meta:
        prefix: str = ""
        env_prefix: str = ""
        key: str = ""

    @classmethod
    def load(cls, repo: ConfigRepository | None = None) -> "AppConfig":
        """Load config values and return a validated instance.

        Resolution per field:
        1. Environment variable (``{ENV_PREFIX}_{FIELD_NAME}`` uppercased)
        2. Config file key (``{prefix}_{field}``, or ``field`` inside the
           nested object named by ``Meta.key``)
        3. Omit — let Pydantic use the field default or raise ``ValidationError``
        """
        from ._reader import _auto_repository

        active_repo = repo or _auto_repository()

        meta = cls.Meta
        prefix = getattr(meta, "prefix", "")
        env_prefix = getattr(meta, "env_prefix", "")
        nested_key = getattr(meta, "key", "")

        nested_dict: dict[str, Any] = {}
        if nested_key:
            file_val = active_repo.get_file_config(nested_key)
            if isinstance(file_val, dict):
                nested_dict = file_val

        raw_data: dict[str, Any] = {}

        for field_name in cls.model_fields:
            value: Any = UNDEFINED

            if env_prefix:
                env_val = active_repo.get_env(f"{env_prefix}_{field_name}".upper())
                if env_val is not None:
                    value = env_val

            if isinstance(value, _Undefined):
                if nested_key:
                    value = nested_dict.get(field_name, UNDEFINED)
                else:
                    config_key = f"{prefix}_{field_name}" if prefix else field_name
                    file_val = active_repo.get_file_config(config_key)
                    if file_val is not None:
                        value = file_val

            if not isinstance(value, _Undefined):
                raw_data[field_name] = value

        return cls.model_validate(raw_data)

"""The ``config()`` lookup: environment, then the JSON config file, then the default."""

from __future__ import annotations

from typing import Any, Callable

from ._casters import _cast_bool
from ._repository import ConfigRepository
from ._types import UNDEFINED, UndefinedValueError

_active_repository: ConfigRepository | None = None


def set_repository(repo: ConfigRepository | None) -> None:
    global _active_repository
    _active_repository = repo


def get_repository() -> ConfigRepository | None:
    return _active_repository


def _auto_repository() -> ConfigRepository:
    """Return the active repository, creating an ``EnvFileConfigRepository`` on first use."""
    global _active_repository
    if _active_repository is None:
        from ._env_adapter import EnvFileConfigRepository

        _active_repository = EnvFileConfigRepository()
    return _active_repository


def config(
    key: str,
    *,
    default: Any = UNDEFINED,
    cast: Callable | type | None = None,
    env: str | None = None,
    repo: ConfigRepository | None = None,
) -> Any:
    """Read the config value *key*.

    The environment variable *env* is checked first (when given), then the
    config file. Found values go through *cast* (``bool`` understands
    ``"true"``/``"0"`` and friends); *default* is returned as-is.

    Raises:
        UndefinedValueError: If the key is found nowhere and has no default
    """
    active_repo = repo or _auto_repository()
    if cast is bool:
        cast = _cast_bool

    value = active_repo.get_env(env) if env is not None else None
    if value is None:
        value = active_repo.get_file_config(key)
    if value is not None:
        return cast(value) if cast is not None else value

    if default is not UNDEFINED:
        return default
    raise UndefinedValueError(key)

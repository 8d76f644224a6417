"""Config source protocol and in-memory implementation for tests."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ConfigRepository(Protocol):
    """Abstraction over where config values come from.

    Implementations provide one lookup method per config source: the process
    environment and the JSON config file.
    """

    def get_env(self, key: str) -> str | None:
        ...

    def get_file_config(self, key: str) -> Any:
        ...


class FakeConfigRepository:
    """Dict-backed config repository for tests.

    >>> repo = FakeConfigRepository(env={"DEBUG": "1"}, file={"page_size": 50})
    >>> repo.get_env("DEBUG")
    '1'
    """

    def __init__(
        self,
        env: dict[str, str] | None = None,
        file: dict[str, Any] | None = None,
    ) -> None:
        self._env: dict[str, str] = dict(env or {})
        self._file: dict[str, Any] = dict(file or {})

    # -- Protocol methods ---------------------------------------------------

    def get_env(self, key: str) -> str | None:
        return self._env.get(key)

    def get_file_config(self, key: str) -> Any:
        return self._file.get(key)

    # -- Mutation helpers for test setup ------------------------------------

    def set_env(self, key: str, value: str) -> None:
        self._env[key] = value

    def set_file(self, key: str, value: Any) -> None:
        self._file[key] = value

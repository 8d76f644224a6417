"""Typed, validated configuration layer.

Provides fail-fast config reading with type casting and environment
variable support, backed by ``os.environ`` and a JSON config file.
"""

from ._app_config import AppConfig
from ._casters import Choices
from ._env_adapter import EnvFileConfigRepository
from ._reader import config
from ._repository import ConfigRepository, FakeConfigRepository
from ._testing import override_config
from ._types import ConfigError, UndefinedValueError
from .settings import IntakeSettings

__all__ = [
    # Core
    "config",
    "ConfigError",
    "UndefinedValueError",
    # Typed groups
    "AppConfig",
    "IntakeSettings",
    # Helpers
    "Choices",
    # Sources
    "ConfigRepository",
    "EnvFileConfigRepository",
    # Testing
    "override_config",
    "FakeConfigRepository",
]

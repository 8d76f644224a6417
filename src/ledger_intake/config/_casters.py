"""Cast helpers for config values.

These callables transform raw string values from environment variables or
the JSON config file into the desired Python types.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence


# ---------------------------------------------------------------------------
# Bool caster
# ---------------------------------------------------------------------------

_TRUTHY = frozenset({"1", "true", "yes", "on", "t", "y"})
_FALSY = frozenset({"0", "false", "no", "off", "f", "n", ""})


def _cast_bool(value: Any) -> bool:
    """Cast a value to ``bool``, handling common string representations.

    Raises ``ValueError`` for unrecognised strings.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lower = value.strip().lower()
        if lower in _TRUTHY:
            return True
        if lower in _FALSY:
            return False
        raise ValueError(f"Cannot cast {value!r} to bool")
    raise ValueError(f"Cannot cast {type(value).__name__} to bool")


# ---------------------------------------------------------------------------
# Choices
# ---------------------------------------------------------------------------


class Choices:
    """Validate that a value is one of a fixed set of choices.

    >>> Choices(["DEBUG", "INFO", "WARNING"], cast=str.upper)("info")
    'INFO'
    """

    def __init__(
        self,
        choices: Sequence[Any],
        cast: Callable[[Any], Any] = str,
    ) -> None:
        self.choices = choices
        self.cast = cast

    def __call__(self, value: Any) -> Any:
        casted = self.cast(value)
        if casted not in self.choices:
            raise ValueError(
                f"{casted!r} is not a valid choice. Must be one of {list(self.choices)}"
            )
        return casted

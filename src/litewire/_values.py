from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar


if TYPE_CHECKING:
    from collections.abc import Callable

    V = TypeVar("V", bound="TaggedValue")


@dataclass(frozen=True)
class TaggedValue:
    """A value carrying a marker the container reads when it is looked up."""

    value: Any

    @classmethod
    def wrap(cls: type[V], value: Any) -> V:
        return cls(value)


class FactoryValue(TaggedValue):
    """Call the wrapped callable on every lookup."""


class RawValue(TaggedValue):
    """Hand the wrapped value back as-is, never calling it."""


def factory(fn: Callable[..., Any]) -> FactoryValue:
    """Wrap `fn` so the container calls it on every lookup.

    Example:
      container["conn"] = factory(lambda c: connect(c["dsn"]))

    """
    if not callable(fn):
        msg = f"Factory must be callable, got {type(fn).__name__}"
        raise TypeError(msg)
    return FactoryValue(fn)


def raw(value: Any) -> RawValue:
    """Wrap `value` so the container returns it without calling it."""
    return RawValue(value)

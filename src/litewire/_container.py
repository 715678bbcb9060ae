from __future__ import annotations

import functools
import inspect
import logging
import re
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from ._errors import (
    AlreadyResolvedError,
    DuplicateKeyError,
    ImmutableContainerError,
    InvalidKeyError,
    NotFoundError,
)
from ._values import FactoryValue, RawValue


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator


_NUMERIC_RE = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*")


def is_numeric_key(key: str) -> bool:
    """Return True when `key` reads as a signed decimal integer or float literal."""
    return _NUMERIC_RE.fullmatch(key) is not None


class EntryKind(Enum):
    PLAIN = "plain"
    LAZY = "lazy"
    FACTORY = "factory"
    RAW = "raw"


@dataclass
class Entry:
    value: object
    kind: EntryKind
    pass_container: bool = False


class Container:
    """Keyed registry of values, one-time callables, factories and raw callables.

    - plain values are returned unchanged
    - functions/lambdas/methods/partials are called once, on first lookup, and cached
    - `FactoryValue` payloads are called on every lookup
    - `RawValue` payloads are returned uncalled
    - aliases point at an existing key
    - entries can be overwritten (until a one-time callable resolves) but never removed.
    """

    def __init__(self, items: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None) -> None:
        self._entries: dict[str, Entry] = {}
        self._resolved: dict[str, object] = {}
        self._aliases: dict[str, str] = {}
        # insertion order of keys and aliases; values unused
        self._ids: dict[str, None] = {}
        self._lock = threading.RLock()

        if items is not None:
            self.merge(items)

    def set(self, key: str, value: object) -> None:
        """Register `value` under `key`, replacing any previous unresolved entry.

        Example:
          container.set("dsn", "sqlite://")
          container.set("db", lambda c: connect(c["dsn"]))

        """
        _check_key(key, "key")

        with self._lock:
            if key in self._aliases:
                msg = f"Existing alias `{key}` cannot be overwritten"
                raise DuplicateKeyError(msg, key)

            if key in self._resolved:
                msg = f"Cannot overwrite key `{key}` because it has been resolved previously"
                raise AlreadyResolvedError(msg, key)

            entry = _make_entry(value)
            self._entries[key] = entry
            self._ids.setdefault(key, None)

        logger.debug("Registered %s entry %r", entry.kind.value, key)

    def factory(self, key: str, fn: Callable[..., Any]) -> None:
        """Register `fn` to be called on every lookup of `key`."""
        if not callable(fn):
            msg = f"Factory for `{key}` must be callable, got {type(fn).__name__}"
            raise TypeError(msg)
        self.set(key, FactoryValue(fn))

    def raw(self, key: str, fn: Callable[..., Any]) -> None:
        """Register `fn` to be returned uncalled on lookup of `key`."""
        if not callable(fn):
            msg = f"Raw value for `{key}` must be callable, got {type(fn).__name__}"
            raise TypeError(msg)
        self.set(key, RawValue(fn))

    def get(self, key: str) -> Any:
        """Look up `key`, following an alias and evaluating the entry by its kind.

        - cached one-time result, if any
        - factory: call, don't cache
        - raw: return the callable itself
        - lazy: call, cache, return
        - plain: return as stored.
        """
        with self._lock:
            key = self._aliases.get(key, key)

            if key not in self._ids:
                msg = f"No value found for key `{key}`"
                raise NotFoundError(msg, key)

            if key in self._resolved:
                return self._resolved[key]

            entry = self._entries[key]

            if entry.kind is EntryKind.FACTORY:
                return self._call(entry, entry.value.value)  # type: ignore[attr-defined]

            if entry.kind is EntryKind.RAW:
                return entry.value.value  # type: ignore[attr-defined]

            if entry.kind is EntryKind.LAZY:
                result = self._call(entry, entry.value)
                self._resolved[key] = result
                logger.debug("Resolved %r to %s", key, type(result).__name__)
                return result

            return entry.value

    def has(self, key: str) -> bool:
        return isinstance(key, str) and key in self._ids

    def alias(self, alias: str, key: str) -> None:
        """Make `alias` look up `key`.

        The target is fixed now: aliasing an alias points straight at its target.
        """
        _check_key(alias, "alias")

        with self._lock:
            if not self.has(key):
                msg = f"Cannot alias non-existing key `{key}`"
                raise NotFoundError(msg, key)

            if self.has(alias):
                msg = f"Existing key `{alias}` cannot be used as alias"
                raise DuplicateKeyError(msg, alias)

            target = self._aliases.get(key, key)
            self._aliases[alias] = target
            self._ids[alias] = None

        logger.debug("Aliased %r to %r", alias, target)

    def merge(self, items: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> None:
        """Set every key/value pair of `items`, in order.

        Stops at the first failing key; pairs already set stay registered.
        """
        pairs = items.items() if isinstance(items, Mapping) else items
        for pair in pairs:
            if isinstance(pair, str):
                raise TypeError(_bad_pair_message(pair))
            try:
                key, value = pair
            except (TypeError, ValueError) as e:
                raise TypeError(_bad_pair_message(pair)) from e
            self.set(key, value)

    def keys(self) -> list[str]:
        return list(self._ids)

    def _call(self, entry: Entry, fn: Callable[..., Any]) -> Any:
        if entry.pass_container:
            return fn(self)
        return fn()

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: object) -> None:
        self.set(key, value)

    def __contains__(self, key: object) -> bool:
        return self.has(key)  # type: ignore[arg-type]

    def __delitem__(self, key: str) -> None:
        msg = "Cannot unset keys on this container"
        raise ImmutableContainerError(msg, key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(keys={self.keys()!r})"


def _check_key(key: object, what: str) -> None:
    if not isinstance(key, str) or not key or is_numeric_key(key):
        msg = f"Invalid {what} `{key}`"
        raise InvalidKeyError(msg, key if isinstance(key, str) else str(key))


def _bad_pair_message(pair: object) -> str:
    return f"merge() expects a mapping or (key, value) pairs, got {pair!r}"


def _make_entry(value: object) -> Entry:
    if isinstance(value, FactoryValue):
        return Entry(value, EntryKind.FACTORY, _accepts_container(value.value))

    if isinstance(value, RawValue):
        return Entry(value, EntryKind.RAW)

    if _is_lazy(value):
        return Entry(value, EntryKind.LAZY, _accepts_container(value))  # type: ignore[arg-type]

    return Entry(value, EntryKind.PLAIN)


def _is_lazy(value: object) -> bool:
    # classes and objects that merely define __call__ are stored as plain values
    return inspect.isfunction(value) or inspect.ismethod(value) or isinstance(value, functools.partial)


def _accepts_container(fn: Callable[..., Any]) -> bool:
    """Whether `fn` takes a positional argument to receive the container."""
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        # no introspectable signature (some builtins); assume it takes one
        return True

    return any(
        p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL) for p in params
    )

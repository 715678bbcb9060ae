"""Minimal keyed dependency injection container.

This package provides a small registry for wiring application components by key,
without hard-coding construction order.

Exports:
- `Container`: keyed store of plain values, one-time callables (resolved on first
  lookup and cached), factories (called on every lookup) and raw callables
  (returned uncalled), with aliases and mapping-style access.
- `factory` / `raw`: helpers wrapping a value as `FactoryValue` / `RawValue` so that
  plain assignment (`container["key"] = factory(fn)`) picks the lookup policy.
- Errors: `ContainerError` and its subclasses `InvalidKeyError`, `AlreadyResolvedError`,
  `NotFoundError`, `DuplicateKeyError` and `ImmutableContainerError`.
"""

from ._container import Container, EntryKind, is_numeric_key
from ._errors import (
    AlreadyResolvedError,
    ContainerError,
    DuplicateKeyError,
    ImmutableContainerError,
    InvalidKeyError,
    NotFoundError,
)
from ._values import FactoryValue, RawValue, factory, raw


__all__ = [
    "AlreadyResolvedError",
    "Container",
    "ContainerError",
    "DuplicateKeyError",
    "EntryKind",
    "FactoryValue",
    "ImmutableContainerError",
    "InvalidKeyError",
    "NotFoundError",
    "RawValue",
    "factory",
    "is_numeric_key",
    "raw",
]

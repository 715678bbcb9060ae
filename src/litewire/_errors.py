from __future__ import annotations


class ContainerError(RuntimeError):
    """Base class for every error raised by the container."""

    def __init__(self, msg: str, key: str | None = None) -> None:
        super().__init__(msg)
        self.key = key


class InvalidKeyError(ContainerError):
    pass


class AlreadyResolvedError(ContainerError):
    pass


class NotFoundError(ContainerError, KeyError):
    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class DuplicateKeyError(ContainerError):
    pass


class ImmutableContainerError(ContainerError):
    pass

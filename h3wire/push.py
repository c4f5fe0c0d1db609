"""Server push identifiers."""

from __future__ import annotations

from dataclasses import dataclass

from .varint import VARINT_MAX


class InvalidPushId(ValueError):
    """Raised for push ids outside the varint range."""

    def __init__(self, value: int) -> None:
        super().__init__(f"invalid push id: {value:x}")
        self.value = value


@dataclass(frozen=True, order=True)
class PushId:
    """Identifier of a server push."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= VARINT_MAX:
            raise InvalidPushId(self.value)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return f"push {self.value}"
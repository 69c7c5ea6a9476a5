"""Explicit success/failure variants returned by gateway operations.

Usage:
    result = await gateway.synthesize(request)
    if isinstance(result, Failure):
        return error_response(result.error)
    audio = result.value
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Generic, NoReturn, TypeVar, Union

from voiceforge.core.exceptions import VoiceForgeError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Operation completed; carries its value."""
    value: T
    ok: ClassVar[bool] = True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """Operation failed; carries the domain error."""
    error: VoiceForgeError
    ok: ClassVar[bool] = False

    @property
    def code(self) -> str:
        return self.error.code

    def unwrap(self) -> NoReturn:
        raise self.error


GatewayResult = Union[Success[T], Failure]

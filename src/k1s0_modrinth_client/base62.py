"""base62 整数コーデック"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from .exceptions import Base62DecodeError

ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
BASE = len(ALPHABET)

# デコードの作業幅。より狭い型へは decode(bits=...) で検査付きで縮める。
WIDE_BITS = 128
ID_BITS = 64

_DIGITS: dict[str, int] = {char: index for index, char in enumerate(ALPHABET)}


def encode(number: int) -> str:
    """非負整数を base62 文字列に変換する。"""
    if number < 0:
        raise ValueError(f"cannot base62-encode a negative number: {number}")
    if number == 0:
        return ALPHABET[0]
    chars: list[str] = []
    while number:
        number, digit = divmod(number, BASE)
        chars.append(ALPHABET[digit])
    return "".join(reversed(chars))


def decode(value: str, bits: int = WIDE_BITS) -> int:
    """base62 文字列を整数に変換する。

    Args:
        value: ``[0-9A-Za-z]`` のみからなる文字列
        bits: 結果が収まるべき符号なし整数のビット幅

    Raises:
        Base62DecodeError: 空文字列、アルファベット外の文字、またはビット幅超過
    """
    if not value:
        raise Base62DecodeError(Base62DecodeError.EMPTY_INPUT, "cannot decode an empty string")
    limit = 1 << bits
    result = 0
    for index, char in enumerate(value):
        digit = _DIGITS.get(char)
        if digit is None:
            raise Base62DecodeError(
                Base62DecodeError.INVALID_CHARACTER,
                f"invalid character {char!r} at index {index}",
            )
        result = result * BASE + digit
        if result >= limit:
            raise Base62DecodeError(
                Base62DecodeError.ARITHMETIC_OVERFLOW,
                f"{value!r} does not fit in {bits} bits",
            )
    return result


@dataclass(frozen=True)
class Base62Int:
    """ワイヤ上では base62 文字列、メモリ上では整数となるフィールド用アダプタ。

    ``Annotated[int, Base62Int(32)]`` のように使う。コーデックは一つで、
    幅の違いは ``bits`` による検査付きの縮小だけで表す。
    """

    bits: int = ID_BITS
    factory: Callable[[int], Any] = int

    def _from_str(self, value: str) -> Any:
        return self.factory(decode(value, bits=self.bits))

    def _from_python(self, value: Any) -> Any:
        if isinstance(value, str):
            return self._from_str(value)
        if isinstance(value, int) and not isinstance(value, bool):
            if value < 0 or value >= 1 << self.bits:
                raise ValueError(f"{value} is out of range for a {self.bits}-bit base62 value")
            return self.factory(value)
        raise ValueError("expected a base62 string or an integer")

    def __get_pydantic_core_schema__(
        self, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.json_or_python_schema(
            json_schema=core_schema.no_info_after_validator_function(
                self._from_str, core_schema.str_schema()
            ),
            python_schema=core_schema.no_info_plain_validator_function(self._from_python),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda v: encode(int(v)), when_used="json"
            ),
        )


class Base62Id(int):
    """64 ビット符号なし整数の識別子。

    等価性とハッシュは元の整数で決まり、``str()`` は正規の base62 表記を返す。
    """

    def __new__(cls, value: int) -> Base62Id:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Base62Id expects an int, got {type(value).__name__}")
        if value < 0 or value >= 1 << ID_BITS:
            raise ValueError(f"{value} is out of range for a 64-bit identifier")
        return super().__new__(cls, value)

    @classmethod
    def parse(cls, value: str) -> Base62Id:
        return cls(decode(value, bits=ID_BITS))

    def __str__(self) -> str:
        return encode(int(self))

    def __repr__(self) -> str:
        return f"Base62Id({str(self)!r})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return Base62Int(bits=ID_BITS, factory=cls).__get_pydantic_core_schema__(source, handler)

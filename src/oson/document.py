"""Shape of encoded OSON data.

Encoded structure::

    -1                       # the whole value was a magic scalar
    [cell0, cell1, ...]      # otherwise; cell0 is the root

Cells:

- primitives (``str``, finite ``int``/``float``, ``bool``, ``None``) stand
  for themselves
- ``[BIGINT_LABEL, "-ff"]`` is an integer outside the safe range, stored as
  signed hexadecimal digits
- ``[3, -2, 7]`` is a list; every entry is a position or a magic code and
  ``HOLE_CODE`` marks a sparse slot
- ``["", k0, v0, k1, v1]`` is a plain object given as alternating key/value
  positions, and ``["4:datetime", 9]`` is an instance of a registered type
  given as positions of its decomposed parts
"""

from typing import Any, Final, TypeGuard

from oson.magic import MagicCode

BIGINT_LABEL: Final = -6
PLAIN_OBJECT_LABEL: Final = ""

# Largest integer that survives a trip through an IEEE-754 double
MAX_SAFE_INTEGER: Final = 2**53 - 1

OsonPrimitive = str | int | float | bool | None
OsonBigInt = list[int | str]
OsonArray = list[int]
OsonObject = list[str | int]
OsonList = OsonBigInt | OsonArray | OsonObject
OsonValue = OsonPrimitive | OsonList
Oson = MagicCode | list[OsonValue]


def is_oson_object(cell: list[Any]) -> TypeGuard[OsonObject]:
	return len(cell) > 0 and isinstance(cell[0], str)


def is_oson_bigint(cell: list[Any]) -> TypeGuard[OsonBigInt]:
	return len(cell) > 0 and type(cell[0]) is int and cell[0] == BIGINT_LABEL


def is_safe_integer(value: int) -> bool:
	return -MAX_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER


def bigint_to_hex(value: int) -> str:
	if value < 0:
		return f"-{-value:x}"
	return f"{value:x}"


def hex_to_bigint(digits: str) -> int:
	if digits.startswith("-"):
		return -int(digits[1:], 16)
	return int(digits, 16)


__all__ = [
	"BIGINT_LABEL",
	"PLAIN_OBJECT_LABEL",
	"MAX_SAFE_INTEGER",
	"Oson",
	"OsonPrimitive",
	"OsonBigInt",
	"OsonArray",
	"OsonObject",
	"OsonList",
	"OsonValue",
	"is_oson_object",
	"is_oson_bigint",
	"is_safe_integer",
	"bigint_to_hex",
	"hex_to_bigint",
]

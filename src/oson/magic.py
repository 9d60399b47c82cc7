"""Reserved negative codes for scalars JSON cannot carry.

A magic code may appear anywhere a position is expected, including as the
whole document.
"""

import math
from typing import Any, Final, Literal

UNDEFINED_CODE: Final = -1
HOLE_CODE: Final = -2
NAN_CODE: Final = -3
POS_INF_CODE: Final = -4
NEG_INF_CODE: Final = -5

MagicCode = Literal[-1, -3, -4, -5]


class Undefined:
	"""JS-style ``undefined``.

	Distinct from ``None`` (which maps to ``null``). Use the ``UNDEFINED``
	singleton.
	"""

	__slots__: tuple[str, ...] = ()

	def __repr__(self) -> str:
		return "UNDEFINED"

	def __bool__(self) -> bool:
		return False

	def __reduce__(self) -> str:
		return "UNDEFINED"


class Hole:
	"""Marks an absent slot in a sparse list. Use the ``HOLE`` singleton."""

	__slots__: tuple[str, ...] = ()

	def __repr__(self) -> str:
		return "HOLE"

	def __bool__(self) -> bool:
		return False

	def __reduce__(self) -> str:
		return "HOLE"


UNDEFINED = Undefined()
HOLE = Hole()


def to_magic(value: Any) -> MagicCode | None:
	if isinstance(value, Undefined):
		return UNDEFINED_CODE
	if isinstance(value, float):
		if math.isnan(value):
			return NAN_CODE
		if math.isinf(value):
			return NEG_INF_CODE if value < 0 else POS_INF_CODE
	return None


def from_magic(code: Any) -> Undefined | float | None:
	# bools are ints in Python but never magic
	if type(code) is not int:
		return None
	if code == UNDEFINED_CODE:
		return UNDEFINED
	if code == NAN_CODE:
		return math.nan
	if code == POS_INF_CODE:
		return math.inf
	if code == NEG_INF_CODE:
		return -math.inf
	return None

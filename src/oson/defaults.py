"""Built-in descriptors and the process-wide default registry.

``DEFAULT_REGISTRY`` is used by every call that does not pass its own
registry. It is global state: register custom classes on it at import time,
or build a separate registry with ``default_registry()`` and pass that
explicitly.
"""

import base64
import datetime as dt
import re
import traceback
from collections import OrderedDict
from collections.abc import Sequence
from typing import Any

import httpx

from oson.magic import UNDEFINED
from oson.registry import BucketDescriptor, TypeRegistry, ValueDescriptor


def _pad(values: Sequence[Any], size: int) -> list[Any]:
	padded = list(values[:size])
	padded.extend(UNDEFINED for _ in range(size - len(padded)))
	return padded


def _format_stack(exc: BaseException) -> str:
	return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


# Exceptions ------------------------------------------------------------------


def _exception_from(err: Exception) -> list[Any]:
	attrs = vars(err)
	name = attrs.get("name")
	if not isinstance(name, str):
		name = type(err).__name__
	if err.__traceback__ is not None:
		stack: Any = _format_stack(err)
	else:
		stack = attrs.get("stack", UNDEFINED)
		if not isinstance(stack, str):
			stack = UNDEFINED
	cause = err.__cause__
	if cause is None:
		cause = attrs.get("cause", UNDEFINED)
	return [name, str(err), stack, cause]


def _exception_hydrate(err: Exception, values: list[Any]) -> None:
	name, message, stack, cause = _pad(values, 4)
	err.args = (message,) if message else ()
	err.name = name  # pyright: ignore[reportAttributeAccessIssue]
	if stack is UNDEFINED:
		vars(err).pop("stack", None)
	else:
		err.stack = stack  # pyright: ignore[reportAttributeAccessIssue]
	if isinstance(cause, BaseException):
		err.__cause__ = cause
	elif cause is not UNDEFINED:
		err.cause = cause  # pyright: ignore[reportAttributeAccessIssue]


EXCEPTION_DESCRIPTOR: BucketDescriptor[Exception] = BucketDescriptor(
	decompose=_exception_from,
	stub=Exception,
	hydrate=_exception_hydrate,
)


# Binary data ----------------------------------------------------------------


def _b64encode(data: bytes | bytearray) -> str:
	return base64.b64encode(data).decode("ascii")


BYTES_DESCRIPTOR: ValueDescriptor[bytes] = ValueDescriptor(
	decompose=lambda data: [_b64encode(data)],
	create=lambda values: base64.b64decode(values[0]),
)

BYTEARRAY_DESCRIPTOR: ValueDescriptor[bytearray] = ValueDescriptor(
	decompose=lambda data: [_b64encode(data)],
	create=lambda values: bytearray(base64.b64decode(values[0])),
)


# Containers -----------------------------------------------------------------


def _ordered_dict_hydrate(mapping: OrderedDict[Any, Any], entries: list[Any]) -> None:
	for key, value in entries:
		mapping[key] = value


ORDERED_DICT_DESCRIPTOR: BucketDescriptor[OrderedDict[Any, Any]] = BucketDescriptor(
	decompose=lambda mapping: [[key, value] for key, value in mapping.items()],
	stub=OrderedDict,
	hydrate=_ordered_dict_hydrate,
)

SET_DESCRIPTOR: BucketDescriptor[set[Any]] = BucketDescriptor(
	decompose=list,
	stub=set,
	hydrate=lambda items, values: items.update(values),
)

FROZENSET_DESCRIPTOR: ValueDescriptor[frozenset[Any]] = ValueDescriptor(
	decompose=list,
	create=frozenset,
)

TUPLE_DESCRIPTOR: ValueDescriptor[tuple[Any, ...]] = ValueDescriptor(
	decompose=list,
	create=tuple,
)


# Dates ----------------------------------------------------------------------

DATETIME_DESCRIPTOR: ValueDescriptor[dt.datetime] = ValueDescriptor(
	decompose=lambda value: [value.isoformat()],
	create=lambda values: dt.datetime.fromisoformat(values[0]),
)

DATE_DESCRIPTOR: ValueDescriptor[dt.date] = ValueDescriptor(
	decompose=lambda value: [value.isoformat()],
	create=lambda values: dt.date.fromisoformat(values[0]),
)


# Patterns -------------------------------------------------------------------

# Same letters as Python's inline flags, e.g. (?im)
_PATTERN_FLAGS: tuple[tuple[str, re.RegexFlag], ...] = (
	("a", re.ASCII),
	("i", re.IGNORECASE),
	("L", re.LOCALE),
	("m", re.MULTILINE),
	("s", re.DOTALL),
	("x", re.VERBOSE),
)


def _pattern_from(pattern: re.Pattern[Any]) -> list[Any]:
	flags = "".join(letter for letter, flag in _PATTERN_FLAGS if pattern.flags & flag)
	if flags:
		return [pattern.pattern, flags]
	return [pattern.pattern]


def _pattern_create(values: list[Any]) -> re.Pattern[Any]:
	source, flags = _pad(values, 2)
	mask = 0
	if isinstance(flags, str):
		letters = dict(_PATTERN_FLAGS)
		for letter in flags:
			flag = letters.get(letter)
			if flag is None:
				raise ValueError(f"Unknown pattern flag {letter!r}")
			mask |= flag
	return re.compile(source, mask)


PATTERN_DESCRIPTOR: ValueDescriptor[re.Pattern[Any]] = ValueDescriptor(
	decompose=_pattern_from,
	create=_pattern_create,
)


# URLs -----------------------------------------------------------------------

URL_DESCRIPTOR: ValueDescriptor[httpx.URL] = ValueDescriptor(
	decompose=lambda url: [str(url)],
	create=lambda values: httpx.URL(values[0]),
)


def default_registry() -> TypeRegistry:
	"""Build a fresh registry holding the built-in descriptors.

	Order matters: it fixes the ordinal in every label, so encoder and
	decoder must build their registries the same way.
	"""
	return TypeRegistry(
		[
			(Exception, EXCEPTION_DESCRIPTOR),
			(bytes, BYTES_DESCRIPTOR),
			(OrderedDict, ORDERED_DICT_DESCRIPTOR),
			(set, SET_DESCRIPTOR),
			(dt.datetime, DATETIME_DESCRIPTOR),
			(re.Pattern, PATTERN_DESCRIPTOR),
			(httpx.URL, URL_DESCRIPTOR),
			(dt.date, DATE_DESCRIPTOR),
			(tuple, TUPLE_DESCRIPTOR),
			(frozenset, FROZENSET_DESCRIPTOR),
			(bytearray, BYTEARRAY_DESCRIPTOR),
		]
	)


DEFAULT_REGISTRY: TypeRegistry = default_registry()

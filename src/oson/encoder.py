"""List builder: flattens a value graph into OSON cells."""

from __future__ import annotations

import enum
import math
import types
from dataclasses import fields, is_dataclass
from typing import Any

from oson.document import (
	BIGINT_LABEL,
	PLAIN_OBJECT_LABEL,
	Oson,
	OsonValue,
	bigint_to_hex,
	is_safe_integer,
)
from oson.env import resolve_max_depth
from oson.errors import DepthLimitError, EncodeError
from oson.magic import HOLE_CODE, Hole, to_magic
from oson.registry import RegistryMatch, TypeRegistry

# Exact types encoded without consulting the registry
_JSON_TYPES: frozenset[type] = frozenset({type(None), bool, int, float, str, list})


def _primitive_key(value: Any) -> tuple[Any, ...]:
	# Keyed on type so True, 1 and 1.0 get separate cells
	if isinstance(value, float):
		return (float, value, math.copysign(1.0, value))
	return (type(value), value)


def _base_value(value: Any) -> Any:
	# Subclass instances such as IntEnum or StrEnum members reduce to the base value
	if type(value) in _JSON_TYPES:
		return value
	if isinstance(value, int):
		return int.__int__(value)
	if isinstance(value, float):
		return float.__float__(value)
	return str.__str__(value)


def _primitive_cell(value: Any) -> OsonValue:
	if isinstance(value, int) and not isinstance(value, bool):
		if not is_safe_integer(value):
			return [BIGINT_LABEL, bigint_to_hex(value)]
	return value


def _plain_entries(value: Any) -> list[tuple[Any, Any]] | None:
	if isinstance(value, dict):
		return list(value.items())
	if callable(value) or isinstance(value, (type, types.ModuleType)):
		return None
	# State of these lives outside their public attributes
	if isinstance(value, (enum.Enum, BaseException)):
		return None
	if is_dataclass(value):
		return [(f.name, getattr(value, f.name)) for f in fields(value)]
	if hasattr(value, "__dict__"):
		return [
			(key, entry) for key, entry in vars(value).items() if not key.startswith("_")
		]
	return None


def encode(
	value: Any,
	registry: TypeRegistry,
	*,
	max_depth: int | None = None,
) -> Oson:
	root_code = to_magic(value)
	if root_code is not None:
		return root_code
	if isinstance(value, Hole):
		raise EncodeError("HOLE is only valid as a list slot")

	limit = resolve_max_depth(max_depth)
	cells: list[OsonValue] = []
	seen_by_value: dict[tuple[Any, ...], int] = {}
	# The value is kept alongside its position so its id() cannot be reused
	# by a temporary created during the pass, such as an OrderedDict entry
	seen_by_id: dict[int, tuple[int, Any]] = {}
	depth = 0

	def add(value: Any) -> int:
		nonlocal depth
		code = to_magic(value)
		if code is not None:
			return code
		if isinstance(value, Hole):
			raise EncodeError("HOLE is only valid as a list slot")

		match: RegistryMatch | None = None
		if type(value) not in _JSON_TYPES:
			match = registry.nearest(type(value))

		if match is None and (value is None or isinstance(value, (str, int, float))):
			value = _base_value(value)
			key = _primitive_key(value)
			position = seen_by_value.get(key)
			if position is not None:
				return position
			position = len(cells)
			seen_by_value[key] = position
			cells.append(_primitive_cell(value))
			return position

		seen = seen_by_id.get(id(value))
		if seen is not None:
			return seen[0]

		depth += 1
		if depth > limit:
			raise DepthLimitError(limit)
		try:
			position = len(cells)
			# Index before recursing so children can refer back to this value
			seen_by_id[id(value)] = (position, value)

			if match is None and isinstance(value, list):
				array: list[int] = [HOLE_CODE] * len(value)
				cells.append(array)
				for i, item in enumerate(value):
					if not isinstance(item, Hole):
						array[i] = add(item)
				return position

			if match is not None:
				parts = list(match.descriptor.decompose(value))
				obj: list[Any] = [match.label]
				cells.append(obj)
				for part in parts:
					obj.append(add(part))
				return position

			entries = _plain_entries(value)
			if entries is None:
				raise EncodeError(
					f"Unsupported value in serialization: {type(value)!r}; "
					+ "register a descriptor for it"
				)
			obj = [PLAIN_OBJECT_LABEL]
			cells.append(obj)
			for key, entry in entries:
				obj.append(add(key))
				obj.append(add(entry))
			return position
		finally:
			depth -= 1

	add(value)
	return cells

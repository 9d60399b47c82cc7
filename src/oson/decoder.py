"""Recovery engine: rebuilds a value graph from OSON cells."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from oson.document import (
	PLAIN_OBJECT_LABEL,
	Oson,
	hex_to_bigint,
	is_oson_bigint,
	is_oson_object,
)
from oson.env import resolve_max_depth
from oson.errors import (
	DecodeError,
	DepthLimitError,
	MissingCapabilityError,
	OsonError,
	UnknownLabelError,
)
from oson.magic import HOLE, HOLE_CODE, from_magic
from oson.registry import BucketDescriptor, TypeRegistry, ValueDescriptor

logger = logging.getLogger(__name__)


def decode(
	document: Oson,
	registry: TypeRegistry,
	*,
	max_depth: int | None = None,
) -> Any:
	if not isinstance(document, list):
		scalar = from_magic(document)
		if scalar is not None:
			return scalar
		raise DecodeError(f"Invalid Oson: {document!r}")
	if not document:
		raise DecodeError("Empty Oson data")

	limit = resolve_max_depth(max_depth)
	cells = document
	resolved: dict[int, Any] = {}
	# Positions of value-type cells whose parts are still being recovered
	pending: set[int] = set()
	depth = 0

	def resolve_label(label: str):
		match = registry.lookup_by_label(label)
		if match is None:
			logger.debug(
				"Cannot resolve OSON label %r against %r", label, registry.labels()
			)
			raise UnknownLabelError(label)
		return match

	def build(position: int, label: str, step: Callable[..., Any], *args: Any) -> Any:
		# A failing descriptor callback means its parts are malformed
		try:
			return step(*args)
		except OsonError:
			raise
		except Exception as exc:
			raise DecodeError(
				f"Cannot rebuild {label!r} at position {position}: {exc}"
			) from exc

	def recover(position: Any) -> Any:
		nonlocal depth
		scalar = from_magic(position)
		if scalar is not None:
			return scalar
		if type(position) is not int or not 0 <= position < len(cells):
			raise DecodeError(f"Invalid Oson position: {position!r}")

		if position in resolved:
			return resolved[position]
		if position in pending:
			raise DecodeError(
				f"Cycle through value type at position {position}; "
				+ "only bucket types can reference themselves"
			)

		cell = cells[position]
		if cell is None or isinstance(cell, (str, int, float)):
			resolved[position] = cell
			return cell
		if not isinstance(cell, list):
			raise DecodeError(f"Invalid Oson cell at position {position}: {cell!r}")

		if is_oson_bigint(cell):
			digits = cell[1] if len(cell) > 1 else None
			if not isinstance(digits, str):
				raise DecodeError(f"Invalid bigint digits at position {position}")
			try:
				number = hex_to_bigint(digits)
			except ValueError:
				raise DecodeError(
					f"Invalid bigint digits at position {position}: {digits!r}"
				) from None
			resolved[position] = number
			return number

		depth += 1
		if depth > limit:
			raise DepthLimitError(limit)
		try:
			if is_oson_object(cell):
				return recover_object(position, cell[0], cell[1:])
			return recover_array(position, cell)
		finally:
			depth -= 1

	def recover_object(position: int, label: str, refs: list[Any]) -> Any:
		if label == PLAIN_OBJECT_LABEL:
			if len(refs) % 2 != 0:
				raise DecodeError(
					f"Plain object at position {position} has an unpaired key"
				)
			obj: dict[Any, Any] = {}
			resolved[position] = obj
			for i in range(0, len(refs), 2):
				key = recover(refs[i])
				obj[key] = recover(refs[i + 1])
			return obj

		match = resolve_label(label)
		descriptor = match.descriptor
		if isinstance(descriptor, BucketDescriptor):
			stub = build(position, label, descriptor.stub)
			resolved[position] = stub
			values = [recover(ref) for ref in refs]
			build(position, label, descriptor.hydrate, stub, values)
			return stub
		if isinstance(descriptor, ValueDescriptor):
			pending.add(position)
			try:
				values = [recover(ref) for ref in refs]
			finally:
				pending.discard(position)
			created = build(position, label, descriptor.create, values)
			resolved[position] = created
			return created
		raise MissingCapabilityError(
			f"Do not know how to create or hydrate object type: {label!r}"
		)

	def recover_array(position: int, refs: list[Any]) -> list[Any]:
		array: list[Any] = [HOLE] * len(refs)
		resolved[position] = array
		for i, ref in enumerate(refs):
			if ref != HOLE_CODE:
				array[i] = recover(ref)
		return array

	return recover(0)

"""OSON serializer entry points.

``serialize`` / ``deserialize`` work with the in-memory document (nested
lists of JSON primitives); ``dumps`` / ``loads`` add the JSON text codec on
top. Any JSON parser can read the text, but only ``loads`` restores shared
references, cycles, big integers, sparse lists and registered types.
"""

from __future__ import annotations

import json
from typing import Any

from oson.decoder import decode
from oson.defaults import DEFAULT_REGISTRY
from oson.document import Oson
from oson.encoder import encode
from oson.errors import DecodeError
from oson.registry import TypeRegistry

__all__ = [
	"serialize",
	"deserialize",
	"dumps",
	"loads",
]


def serialize(
	value: Any,
	registry: TypeRegistry | None = None,
	*,
	max_depth: int | None = None,
) -> Oson:
	"""Convert a value graph into an OSON document.

	Args:
		value: Any value built from primitives, lists, dicts, plain objects and
			instances of registered types. Shared references and cycles are
			allowed.
		registry: Type registry to consult for class instances. Defaults to
			``DEFAULT_REGISTRY``.
		max_depth: Nesting limit; defaults to ``OSON_MAX_DEPTH``.

	Raises:
		EncodeError: If the graph holds a value that cannot be encoded.
		DepthLimitError: If the graph nests deeper than ``max_depth``.
	"""
	return encode(value, _registry(registry), max_depth=max_depth)


def deserialize(
	document: Oson,
	registry: TypeRegistry | None = None,
	*,
	max_depth: int | None = None,
) -> Any:
	"""Rebuild a value graph from an OSON document.

	The registry must hold the same entries in the same order as the one used
	to serialize, since labels carry registry ordinals.

	Raises:
		DecodeError: If the document is malformed or names an unknown type.
		DepthLimitError: If the document nests deeper than ``max_depth``.
	"""
	return decode(document, _registry(registry), max_depth=max_depth)


def dumps(
	value: Any,
	registry: TypeRegistry | None = None,
	*,
	max_depth: int | None = None,
) -> str:
	document = serialize(value, registry, max_depth=max_depth)
	return json.dumps(document, separators=(",", ":"), allow_nan=False)


def loads(
	text: str | bytes,
	registry: TypeRegistry | None = None,
	*,
	max_depth: int | None = None,
) -> Any:
	try:
		document = json.loads(text)
	except (json.JSONDecodeError, UnicodeDecodeError) as exc:
		raise DecodeError(f"Invalid Oson text: {exc}") from exc
	return deserialize(document, registry, max_depth=max_depth)


def _registry(registry: TypeRegistry | None) -> TypeRegistry:
	return DEFAULT_REGISTRY if registry is None else registry

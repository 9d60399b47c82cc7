from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Generic, NamedTuple, TypeVar

from oson.errors import RegistrationError
from oson.magic import Hole, Undefined

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Handled structurally by the encoder; a registration would never be consulted
_NATIVE_TYPES: tuple[type, ...] = (
	type(None),
	bool,
	int,
	float,
	str,
	list,
	Undefined,
	Hole,
)


@dataclass(frozen=True, slots=True)
class ValueDescriptor(Generic[T]):
	"""Serializer for a type that is built in one step from resolved parts.

	``create`` only runs once every part is recovered, so a value type cannot
	sit on a reference cycle that leads back to itself.
	"""

	decompose: Callable[[T], Sequence[Any]]
	create: Callable[[list[Any]], T]


@dataclass(frozen=True, slots=True)
class BucketDescriptor(Generic[T]):
	"""Serializer for a container that is stubbed first and filled in place.

	The stub is visible to its own children while they are recovered, which
	is what lets a bucket contain a reference back to itself.
	"""

	decompose: Callable[[T], Sequence[Any]]
	stub: Callable[[], T]
	hydrate: Callable[[T, list[Any]], None]


Descriptor = ValueDescriptor[Any] | BucketDescriptor[Any]


class RegistryMatch(NamedTuple):
	cls: type
	descriptor: Descriptor
	label: str
	ordinal: int


def make_label(ordinal: int, cls: type) -> str:
	return f"{ordinal}:{cls.__name__}"


class TypeRegistry:
	"""Ordered mapping from classes to their descriptors.

	Iteration order is significant: an entry's position is its ordinal, and
	ordinals are part of every label written to a document. Decoding must use
	a registry with the same contents in the same order as the one used for
	encoding.

	The registry does no locking of its own.
	"""

	_entries: dict[type, Descriptor]
	_locked: bool

	def __init__(self, entries: Sequence[tuple[type, Descriptor]] = ()) -> None:
		self._entries = {}
		self._locked = False
		for cls, descriptor in entries:
			self.register(cls, descriptor)

	def register(self, cls: type[T], descriptor: Descriptor) -> None:
		if self._locked:
			raise RegistrationError("Type registry is locked")
		if not isinstance(cls, type):
			raise RegistrationError(f"Expected a class to register, got {cls!r}")
		if cls in _NATIVE_TYPES:
			raise RegistrationError(
				f"{cls.__name__!r} is encoded natively and cannot be registered"
			)
		_validate_descriptor(cls, descriptor)
		if cls in self._entries:
			logger.debug("Replacing OSON descriptor for %s", cls.__qualname__)
		else:
			logger.debug("Registering OSON descriptor for %s", cls.__qualname__)
		# Replacing keeps the original slot, so existing ordinals stay valid
		self._entries[cls] = descriptor

	def unregister(self, cls: type) -> Descriptor:
		if self._locked:
			raise RegistrationError("Type registry is locked")
		descriptor = self._entries.pop(cls, None)
		if descriptor is None:
			raise RegistrationError(f"{cls!r} is not registered")
		logger.debug("Unregistered OSON descriptor for %s", cls.__qualname__)
		return descriptor

	def lookup_by_type(self, cls: type) -> RegistryMatch | None:
		for ordinal, (key, descriptor) in enumerate(self._entries.items()):
			if key is cls:
				return RegistryMatch(key, descriptor, make_label(ordinal, key), ordinal)
		return None

	def lookup_by_label(self, label: str) -> RegistryMatch | None:
		if not isinstance(label, str):
			return None
		for ordinal, (key, descriptor) in enumerate(self._entries.items()):
			key_label = make_label(ordinal, key)
			if key_label == label:
				return RegistryMatch(key, descriptor, key_label, ordinal)
		return None

	def nearest(self, cls: type) -> RegistryMatch | None:
		"""Find the registered class closest to ``cls`` in its MRO.

		Distance is the index of the registered class in ``cls.__mro__``, so an
		exact registration always wins. Ties go to the earlier entry.
		"""
		mro = cls.__mro__
		result: RegistryMatch | None = None
		nearest_distance = len(mro)
		for ordinal, (key, descriptor) in enumerate(self._entries.items()):
			try:
				distance = mro.index(key)
			except ValueError:
				continue
			if distance < nearest_distance:
				result = RegistryMatch(key, descriptor, make_label(ordinal, key), ordinal)
				nearest_distance = distance
		return result

	def labels(self) -> list[str]:
		return [make_label(ordinal, cls) for ordinal, cls in enumerate(self._entries)]

	def copy(self) -> TypeRegistry:
		"""Return an unlocked registry with the same entries in the same order."""
		return TypeRegistry(list(self._entries.items()))

	def lock(self) -> None:
		self._locked = True

	@property
	def locked(self) -> bool:
		return self._locked

	def __contains__(self, cls: object) -> bool:
		return cls in self._entries

	def __iter__(self) -> Iterator[type]:
		return iter(self._entries)

	def __len__(self) -> int:
		return len(self._entries)

	def __repr__(self) -> str:
		return f"TypeRegistry({self.labels()!r})"


def _validate_descriptor(cls: type, descriptor: Any) -> None:
	if isinstance(descriptor, ValueDescriptor):
		required = ("decompose", "create")
	elif isinstance(descriptor, BucketDescriptor):
		required = ("decompose", "stub", "hydrate")
	else:
		raise RegistrationError(
			f"Descriptor for {cls.__name__!r} must be a ValueDescriptor or "
			+ f"BucketDescriptor, got {type(descriptor).__name__}"
		)
	for name in required:
		if not callable(getattr(descriptor, name)):
			raise RegistrationError(
				f"Descriptor for {cls.__name__!r} has a non-callable {name!r}"
			)
